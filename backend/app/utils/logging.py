"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- bucket
- key
- duration_ms

Usage:
    from app.utils.logging import configure_logging, log_bucket_created

    configure_logging('bucket-console', 'INFO')
    log_bucket_created(logger, bucket='photos')
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for docker logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    bucket: Optional[str] = None,
    key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        bucket: Optional bucket name
        key: Optional object key
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if bucket:
        extra["bucket"] = bucket
    if key:
        extra["key"] = key
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Bucket event functions

def log_bucket_created(
    logger: logging.Logger,
    bucket: str,
    already_existed: bool = False,
    **kwargs
):
    """
    Log bucket creation event.

    Args:
        logger: Logger instance
        bucket: Bucket name (required)
        already_existed: True when the create was a no-op on an existing bucket
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="bucket_created",
        bucket=bucket,
        already_existed=already_existed,
        **kwargs
    )
    logger.info(f"Bucket ready: {bucket}", extra=extra)


# Staging and upload event functions

def log_files_staged(
    logger: logging.Logger,
    count: int,
    source: str,
    **kwargs
):
    extra = _build_log_extra(event="files_staged", count=count, source=source, **kwargs)
    logger.info(f"Staged {count} file(s) from {source}", extra=extra)


def log_upload_completed(
    logger: logging.Logger,
    bucket: str,
    key: str,
    filename: str,
    size_bytes: Optional[int] = None,
    **kwargs
):
    """
    Log a successful single-file upload.

    Args:
        logger: Logger instance
        bucket: Target bucket (required)
        key: Generated object key (required)
        filename: Original file name (required)
        size_bytes: Optional payload size
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_completed",
        bucket=bucket,
        key=key,
        file_name=filename,
        **kwargs
    )
    if size_bytes is not None:
        extra["size_bytes"] = size_bytes

    logger.info(f"Uploaded {filename} → {bucket}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    bucket: str,
    filename: str,
    error: str,
    skipped: bool = False,
    **kwargs
):
    """
    Log a skipped or failed single-file upload.

    Skips are expected (non-image files) and logged at INFO; remote
    failures are logged at ERROR.
    """
    extra = _build_log_extra(
        event="upload_failed",
        bucket=bucket,
        file_name=filename,
        error=str(error),
        skipped=skipped,
        **kwargs
    )
    message = f"Upload failed: {filename} - {error}"
    if skipped:
        logger.info(message, extra=extra)
    else:
        logger.error(message, extra=extra)


def log_gallery_rendered(
    logger: logging.Logger,
    bucket: str,
    count: int,
    duration_ms: Optional[float] = None,
    fallbacks: int = 0,
    **kwargs
):
    """
    Log gallery render event.

    Args:
        logger: Logger instance
        bucket: Bucket name (required)
        count: Number of thumbnails rendered (required)
        duration_ms: Optional duration in milliseconds
        fallbacks: Number of objects that fell back to public URLs
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="gallery_rendered",
        bucket=bucket,
        duration_ms=duration_ms,
        count=count,
        fallbacks=fallbacks,
        **kwargs
    )
    logger.info(f"Gallery rendered for {bucket}: {count} file(s)", extra=extra)


# Storage event functions

def log_storage_failure(
    logger: logging.Logger,
    operation: str,
    error: str,
    bucket: Optional[str] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log storage service failure event.

    Args:
        logger: Logger instance
        operation: Console operation (list_buckets, create_bucket, load_gallery, ...) (required)
        error: Error message (required)
        bucket: Optional bucket name
        include_traceback: Whether to include stack trace (default: True)
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="storage_failure",
        bucket=bucket,
        operation=operation,
        error=str(error),
        **kwargs
    )

    message = f"Storage failure: {operation} - {error}"

    if include_traceback:
        exc_info = sys.exc_info()
        if exc_info[0] is not None:
            logger.error(message, extra=extra, exc_info=exc_info)
        else:
            logger.error(message, extra=extra)
    else:
        logger.error(message, extra=extra)


# Convenience alias
def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
