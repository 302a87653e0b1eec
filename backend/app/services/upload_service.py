"""
Upload workflow.

Pushes a staged set to one bucket, one file at a time, and reports an
outcome per file. A bad file never aborts the batch.

Flow per staged file:
1. Non-image MIME type -> skipped, no remote call
2. Generate key "<timestamp-ms>-<name>" with whitespace runs as "_"
3. Upload with no-overwrite and a one hour cache directive
4. Remote error -> failed outcome, continue with the next file
"""
import logging
import re
import threading
import time
from typing import Callable, Optional

from app.errors import RemoteError, ValidationError
from app.models.media import StagedFile, StagedSet
from app.models.upload import UploadBatchResult, UploadOutcome, UploadResult
from app.storage.base import StorageClient
from app.utils.logging import log_upload_completed, log_upload_failed
from app.utils.metrics import upload_bytes_total, uploads_total

logger = logging.getLogger(__name__)

# Accepted image MIME types
IMAGE_CONTENT_TYPES = frozenset([
    'image/png',
    'image/jpeg',
    'image/jpg',
    'image/gif',
    'image/webp',
])

WHITESPACE_RUN = re.compile(r"\s+")


def is_image(content_type: Optional[str]) -> bool:
    return (content_type or "").lower() in IMAGE_CONTENT_TYPES


def _now_ms() -> int:
    return int(time.time() * 1000)


class ObjectKeyGenerator:
    """
    Generates "<timestamp-ms>-<name>" keys.

    Timestamps are strictly increasing per generator, so two files with
    the same name in one batch never get the same key.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_timestamp(self) -> int:
        with self._lock:
            stamp = max(self._clock(), self._last + 1)
            self._last = stamp
            return stamp

    def generate(self, filename: str) -> str:
        return WHITESPACE_RUN.sub("_", f"{self.next_timestamp()}-{filename}")


class UploadService:
    """Uploads staged files to a bucket and collects per-file outcomes."""

    def __init__(
        self,
        storage: StorageClient,
        key_generator: Optional[ObjectKeyGenerator] = None,
        cache_max_age: int = 3600,
    ):
        self._storage = storage
        self._keys = key_generator or ObjectKeyGenerator()
        self._cache_control = f"max-age={cache_max_age}"

    def upload(self, bucket: Optional[str], staged: StagedSet) -> UploadBatchResult:
        """
        Upload every staged file to bucket, sequentially and in order.

        Args:
            bucket: Target bucket name
            staged: Files to upload

        Returns:
            UploadBatchResult with one UploadResult per staged file

        Raises:
            ValidationError: If bucket is unset or nothing is staged
        """
        if not bucket:
            raise ValidationError("Pick a bucket first.")
        if staged is None or staged.is_empty:
            raise ValidationError("Choose or drop one or more images.")

        batch = UploadBatchResult(bucket=bucket)
        for staged_file in staged:
            result = self._upload_one(bucket, staged_file)
            uploads_total.labels(outcome=result.outcome.value).inc()
            batch.results.append(result)

        logger.info(
            f"Upload batch to {bucket}: {len(batch.uploaded)} uploaded, "
            f"{len(batch.skipped)} skipped, {len(batch.failed)} failed"
        )
        return batch

    def _upload_one(self, bucket: str, staged_file: StagedFile) -> UploadResult:
        if not is_image(staged_file.content_type):
            error = f"Skipping non-image: {staged_file.filename}"
            log_upload_failed(logger, bucket=bucket, filename=staged_file.filename, error=error, skipped=True)
            return UploadResult(
                filename=staged_file.filename,
                content_type=staged_file.content_type,
                outcome=UploadOutcome.SKIPPED,
                error=error,
            )

        key = self._keys.generate(staged_file.filename)
        try:
            self._storage.upload(
                bucket,
                key,
                staged_file.data,
                content_type=staged_file.content_type,
                cache_control=self._cache_control,
                overwrite=False,
            )
        except RemoteError as e:
            log_upload_failed(logger, bucket=bucket, filename=staged_file.filename, error=e.message, key=key)
            return UploadResult(
                filename=staged_file.filename,
                content_type=staged_file.content_type,
                outcome=UploadOutcome.FAILED,
                key=key,
                error=e.message,
            )

        upload_bytes_total.inc(staged_file.size)
        log_upload_completed(logger, bucket=bucket, key=key, filename=staged_file.filename, size_bytes=staged_file.size)
        return UploadResult(
            filename=staged_file.filename,
            content_type=staged_file.content_type,
            outcome=UploadOutcome.UPLOADED,
            key=key,
        )
