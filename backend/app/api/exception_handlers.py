"""FastAPI exception handlers for console errors."""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.errors import ConsoleError, RemoteError, ValidationError

logger = logging.getLogger(__name__)


async def console_exception_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    """Map console exceptions to HTTP responses."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, RemoteError):
        status_code = status.HTTP_502_BAD_GATEWAY

    logger.warning(
        f"Console error on {request.url.path}: {type(exc).__name__} - {exc.message}",
        extra={"event": "console_error", "error_type": type(exc).__name__, "details": exc.details},
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )
