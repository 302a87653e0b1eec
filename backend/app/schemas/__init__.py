"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.bucket import (
    BucketCreate,
    BucketSelect,
    BucketResponse,
    BucketListResponse,
)
from app.schemas.upload import (
    StagedFileResponse,
    StagedSetResponse,
    UploadResultResponse,
    UploadBatchResponse,
)
from app.schemas.gallery import (
    ThumbnailResponse,
    GalleryResponse,
    LightboxOpen,
    LightboxBackdropClick,
    LightboxKeyPress,
    LightboxResponse,
)
from app.schemas.console import (
    StatusResponse,
    LogEntryResponse,
    ConsoleStatusResponse,
)

__all__ = [
    "BucketCreate",
    "BucketSelect",
    "BucketResponse",
    "BucketListResponse",
    "StagedFileResponse",
    "StagedSetResponse",
    "UploadResultResponse",
    "UploadBatchResponse",
    "ThumbnailResponse",
    "GalleryResponse",
    "LightboxOpen",
    "LightboxBackdropClick",
    "LightboxKeyPress",
    "LightboxResponse",
    "StatusResponse",
    "LogEntryResponse",
    "ConsoleStatusResponse",
]
