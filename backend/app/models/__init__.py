"""
Console domain models.
"""
from app.models.bucket import Bucket, BucketVisibility
from app.models.gallery import Gallery, Thumbnail
from app.models.media import StagedFile, StagedSet, StagingSource, StorageObject
from app.models.upload import UploadBatchResult, UploadOutcome, UploadResult

__all__ = [
    "Bucket",
    "BucketVisibility",
    "Gallery",
    "StagedFile",
    "StagedSet",
    "StagingSource",
    "StorageObject",
    "Thumbnail",
    "UploadBatchResult",
    "UploadOutcome",
    "UploadResult",
]
