"""
Pydantic schemas for staging and upload endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from app.models.media import StagingSource
from app.models.upload import UploadOutcome


class StagedFileResponse(BaseModel):
    """A staged file, without its bytes."""
    filename: str
    content_type: str
    size: int

    class Config:
        from_attributes = True


class StagedSetResponse(BaseModel):
    """Schema for the current staged set."""
    files: List[StagedFileResponse]
    source: Optional[StagingSource] = None
    count: int
    message: str = Field(..., description="Status text, e.g. '2 file(s) staged for upload'")


class UploadResultResponse(BaseModel):
    """Outcome of one staged file."""
    filename: str
    content_type: str
    outcome: UploadOutcome
    key: Optional[str] = None
    error: Optional[str] = None

    class Config:
        from_attributes = True


class UploadBatchResponse(BaseModel):
    """Schema for an upload attempt. Results follow staged-file order."""
    bucket: str
    results: List[UploadResultResponse]
    uploaded: int
    skipped: int
    failed: int
    success: bool
    message: str
    studio_url: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "bucket": "photos",
                "results": [
                    {"filename": "cat.png", "content_type": "image/png", "outcome": "uploaded",
                     "key": "1718000000000-cat.png", "error": None},
                    {"filename": "notes.txt", "content_type": "text/plain", "outcome": "skipped",
                     "key": None, "error": "Skipping non-image: notes.txt"},
                ],
                "uploaded": 1,
                "skipped": 1,
                "failed": 0,
                "success": True,
                "message": "Uploaded 1 file(s) to photos",
                "studio_url": None,
            }
        }
