"""
Pydantic schemas for bucket endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from app.models.bucket import BucketVisibility


class BucketCreate(BaseModel):
    """Schema for creating a bucket. The name is trimmed and lowercased."""
    name: str = Field(..., description="Bucket name (mixed case and surrounding spaces allowed)")

    class Config:
        json_schema_extra = {
            "example": {"name": "Photos"}
        }


class BucketSelect(BaseModel):
    """Schema for selecting the active bucket."""
    name: str = Field(..., description="Name of an existing bucket")


class BucketResponse(BaseModel):
    """Schema for bucket response."""
    name: str
    visibility: BucketVisibility

    class Config:
        from_attributes = True


class BucketListResponse(BaseModel):
    """Buckets ordered by name plus the current selection."""
    buckets: List[BucketResponse]
    selected: Optional[str] = None
