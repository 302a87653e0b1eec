"""
Pydantic schemas for gallery and lightbox endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ThumbnailResponse(BaseModel):
    """Gallery item. Open the lightbox with (url, caption)."""
    key: str
    url: str
    caption: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None

    class Config:
        from_attributes = True


class GalleryResponse(BaseModel):
    """Schema for gallery response."""
    bucket: Optional[str] = None
    thumbnails: List[ThumbnailResponse]
    count: int
    empty_message: Optional[str] = None
    studio_url: Optional[str] = None


class LightboxOpen(BaseModel):
    url: str = Field(..., description="Resolved image URL")
    caption: str = Field("", description="Caption, normally the object key")


class LightboxBackdropClick(BaseModel):
    target_is_backdrop: bool = Field(..., description="True when the click landed on the backdrop itself")


class LightboxKeyPress(BaseModel):
    key: str = Field(..., description="KeyboardEvent.key value, e.g. 'Escape'")


class LightboxResponse(BaseModel):
    is_open: bool
    image_url: str
    caption: str

    class Config:
        from_attributes = True
