"""
Gallery render output.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

NO_BUCKET_MESSAGE = "Select a bucket, then click 'Load gallery'."
EMPTY_BUCKET_MESSAGE = "No images in this bucket yet."


@dataclass(frozen=True)
class Thumbnail:
    """One gallery item. Clicking it opens the lightbox with (url, caption)."""
    key: str
    url: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None

    @property
    def caption(self) -> str:
        return self.key


@dataclass
class Gallery:
    bucket: Optional[str]
    thumbnails: List[Thumbnail] = field(default_factory=list)
    empty_message: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.thumbnails)

    @property
    def is_empty(self) -> bool:
        return not self.thumbnails
