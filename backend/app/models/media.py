"""
Staged files and stored objects.

Lifecycle:
1. User picks or drops files -> StagedSet replaces the previous one
2. Upload workflow consumes the StagedSet -> one UploadResult per file
3. Console clears the StagedSet after the attempt
4. Gallery lists StorageObject entries straight from the bucket
"""
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


class StagingSource(str, enum.Enum):
    """Where a staged set came from."""
    PICKER = "picker"
    DROP = "drop"


@dataclass(frozen=True)
class StagedFile:
    """
    A file selected or dropped by the user, awaiting upload.

    Attributes:
        filename: Original file name as provided by the browser
        content_type: Declared MIME type
        data: File bytes
    """
    filename: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StagedSet:
    """Immutable set of staged files. Staging always replaces, never merges."""
    files: Tuple[StagedFile, ...] = ()
    source: Optional[StagingSource] = None

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)

    @property
    def is_empty(self) -> bool:
        return not self.files


@dataclass(frozen=True)
class StorageObject:
    """
    Object entry from a bucket listing.

    Attributes:
        key: Object path in the bucket (folders end with "/")
        size: Size in bytes (None for folders)
        last_modified: Last modification time (None for folders)
    """
    key: str
    size: Optional[int] = None
    last_modified: Optional[datetime] = None

    @property
    def is_folder(self) -> bool:
        return self.key.endswith("/")
