"""
Bucket model.

Buckets come from the storage service listing or from an explicit create.
The console never mutates or deletes them.
"""
import enum
from dataclasses import dataclass


class BucketVisibility(str, enum.Enum):
    """Whether objects in a bucket are readable without a signed URL."""
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Bucket:
    """
    Storage bucket as seen by the console.

    Attributes:
        name: Unique, lowercase bucket name
        visibility: public or private
    """
    name: str
    visibility: BucketVisibility = BucketVisibility.PRIVATE
