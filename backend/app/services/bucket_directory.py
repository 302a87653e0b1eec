"""
Bucket directory: cached bucket list plus the single selected bucket.
"""
import logging
import re
import threading
from typing import List, Optional

from app.errors import BucketAlreadyExistsError, RemoteError, ValidationError
from app.models.bucket import Bucket
from app.storage.base import StorageClient
from app.utils.logging import log_bucket_created
from app.utils.metrics import buckets_created_total

logger = logging.getLogger(__name__)

ALREADY_EXISTS_PATTERN = re.compile(r"already exists", re.IGNORECASE)


def normalize_bucket_name(name: Optional[str]) -> str:
    """Trim and lowercase a user-entered bucket name."""
    return (name or "").strip().lower()


class BucketDirectory:
    """
    Fetches and caches the available buckets and tracks the selection.

    At most one bucket is selected at a time. Refresh keeps the current
    selection while the bucket still exists, otherwise falls back to the
    first bucket by name.
    """

    def __init__(self, storage: StorageClient, file_size_limit: str = "50MB"):
        self._storage = storage
        self._file_size_limit = file_size_limit
        self._buckets: List[Bucket] = []
        self._selected: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def buckets(self) -> List[Bucket]:
        return list(self._buckets)

    @property
    def selected(self) -> Optional[str]:
        return self._selected

    def refresh(self, default_name: Optional[str] = None) -> List[Bucket]:
        """
        Reload buckets from storage, ordered by name.

        Args:
            default_name: Bucket to select if present (overrides the current selection)

        Raises:
            RemoteError: If the storage listing fails
        """
        buckets = sorted(self._storage.list_buckets(), key=lambda b: b.name)
        names = {b.name for b in buckets}

        with self._lock:
            self._buckets = buckets
            if default_name and default_name in names:
                self._selected = default_name
            elif self._selected not in names:
                self._selected = buckets[0].name if buckets else None

        logger.debug(f"Bucket directory refreshed: {len(buckets)} bucket(s), selected={self._selected}")
        return list(buckets)

    def ping(self) -> int:
        """
        List buckets without touching the cache or the selection.

        Returns:
            Number of buckets visible to the console

        Raises:
            RemoteError: If storage is unreachable or rejects the credentials
        """
        return len(self._storage.list_buckets())

    def select(self, name: str) -> str:
        name = normalize_bucket_name(name)
        if not name:
            raise ValidationError("Pick a bucket first.")
        with self._lock:
            if name not in {b.name for b in self._buckets}:
                raise ValidationError(f"Unknown bucket: {name}", {"bucket": name})
            self._selected = name
        return name

    def create(self, name: str) -> Bucket:
        """
        Create a private bucket, then refresh and select it.

        Creating a bucket that already exists counts as success.

        Raises:
            ValidationError: If the normalized name is empty
            RemoteError: For any storage failure other than "already exists",
                or when the bucket is missing from the refreshed listing
        """
        name = normalize_bucket_name(name)
        if not name:
            raise ValidationError("Enter a bucket name first.")

        already_existed = False
        try:
            self._storage.create_bucket(name, public=False, file_size_limit=self._file_size_limit)
        except BucketAlreadyExistsError:
            already_existed = True
        except RemoteError as e:
            if not ALREADY_EXISTS_PATTERN.search(e.message):
                raise
            already_existed = True

        buckets_created_total.labels(result="already_exists" if already_existed else "created").inc()
        log_bucket_created(logger, bucket=name, already_existed=already_existed)

        self.refresh(default_name=name)
        bucket = next((b for b in self._buckets if b.name == name), None)
        if bucket is None:
            # Name taken by someone we cannot list (e.g. another account)
            raise RemoteError(f"Bucket not accessible: {name}", {"bucket": name})
        return bucket
