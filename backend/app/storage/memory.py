"""
In-memory storage client.

Used by the test suite and by STORAGE_BACKEND=memory for running the
console without a storage service. Enforces the same rules the remote
service does: unique bucket names, per-bucket size limits, no-overwrite
uploads.
"""
import re
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional
from urllib.parse import quote

from app.errors import BucketAlreadyExistsError, RemoteError
from app.models.bucket import Bucket, BucketVisibility
from app.models.media import StorageObject
from app.storage.base import StorageClient

SIZE_UNITS = {"": 1, "B": 1, "KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}


def parse_size_limit(limit: str) -> int:
    """Parse a size policy like "50MB" into bytes."""
    match = re.fullmatch(r"\s*(\d+)\s*([KMG]?B?)\s*", limit.upper())
    if not match:
        raise ValueError(f"Invalid size limit: {limit!r}")
    return int(match.group(1)) * SIZE_UNITS[match.group(2)]


@dataclass
class _StoredObject:
    data: bytes
    content_type: str
    cache_control: str
    last_modified: datetime


@dataclass
class _StoredBucket:
    bucket: Bucket
    size_limit: int
    objects: Dict[str, _StoredObject] = field(default_factory=dict)


class InMemoryStorageClient(StorageClient):
    """StorageClient that keeps buckets and objects in process memory."""

    def __init__(self, base_url: str = "memory://storage"):
        self._base_url = base_url.rstrip("/")
        self._buckets: Dict[str, _StoredBucket] = {}
        self._lock = threading.Lock()

    def _get(self, bucket: str) -> _StoredBucket:
        stored = self._buckets.get(bucket)
        if stored is None:
            raise RemoteError(f"Bucket not found: {bucket}", {"bucket": bucket})
        return stored

    def list_buckets(self) -> List[Bucket]:
        with self._lock:
            return [stored.bucket for stored in self._buckets.values()]

    def create_bucket(self, name: str, public: bool = False, file_size_limit: str = "50MB") -> Bucket:
        with self._lock:
            if name in self._buckets:
                raise BucketAlreadyExistsError(f"The resource already exists: {name}", {"bucket": name})
            bucket = Bucket(
                name=name,
                visibility=BucketVisibility.PUBLIC if public else BucketVisibility.PRIVATE,
            )
            self._buckets[name] = _StoredBucket(bucket=bucket, size_limit=parse_size_limit(file_size_limit))
            return bucket

    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        limit: int = 1000,
        sort_by: str = "name",
    ) -> List[StorageObject]:
        with self._lock:
            stored = self._get(bucket)
            entries: Dict[str, StorageObject] = {}
            for key, obj in stored.objects.items():
                if not key.startswith(prefix):
                    continue
                rest = key[len(prefix):]
                if "/" in rest:
                    folder = rest.split("/", 1)[0] + "/"
                    entries[folder] = StorageObject(key=folder)
                else:
                    entries[rest] = StorageObject(key=rest, size=len(obj.data), last_modified=obj.last_modified)

        objects = list(entries.values())
        if sort_by == "last_modified":
            objects.sort(key=lambda o: (o.last_modified is None, o.last_modified, o.key))
        else:
            objects.sort(key=lambda o: o.key)
        return objects[:limit]

    def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        with self._lock:
            stored = self._get(bucket)
            if path not in stored.objects:
                raise RemoteError(f"Object not found: {path}", {"bucket": bucket, "path": path})
        return f"{self._base_url}/sign/{quote(bucket)}/{quote(path)}?expires_in={expires_in}"

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self._base_url}/public/{quote(bucket)}/{quote(path)}"

    def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: str = "max-age=3600",
        overwrite: bool = False,
    ) -> str:
        with self._lock:
            stored = self._get(bucket)
            if not overwrite and key in stored.objects:
                raise RemoteError(f"The resource already exists: {key}", {"bucket": bucket, "key": key})
            if len(data) > stored.size_limit:
                raise RemoteError(
                    "The object exceeded the maximum allowed size",
                    {"bucket": bucket, "key": key, "size": str(len(data))},
                )
            stored.objects[key] = _StoredObject(
                data=data,
                content_type=content_type,
                cache_control=cache_control,
                last_modified=datetime.now(timezone.utc),
            )
        return key

    def get_object(self, bucket: str, key: str) -> Optional[bytes]:
        """Read back stored bytes (test and local-dev helper)."""
        with self._lock:
            stored = self._buckets.get(bucket)
            if stored is None or key not in stored.objects:
                return None
            return stored.objects[key].data
