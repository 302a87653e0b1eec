"""
Storage capability interface.

The console only needs six operations from a storage service. Keeping the
interface this narrow lets the S3 adapter be swapped for the in-memory one
in tests and local development.
"""
from abc import ABC, abstractmethod
from typing import List

from app.models.bucket import Bucket
from app.models.media import StorageObject


class StorageClient(ABC):
    """Remote storage operations used by the console."""

    @abstractmethod
    def list_buckets(self) -> List[Bucket]:
        """
        List all buckets visible to the privileged credentials.

        Raises:
            RemoteError: If the listing fails
        """

    @abstractmethod
    def create_bucket(self, name: str, public: bool = False, file_size_limit: str = "50MB") -> Bucket:
        """
        Create a bucket.

        Args:
            name: Bucket name (already normalized by the caller)
            public: Whether objects are publicly readable
            file_size_limit: Maximum object size policy, e.g. "50MB"

        Raises:
            BucketAlreadyExistsError: If the name is taken
            RemoteError: For any other failure
        """

    @abstractmethod
    def list_objects(
        self,
        bucket: str,
        prefix: str = "",
        limit: int = 1000,
        sort_by: str = "name",
    ) -> List[StorageObject]:
        """
        List entries directly under prefix, folders included (keys ending in "/").

        Raises:
            RemoteError: If the listing fails
        """

    @abstractmethod
    def create_signed_url(self, bucket: str, path: str, expires_in: int = 3600) -> str:
        """
        Create a time-limited read URL for an object.

        Raises:
            RemoteError: If signing fails
        """

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str:
        """Build the unsigned URL of an object. Only works for public buckets."""

    @abstractmethod
    def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: str = "max-age=3600",
        overwrite: bool = False,
    ) -> str:
        """
        Store an object and return its key.

        Raises:
            RemoteError: If the upload fails, or the key exists and overwrite is False
        """
