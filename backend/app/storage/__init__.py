"""
Storage module: capability interface plus S3 and in-memory implementations.

Everything outside this package talks to storage through StorageClient.
"""
import logging
from typing import Optional

from app.config import settings
from app.storage.base import StorageClient
from app.storage.memory import InMemoryStorageClient
from app.storage.s3_client import S3StorageClient

logger = logging.getLogger(__name__)

# Singleton instance
_storage_client: Optional[StorageClient] = None


def build_storage_client() -> StorageClient:
    """Create the client selected by STORAGE_BACKEND."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory storage backend")
        return InMemoryStorageClient()
    if backend != "s3":
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
    return S3StorageClient(
        endpoint=settings.storage_endpoint,
        access_key=settings.storage_access_key,
        secret_key=settings.storage_secret_key,
        region=settings.storage_region,
        public_url=settings.storage_public_url,
    )


def get_storage_client() -> StorageClient:
    """
    Get the singleton storage client instance.

    Returns:
        StorageClient (S3 client may or may not be configured)
    """
    global _storage_client
    if _storage_client is None:
        _storage_client = build_storage_client()
    return _storage_client


__all__ = [
    "StorageClient",
    "S3StorageClient",
    "InMemoryStorageClient",
    "build_storage_client",
    "get_storage_client",
]
