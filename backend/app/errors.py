"""
Console exception hierarchy.

ValidationError covers user mistakes (nothing selected, nothing staged,
empty names). RemoteError covers anything the storage service rejected.
Neither is retried automatically.
"""
from typing import Optional


class ConsoleError(Exception):
    """Base exception for all console errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ConsoleError):
    """Raised when a console action is missing required input."""
    pass


class RemoteError(ConsoleError):
    """Raised when the storage service returns an error."""
    pass


class BucketAlreadyExistsError(RemoteError):
    """Raised by storage clients when a bucket name is taken."""
    pass


class StorageNotConfiguredError(RemoteError):
    """Raised when the storage backend has no endpoint or credentials."""
    pass
