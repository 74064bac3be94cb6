"""
Unified error hierarchy for storage transfers.

All storage-related exceptions inherit from StorageError,
providing consistent error handling across backends.
"""

from typing import Any


class StorageError(Exception):
    """
    Base exception for all storage operations.

    Backends and source handles raise subclasses of this exception,
    making it easy to catch storage-related errors.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class TransferError(StorageError):
    """
    Failed to persist a source object into a storage backend.

    Raised when:
    - The backend's copy failed
    - The backend's native move failed
    """

    def __init__(
        self,
        message: str = "Transfer failed",
        storage_key: str | None = None,
        location: str | None = None,
        **details,
    ):
        super().__init__(
            message,
            details={"storage_key": storage_key, "location": location, **details},
        )
        self.storage_key = storage_key
        self.location = location


class StorageWriteError(TransferError):
    """
    The backend could not write the object.

    Backends raise this from copy() or move(). The transfer service
    propagates it unchanged and never retries.
    """

    def __init__(
        self,
        message: str = "Storage write failed",
        storage_key: str | None = None,
        location: str | None = None,
        operation: str | None = None,  # "copy" or "move"
        **details,
    ):
        super().__init__(
            message,
            storage_key=storage_key,
            location=location,
            operation=operation,
            **details,
        )
        self.operation = operation


class StorageDeleteError(StorageError):
    """
    Failed to delete a source object after it was copied.

    The stored object is already valid when this happens, so the
    transfer service logs it instead of raising.
    """

    def __init__(
        self,
        message: str = "Failed to delete source object",
        source: str | None = None,
        **details,
    ):
        super().__init__(message, details={"source": source, **details})
        self.source = source


class NotFoundError(StorageError):
    """
    Requested item not found.

    Raised when:
    - A storage key has no registered backend
    - A stored object doesn't exist
    """

    def __init__(
        self,
        message: str = "Item not found",
        item_type: str | None = None,
        item_id: str | None = None,
        **details,
    ):
        super().__init__(
            message,
            details={"item_type": item_type, "item_id": item_id, **details},
        )
        self.item_type = item_type
        self.item_id = item_id


class StorageNotFoundError(NotFoundError):
    """No backend is registered under the requested storage key."""

    def __init__(self, storage_key: str, available: list[str] | None = None):
        super().__init__(
            f"Unknown storage: {storage_key!r}",
            item_type="storage",
            item_id=storage_key,
            available=sorted(available or []),
        )
        self.storage_key = storage_key
