"""
Stowage Storage Core Module.

Provides shared infrastructure for transfers into storage backends:
- Error hierarchy
- Storage and source capability interfaces
- Stored object references

Usage:
    from stowage.storage.core import (
        # Errors
        StorageError,
        StorageWriteError,
        StorageDeleteError,
        TransferError,

        # Interfaces
        Storage,
        MovableStorage,
        SourceObject,
        StoredReference,
        is_movable,
    )
"""

from .base import (
    MovableStorage,
    SourceObject,
    Storage,
    StoredReference,
    is_deletable,
    is_movable,
)
from .errors import (
    NotFoundError,
    StorageDeleteError,
    StorageError,
    StorageNotFoundError,
    StorageWriteError,
    TransferError,
)

__all__ = [
    # Interfaces
    "MovableStorage",
    "NotFoundError",
    "SourceObject",
    "Storage",
    "StorageDeleteError",
    # Errors
    "StorageError",
    "StorageNotFoundError",
    "StorageWriteError",
    "StoredReference",
    "TransferError",
    "is_deletable",
    "is_movable",
]
