"""
Storage transfer layer

Decides whether uploaded files are moved or copied into pluggable storage
backends. Backends themselves are provided by the application.

Quick Start:
    >>> from stowage.storage import LocalFileSource, TransferRequest, TransferService
    >>>
    >>> service = TransferService({"store": store}, policy=["store"])
    >>> stored = service.transfer(
    ...     LocalFileSource("/tmp/upload-1234"),
    ...     TransferRequest("store", "photos/1234.jpg", {"mime_type": "image/jpeg"}),
    ... )
"""

from .core import (
    MovableStorage,
    NotFoundError,
    SourceObject,
    Storage,
    StorageDeleteError,
    StorageError,
    StorageNotFoundError,
    StorageWriteError,
    StoredReference,
    TransferError,
    is_deletable,
    is_movable,
)
from .sources import LocalFileSource, StoredFileSource
from .transfer import (
    RelocationPolicy,
    TransferPlan,
    TransferRequest,
    TransferService,
    TransferStrategy,
    transfer_file,
)

__all__ = [
    # Transfer (recommended API)
    "TransferService",
    "TransferRequest",
    "TransferPlan",
    "TransferStrategy",
    "RelocationPolicy",
    "transfer_file",

    # Interfaces
    "Storage",
    "MovableStorage",
    "SourceObject",
    "StoredReference",
    "is_movable",
    "is_deletable",

    # Sources
    "LocalFileSource",
    "StoredFileSource",

    # Exceptions
    "StorageError",
    "TransferError",
    "StorageWriteError",
    "StorageDeleteError",
    "NotFoundError",
    "StorageNotFoundError",
]
