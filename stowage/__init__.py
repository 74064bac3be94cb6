"""
Stowage - move-or-copy decisions for file uploads

Sits between an upload pipeline and pluggable storage backends. When an
uploaded file is persisted, Stowage moves its bytes (zero-copy) if the
destination storage is configured for it and the backend can move that
particular file, and copies them otherwise.

Usage:
    >>> from stowage import StowageConfig, TransferRequest, TransferService
    >>>
    >>> config = StowageConfig(relocate_to=["cache"])
    >>> service = TransferService.from_config({"cache": cache, "store": store}, config)
    >>>
    >>> # Moved if the cache backend can move this file, copied (with a warning) otherwise
    >>> stored = service.transfer(temp_file, TransferRequest("cache", "ab12cd.jpg"))
    >>>
    >>> # Always copied: "store" isn't in relocate_to
    >>> stored = service.transfer(cached_file, TransferRequest("store", "ab12cd.jpg"))
"""

from stowage.core import (
    ConfigurationError,
    StowageConfig,
    StowageError,
    configure_default_logging,
    get_logger,
    set_logger,
)
from stowage.storage import (
    LocalFileSource,
    MovableStorage,
    RelocationPolicy,
    SourceObject,
    Storage,
    StorageDeleteError,
    StorageError,
    StorageNotFoundError,
    StorageWriteError,
    StoredFileSource,
    StoredReference,
    TransferError,
    TransferPlan,
    TransferRequest,
    TransferService,
    TransferStrategy,
    transfer_file,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "LocalFileSource",
    "MovableStorage",
    "RelocationPolicy",
    "SourceObject",
    "Storage",
    "StorageDeleteError",
    "StorageError",
    "StorageNotFoundError",
    "StorageWriteError",
    "StoredFileSource",
    "StoredReference",
    "StowageConfig",
    "StowageError",
    "TransferError",
    "TransferPlan",
    "TransferRequest",
    "TransferService",
    "TransferStrategy",
    "configure_default_logging",
    "get_logger",
    "set_logger",
    "transfer_file",
]
