"""
Source handles for objects waiting to be stored.

Two kinds of source come out of an upload pipeline:

- LocalFileSource: a file on the local filesystem, typically a temp file
  created while receiving the upload.
- StoredFileSource: an object that already lives in a storage backend,
  e.g. a cached upload being promoted to permanent storage.

Both implement the SourceObject capability interface (is_deletable/delete).
Their repr() is the description used in operator-facing logs.
"""

import os
from pathlib import Path
from typing import IO, Any

from stowage.core.logger import get_logger
from stowage.storage.core import StorageDeleteError, StorageError

logger = get_logger(__name__)


class LocalFileSource:
    """
    Handle to a local file.

    Example:
        >>> source = LocalFileSource("/tmp/upload-1234")
        >>> with source.open() as f:
        ...     data = f.read()
        >>> source.delete()
    """

    def __init__(self, path: str | os.PathLike, deletable: bool = True):
        """
        Args:
            path: Path of the file
            deletable: Whether the file may be removed once it has been copied
        """
        self.path = Path(path)
        self.deletable = deletable
        self._deleted = False

    def __repr__(self) -> str:
        return f"<LocalFileSource path={str(self.path)!r}>"

    def open(self, mode: str = "rb") -> IO[Any]:
        """Open the underlying file."""
        return self.path.open(mode)

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def is_deleted(self) -> bool:
        return self._deleted or not self.path.exists()

    def is_deletable(self) -> bool:
        return self.deletable

    def delete(self) -> None:
        """
        Remove the file. A file that is already gone counts as deleted.

        Raises:
            StorageDeleteError: If the file exists but can't be removed
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageDeleteError(
                f"Failed to delete {self.path}: {e}",
                source=repr(self),
            ) from e

        self._deleted = True
        logger.debug(f"Deleted local source {self.path}")


class StoredFileSource:
    """
    Handle to an object already held by a storage backend.

    Deleting it goes through the owning backend's delete(location). Backends
    without a delete() produce non-deletable sources.

    Example:
        >>> cached = StoredFileSource(cache_storage, "cache", "ab12cd.jpg")
        >>> service.transfer(cached, TransferRequest("store", "photos/ab12cd.jpg"))
    """

    def __init__(
        self,
        storage: Any,
        storage_key: str,
        location: str,
        deletable: bool = True,
    ):
        """
        Args:
            storage: Backend currently holding the object
            storage_key: Identifier of that backend
            location: Location of the object inside the backend
            deletable: Whether the object may be removed once it has been copied
        """
        self.storage = storage
        self.storage_key = storage_key
        self.location = location
        self.deletable = deletable

    def __repr__(self) -> str:
        return f"<StoredFileSource storage={self.storage_key!r} id={self.location!r}>"

    def is_deletable(self) -> bool:
        return self.deletable and callable(getattr(self.storage, "delete", None))

    def delete(self) -> None:
        """
        Delete the object from its backend.

        Raises:
            StorageDeleteError: If the backend could not delete it
        """
        if not callable(getattr(self.storage, "delete", None)):
            msg = f"Storage {self.storage_key!r} does not support deletion"
            raise StorageDeleteError(msg, source=repr(self))

        try:
            self.storage.delete(self.location)
        except StorageDeleteError:
            raise
        except (StorageError, OSError) as e:
            raise StorageDeleteError(
                f"Failed to delete {self.location} from {self.storage_key!r}: {e}",
                source=repr(self),
            ) from e
