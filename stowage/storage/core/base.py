"""
Storage and source capability interfaces.

A storage backend always knows how to copy a source object to a location.
Some backends can also move it, which avoids duplicating the bytes. Whether
a move is possible depends on the concrete source and location, so movable
backends answer that question per pair through can_move().

Backends may subclass Storage / MovableStorage, or simply provide the same
methods (duck typing). Use is_movable() to probe either kind.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class StoredReference:
    """
    Reference to an object written to a storage backend.

    Attributes:
        storage_key: Identifier of the backend holding the object
        location: Location of the object inside the backend
        metadata: Metadata the object was written with
    """

    storage_key: str
    location: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "storage": self.storage_key,
            "id": self.location,
            "metadata": dict(self.metadata),
        }


@runtime_checkable
class SourceObject(Protocol):
    """
    Protocol for objects waiting to be stored.

    A source is either a transient local resource (e.g. a temp file)
    or an object already stored in another backend.
    """

    def is_deletable(self) -> bool:
        """Whether delete() may be called once the source has been copied."""
        ...

    def delete(self) -> None:
        """
        Delete the source.

        Raises:
            StorageDeleteError: If the source could not be deleted
        """
        ...


class Storage(ABC):
    """
    Abstract base class for storage backends.

    Subclasses must implement:
    - copy()

    Backends that can relocate bytes without duplicating them should
    subclass MovableStorage instead.
    """

    @abstractmethod
    def copy(
        self,
        source: Any,
        location: str,
        metadata: Mapping[str, Any],
    ) -> StoredReference:
        """
        Write a copy of the source to the given location.

        Args:
            source: Source object to read from
            location: Destination location inside this backend
            metadata: Metadata to store with the object

        Returns:
            Reference to the stored object

        Raises:
            StorageWriteError: If the object could not be written
        """

    def can_move(self, source: Any, location: str) -> bool:
        """Whether this backend can move the source to the location (no I/O)."""
        return False


class MovableStorage(Storage):
    """
    Storage backend that supports native moves.

    A backend implementing move() usually still can't move everything:
    cross-backend or cross-filesystem moves are typically infeasible, so
    can_move() must answer for the specific (source, location) pair.
    """

    @abstractmethod
    def can_move(self, source: Any, location: str) -> bool:
        """
        Check whether move() would succeed for this pair.

        Must not perform I/O.
        """

    @abstractmethod
    def move(
        self,
        source: Any,
        location: str,
        metadata: Mapping[str, Any],
    ) -> StoredReference:
        """
        Relocate the source's bytes to the given location.

        The destination must end up exactly as copy() would have left it,
        including any transformation applied on write. The source is
        consumed afterwards.

        Raises:
            StorageWriteError: If the object could not be moved
        """


def is_movable(storage: Any, source: Any, location: str) -> bool:
    """
    Check whether a storage backend can move the source to the location.

    A backend without a callable move() or without a can_move() predicate
    is never movable.
    """
    if not callable(getattr(storage, "move", None)):
        return False

    can_move = getattr(storage, "can_move", None)
    if not callable(can_move):
        return False

    return bool(can_move(source, location))


def is_deletable(source: Any) -> bool:
    """Check whether a source can and may be deleted after being copied."""
    if not callable(getattr(source, "delete", None)):
        return False

    probe = getattr(source, "is_deletable", None)
    if probe is None:
        return True
    return bool(probe())
