"""
Storage Transfer Service - Move-or-Copy Decisions for Uploads.

Persists a source object into a storage backend, relocating its bytes when
the destination prefers it and the backend can do it for that exact
(source, location) pair, and copying them otherwise.

Decision table (evaluated on every call):

    storage in policy | backend can move | strategy
    ------------------+------------------+----------------------------------
    no                | (not asked)      | COPY
    yes               | yes              | MOVE
    yes               | no               | COPY_THEN_DELETE (warns, fallback)

Usage:
    >>> from stowage.storage.transfer import RelocationPolicy, TransferRequest, TransferService
    >>>
    >>> service = TransferService(
    ...     storages={"cache": cache_storage, "store": store_storage},
    ...     policy=RelocationPolicy(["cache"]),
    ... )
    >>> stored = service.transfer(source, TransferRequest("cache", "ab12cd.jpg"))
"""

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from stowage.core.logger import get_logger
from stowage.monitoring.logging import transfer_context
from stowage.storage.core import StorageNotFoundError, StoredReference, is_deletable, is_movable

from .policy import RelocationPolicy, as_policy

logger = get_logger(__name__)


class TransferStrategy(Enum):
    """How the bytes of a source end up in the destination storage."""

    MOVE = "move"  # Native move, source consumed
    COPY_THEN_DELETE = "copy_then_delete"  # Fallback when a move was wanted
    COPY = "copy"  # Plain copy, source untouched


@dataclass(frozen=True)
class TransferRequest:
    """
    Destination of a single transfer.

    Attributes:
        storage_key: Identifier of the destination storage
        location: Location inside the destination storage
        metadata: Metadata to write with the object (may be empty)
    """

    storage_key: str
    location: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.storage_key, str) or not self.storage_key:
            msg = f"storage_key must be a non-empty string, got {self.storage_key!r}"
            raise ValueError(msg)
        if not isinstance(self.location, str) or not self.location:
            msg = f"location must be a non-empty string, got {self.location!r}"
            raise ValueError(msg)
        if self.metadata is None:
            msg = "metadata must be a mapping, got None"
            raise ValueError(msg)
        if not isinstance(self.metadata, Mapping):
            msg = f"metadata must be a mapping, got {type(self.metadata).__name__}"
            raise ValueError(msg)


@dataclass(frozen=True)
class TransferPlan:
    """
    Decision taken for one transfer.

    Attributes:
        strategy: Strategy that will be executed
        storage_key: Destination storage
        prefers_relocation: Whether the policy asked for a move
        movable: Whether the backend accepted a move (False when not asked)
    """

    strategy: TransferStrategy
    storage_key: str
    prefers_relocation: bool = False
    movable: bool = False

    @property
    def is_fallback(self) -> bool:
        """A move was wanted but the backend couldn't do it."""
        return self.prefers_relocation and not self.movable

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strategy": self.strategy.value,
            "storage_key": self.storage_key,
            "prefers_relocation": self.prefers_relocation,
            "movable": self.movable,
            "is_fallback": self.is_fallback,
        }


class TransferService:
    """
    Persists source objects into storage backends.

    The service holds no mutable state: the storages mapping and the
    relocation policy are fixed at construction, so one instance can serve
    any number of concurrent transfers as long as the backends themselves
    are safe for concurrent writes to distinct locations.

    Example:
        >>> service = TransferService(
        ...     storages={"cache": cache, "store": store},
        ...     policy=RelocationPolicy(["store"]),
        ...     delete_source_on_fallback=False,
        ... )
        >>> stored = service.transfer(temp_file, TransferRequest("store", "a/b.png"))
    """

    def __init__(
        self,
        storages: Mapping[str, Any],
        policy: RelocationPolicy | Iterable[str] | None = None,
        *,
        delete_source_on_fallback: bool = True,
        metrics=None,
    ):
        """
        Initialize transfer service.

        Args:
            storages: Storage backends by key (must implement copy, may implement move/can_move)
            policy: Storage keys for which moving is preferred
            delete_source_on_fallback: Delete deletable sources after a fallback copy
            metrics: Optional PrometheusMetrics collector
        """
        self._storages = MappingProxyType(dict(storages))
        self._policy = as_policy(policy)
        self.delete_source_on_fallback = delete_source_on_fallback
        self.metrics = metrics

    @classmethod
    def from_config(cls, storages: Mapping[str, Any], config, metrics=None) -> "TransferService":
        """
        Build a service from a StowageConfig.

        When the config enables metrics and no collector is given, a
        PrometheusMetrics collector is created.
        """
        if metrics is None and config.metrics:
            from stowage.monitoring.prometheus import PrometheusMetrics

            metrics = PrometheusMetrics()

        return cls(
            storages,
            config.policy,
            delete_source_on_fallback=config.delete_source_on_fallback,
            metrics=metrics,
        )

    @property
    def policy(self) -> RelocationPolicy:
        return self._policy

    @property
    def storages(self) -> Mapping[str, Any]:
        """Read-only view of the registered storages."""
        return self._storages

    def get_storage(self, storage_key: str) -> Any:
        """
        Get the backend registered under a storage key.

        Raises:
            StorageNotFoundError: If no backend is registered under that key
        """
        try:
            return self._storages[storage_key]
        except KeyError:
            raise StorageNotFoundError(storage_key, available=list(self._storages)) from None

    def plan(self, source: Any, request: TransferRequest) -> TransferPlan:
        """
        Decide how a source would be transferred, without transferring it.

        Only asks the backend's can_move() predicate, and only when the
        policy prefers relocation for the destination.
        """
        storage = self.get_storage(request.storage_key)
        return self._plan(storage, source, request)

    def transfer(self, source: Any, request: TransferRequest) -> StoredReference:
        """
        Persist the source into the requested storage.

        Returns:
            The stored reference produced by the backend, unchanged

        Raises:
            ValueError: If source is None
            StorageNotFoundError: If the storage key is unknown
            StorageWriteError: If the backend's copy or move failed (propagated unchanged)
        """
        if source is None:
            msg = "source must not be None"
            raise ValueError(msg)

        storage = self.get_storage(request.storage_key)
        token = transfer_context.set(
            {"storage_key": request.storage_key, "location": request.location}
        )
        try:
            plan = self._plan(storage, source, request)
            logger.debug(
                f"Transferring {source!r} to {request.storage_key!r} "
                f"at {request.location!r} using {plan.strategy.value}",
                extra={"strategy": plan.strategy.value},
            )

            started = time.perf_counter()
            if plan.strategy is TransferStrategy.MOVE:
                stored = storage.move(source, request.location, request.metadata)
            elif plan.is_fallback:
                stored = self._fallback(storage, source, request)
            else:
                stored = storage.copy(source, request.location, request.metadata)

            if self.metrics is not None:
                self.metrics.record_transfer(
                    request.storage_key, plan.strategy.value, time.perf_counter() - started
                )
            return stored
        finally:
            transfer_context.reset(token)

    def _plan(self, storage: Any, source: Any, request: TransferRequest) -> TransferPlan:
        if not self._policy.prefers_relocation(request.storage_key):
            return TransferPlan(TransferStrategy.COPY, request.storage_key)

        if is_movable(storage, source, request.location):
            return TransferPlan(
                TransferStrategy.MOVE,
                request.storage_key,
                prefers_relocation=True,
                movable=True,
            )

        strategy = (
            TransferStrategy.COPY_THEN_DELETE
            if self.delete_source_on_fallback
            else TransferStrategy.COPY
        )
        return TransferPlan(strategy, request.storage_key, prefers_relocation=True)

    def _fallback(self, storage: Any, source: Any, request: TransferRequest) -> StoredReference:
        """Copy a source that should have been moved, then clean it up."""
        self._warn_fallback(source, request)

        stored = storage.copy(source, request.location, request.metadata)

        if self.delete_source_on_fallback:
            self._delete_source(source, request)

        return stored

    def _warn_fallback(self, source: Any, request: TransferRequest) -> None:
        if self.delete_source_on_fallback:
            consequence = (
                "It is currently still deleted after being copied, "
                "but it won't be in the next major version."
            )
        else:
            consequence = "It will be copied and left in place."

        logger.warning(
            f"The {request.storage_key!r} storage doesn't support moving {source!r}. {consequence}",
            extra={
                "storage_key": request.storage_key,
                "location": request.location,
                "source": repr(source),
                "strategy": "fallback",
            },
        )
        if self.metrics is not None:
            self.metrics.record_fallback(request.storage_key)

    def _delete_source(self, source: Any, request: TransferRequest) -> None:
        # The stored object is already valid; a failed cleanup must not fail the transfer
        try:
            if not is_deletable(source):
                return
            source.delete()
        except Exception as e:
            logger.error(
                f"Failed to delete {source!r} after copying it to {request.storage_key!r}: {e}",
                exc_info=True,
                extra={
                    "storage_key": request.storage_key,
                    "source": repr(source),
                    "error_type": type(e).__name__,
                },
            )
            if self.metrics is not None:
                self.metrics.record_delete_failure(request.storage_key)


def transfer_file(
    source: Any,
    storage: Any,
    storage_key: str,
    location: str,
    metadata: Mapping[str, Any] | None = None,
    *,
    relocate: bool = False,
    delete_source_on_fallback: bool = True,
) -> StoredReference:
    """
    Convenience function for transferring one source into one storage.

    Args:
        source: Source object
        storage: Destination backend
        storage_key: Identifier of the destination backend
        location: Location inside the backend
        metadata: Metadata to write with the object
        relocate: Prefer moving over copying
        delete_source_on_fallback: Delete the source if a wanted move falls back to copy

    Returns:
        The stored reference produced by the backend
    """
    service = TransferService(
        {storage_key: storage},
        [storage_key] if relocate else None,
        delete_source_on_fallback=delete_source_on_fallback,
    )
    return service.transfer(source, TransferRequest(storage_key, location, metadata or {}))
