"""
Relocation policy - which storages should receive moved files.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RelocationPolicy:
    """
    Set of storage keys for which relocation (moving) is preferred over copying.

    Built once at configuration time and never mutated. Any iterable of
    storage keys is accepted; order and duplicates are irrelevant.

    Example:
        >>> policy = RelocationPolicy(["cache", "store"])
        >>> policy.prefers_relocation("cache")
        True
        >>> "thumbnails" in policy
        False
    """

    storage_keys: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        keys = self.storage_keys
        if isinstance(keys, str):
            keys = [keys]
        keys = list(keys)

        for key in keys:
            if not isinstance(key, str) or not key:
                msg = f"Storage keys must be non-empty strings, got {key!r}"
                raise ValueError(msg)

        object.__setattr__(self, "storage_keys", frozenset(keys))

    @classmethod
    def of(cls, *storage_keys: str) -> "RelocationPolicy":
        """Build a policy from positional storage keys."""
        return cls(frozenset(storage_keys))

    @classmethod
    def none(cls) -> "RelocationPolicy":
        """Policy that never prefers relocation."""
        return cls()

    def prefers_relocation(self, storage_key: str) -> bool:
        """Check whether files written to this storage should be moved."""
        return storage_key in self.storage_keys

    def __contains__(self, storage_key: object) -> bool:
        return storage_key in self.storage_keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.storage_keys))

    def __len__(self) -> int:
        return len(self.storage_keys)

    def to_list(self) -> list[str]:
        return sorted(self.storage_keys)


def as_policy(value: "RelocationPolicy | Iterable[str] | None") -> RelocationPolicy:
    """Coerce an iterable of storage keys (or None) into a RelocationPolicy."""
    if value is None:
        return RelocationPolicy()
    if isinstance(value, RelocationPolicy):
        return value
    return RelocationPolicy(value)
