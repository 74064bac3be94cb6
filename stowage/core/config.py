"""
StowageConfig - configuration for the transfer layer.

Holds the process-wide settings the transfer service is built from:
- Which storages files should be moved to (the relocation policy)
- Whether a source is still deleted when a wanted move falls back to a copy
- Observability switches

The config is a plain value. Pass it to TransferService.from_config() rather
than keeping it as global state, so several configurations can coexist.

Example:
    >>> from stowage import StowageConfig, TransferService
    >>>
    >>> config = StowageConfig(relocate_to=["cache", "store"])
    >>> service = TransferService.from_config({"cache": cache, "store": store}, config)

Example (YAML file, stowage.yaml):
    moving:
      storages: [cache, store]
      delete_source_on_fallback: ${STOWAGE_DELETE_SOURCE_ON_FALLBACK:-true}
    observability:
      prometheus:
        enabled: false
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from stowage.core.exceptions import ConfigurationError
from stowage.core.logger import get_logger
from stowage.storage.transfer.policy import RelocationPolicy

logger = get_logger(__name__)

_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


@dataclass(frozen=True)
class StowageConfig:
    """
    Configuration for the transfer layer.

    Attributes:
        relocate_to: Storage keys files should be moved (not copied) to
        delete_source_on_fallback: When a move isn't possible and the file is
            copied instead, delete the source afterwards (legacy behavior)
        metrics: Record Prometheus metrics for transfers

    Example:
        >>> config = StowageConfig(relocate_to=["store"], delete_source_on_fallback=False)
        >>> config.policy.prefers_relocation("store")
        True
    """

    relocate_to: frozenset[str] = field(default_factory=frozenset)
    delete_source_on_fallback: bool = True
    metrics: bool = False

    def __post_init__(self) -> None:
        # Validate through the policy, keep the normalized keys
        policy = RelocationPolicy(self.relocate_to)
        object.__setattr__(self, "relocate_to", policy.storage_keys)

    @property
    def policy(self) -> RelocationPolicy:
        """Relocation policy built from relocate_to."""
        return RelocationPolicy(self.relocate_to)

    def with_relocation(self, storage_keys: Iterable[str]) -> StowageConfig:
        """Create a new config relocating to different storages (immutable update)."""
        return dataclasses.replace(self, relocate_to=frozenset(storage_keys))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "relocate_to": sorted(self.relocate_to),
            "delete_source_on_fallback": self.delete_source_on_fallback,
            "metrics": self.metrics,
        }

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> StowageConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            STOWAGE_RELOCATE_TO: Comma-separated storage keys to move files to
            STOWAGE_DELETE_SOURCE_ON_FALLBACK: Delete sources after fallback copies (true/false)
            STOWAGE_METRICS: Enable Prometheus metrics (true/false)

        Args:
            load_dotenv: If True, loads .env file before reading variables

        Example:
            >>> import os
            >>> os.environ["STOWAGE_RELOCATE_TO"] = "cache,store"
            >>> config = StowageConfig.from_env()
        """
        from stowage.core.env import get_env

        env = get_env()
        if load_dotenv:
            env.load()

        return cls(
            relocate_to=frozenset(env.get_list("STOWAGE_RELOCATE_TO")),
            delete_source_on_fallback=env.get_bool("STOWAGE_DELETE_SOURCE_ON_FALLBACK", True),
            metrics=env.get_bool("STOWAGE_METRICS", False),
        )

    @classmethod
    def from_file(cls, file_path: str | Path, substitute_env: bool = True) -> StowageConfig:
        """
        Load configuration from a YAML (or JSON) file.

        Supports environment variable substitution using ${VAR} syntax.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the file is malformed
        """
        from stowage.core.env import get_env

        path = Path(file_path)
        if not path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        try:
            with path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid configuration file: {e}"
            raise ConfigurationError(msg, source=str(path)) from e

        if not data:
            return cls()
        if not isinstance(data, dict):
            msg = "Configuration root must be a mapping"
            raise ConfigurationError(msg, source=str(path))

        if substitute_env:
            env = get_env()
            env.load()
            try:
                data = env.substitute_dict(data)
            except ValueError as e:
                raise ConfigurationError(str(e), source=str(path)) from e

        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> StowageConfig:
        """Build configuration from an already parsed mapping."""
        moving = data.get("moving") or {}
        obs_data = data.get("observability") or {}
        if not isinstance(moving, dict) or not isinstance(obs_data, dict):
            msg = "'moving' and 'observability' sections must be mappings"
            raise ConfigurationError(msg, source=source)

        storages = moving.get("storages") or []
        if isinstance(storages, str):
            storages = [item.strip() for item in storages.split(",") if item.strip()]
        if not isinstance(storages, list):
            msg = f"'moving.storages' must be a list, got {type(storages).__name__}"
            raise ConfigurationError(msg, source=source)

        try:
            config = cls(
                relocate_to=storages,
                delete_source_on_fallback=_as_bool(
                    moving.get("delete_source_on_fallback", True), "moving.delete_source_on_fallback"
                ),
                metrics=_as_bool(
                    (obs_data.get("prometheus") or {}).get("enabled", False),
                    "observability.prometheus.enabled",
                ),
            )
        except ValueError as e:
            raise ConfigurationError(str(e), source=source) from e

        logger.debug(f"Loaded configuration: {config.to_dict()}")
        return config


def _as_bool(value: Any, name: str) -> bool:
    """Accept YAML booleans and the string forms left by env substitution."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    msg = f"'{name}' must be a boolean, got {value!r}"
    raise ValueError(msg)
