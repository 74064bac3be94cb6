"""
Environment variable management with .env file support.

This module provides utilities for loading and reading environment variables
with support for .env files and variable substitution in YAML configs.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


class EnvManager:
    """
    Manages environment variables for Stowage.

    Features:
    - Loads .env files
    - Supports variable substitution in YAML configs
    - Typed accessors (bool, int, comma-separated list)

    Example:
        >>> env = EnvManager()
        >>> env.load()  # Loads .env if exists
        >>> storages = env.get_list("STOWAGE_RELOCATE_TO")
    """

    def __init__(self, project_root: Path | str | None = None, auto_load: bool = True):
        """
        Initialize the environment manager.

        Args:
            project_root: Root directory of the project (searches for .env here)
            auto_load: Automatically load .env file if found
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._loaded = False

        if auto_load:
            self.load()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, env_file: str | Path | None = None, override: bool = False) -> bool:
        """
        Load environment variables from .env file.

        Args:
            env_file: Path to .env file (defaults to .env in project root)
            override: Whether to override existing environment variables

        Returns:
            True if .env file was loaded, False otherwise
        """
        if env_file is None:
            env_file = self.project_root / ".env"
        else:
            env_file = Path(env_file)

        if not env_file.exists():
            return False

        load_dotenv(env_file, override=override)
        self._loaded = True
        return True

    def get(
        self,
        key: str,
        default: str | None = None,
        required: bool = False
    ) -> str | None:
        """
        Get an environment variable value.

        Raises:
            ValueError: If required=True and variable not found
        """
        value = os.environ.get(key, default)

        if required and value is None:
            msg = f"Required environment variable not set: {key}"
            raise ValueError(msg)

        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get environment variable as boolean."""
        value = self.get(key, "").strip().lower()
        if value in ("true", "1", "yes", "on"):
            return True
        if value in ("false", "0", "no", "off"):
            return False
        return default

    def get_list(self, key: str, default: list[str] | None = None, sep: str = ",") -> list[str]:
        """Get a separated environment variable as a list, dropping empty items."""
        value = self.get(key)
        if value is None:
            return list(default or [])
        return [item.strip() for item in value.split(sep) if item.strip()]

    def substitute(self, text: str) -> str:
        """
        Substitute environment variables in text using ${VAR} or $VAR syntax.

        Supports:
        - ${VAR} - variable substitution
        - ${VAR:-default} - with default value
        - ${VAR:?error} - required variable (raises error if not set)

        Example:
            >>> os.environ["STORE_DIR"] = "/srv/uploads"
            >>> env.substitute("${STORE_DIR}/photos")
            '/srv/uploads/photos'
        """
        # Pattern: ${VAR}, ${VAR:-default}, ${VAR:?error}
        pattern = r'\$\{([^}:]+)(?::([?-])([^}]*))?\}'

        def replace(match):
            var_name = match.group(1)
            operator = match.group(2)
            operand = match.group(3)

            value = os.environ.get(var_name)

            if operator == '-':  # ${VAR:-default}
                return value if value is not None else operand
            elif operator == '?':  # ${VAR:?error}
                if value is None:
                    error_msg = operand or f"Required variable not set: {var_name}"
                    raise ValueError(error_msg)
                return value
            else:  # ${VAR}
                return value if value is not None else f"${{{var_name}}}"

        text = re.sub(pattern, replace, text)
        text = re.sub(r'\$([A-Z_][A-Z0-9_]*)', lambda m: os.environ.get(m.group(1), m.group(0)), text)

        return text

    def substitute_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively substitute environment variables in dictionary values."""
        result = {}
        for key, value in data.items():
            if isinstance(value, str):
                result[key] = self.substitute(value)
            elif isinstance(value, dict):
                result[key] = self.substitute_dict(value)
            elif isinstance(value, list):
                result[key] = [
                    self.substitute(item) if isinstance(item, str)
                    else self.substitute_dict(item) if isinstance(item, dict)
                    else item
                    for item in value
                ]
            else:
                result[key] = value
        return result


# Global instance
_global_env: EnvManager | None = None


def get_env() -> EnvManager:
    """Get the global environment manager instance."""
    global _global_env
    if _global_env is None:
        _global_env = EnvManager(auto_load=False)
    return _global_env


def load_env(project_root: Path | str | None = None, override: bool = False) -> bool:
    """
    Load environment variables from .env file using the global EnvManager.

    Returns:
        True if .env file was loaded
    """
    env = get_env()
    if project_root:
        env.project_root = Path(project_root)
    return env.load(override=override)
