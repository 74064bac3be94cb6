"""
Stowage core: configuration, environment handling, logging and exceptions.
"""

from .exceptions import ConfigurationError, StowageError
from .logger import configure_default_logging, get_logger, set_logger
from .env import EnvManager, get_env, load_env
from .config import StowageConfig

__all__ = [
    "ConfigurationError",
    "EnvManager",
    "StowageConfig",
    "StowageError",
    "configure_default_logging",
    "get_env",
    "get_logger",
    "load_env",
    "set_logger",
]
