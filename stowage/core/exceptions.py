"""
Framework-level exceptions.

Storage errors live in stowage.storage.core.errors.
"""


class StowageError(Exception):
    """Base stowage error"""


class ConfigurationError(StowageError):
    """
    Invalid configuration.

    Raised when a configuration file can't be parsed or holds values
    of the wrong shape.
    """

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        if source:
            message = f"{message} (in {source})"
        super().__init__(message)
