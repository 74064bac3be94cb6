"""
Structured logging for storage transfers

Provides a JSON formatter that attaches transfer context (destination storage,
location, source description, chosen strategy) to every record, so fallback
warnings and delete failures can be filtered and aggregated by operators.
"""

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context of the transfer currently running in this context (thread/task)
transfer_context: ContextVar[dict[str, Any]] = ContextVar("transfer_context", default={})


class TransferJsonFormatter(logging.Formatter):
    """
    JSON formatter for transfer logs with structured fields

    Records logged while a transfer runs carry its storage key and location,
    including records emitted by storage backends.
    """

    # Fields to extract from log record if present
    _EXTRA_FIELDS = (
        "storage_key",
        "location",
        "source",
        "strategy",
        "error_type",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_entry = self._build_base_entry(record)
        self._add_transfer_context(log_entry)
        self._add_record_extras(log_entry, record)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)

    def _build_base_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        """Build base log entry with standard fields."""
        return {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

    def _add_transfer_context(self, log_entry: dict[str, Any]) -> None:
        """Add transfer context to log entry if available."""
        context = transfer_context.get({})
        if context:
            log_entry.update(
                {
                    "storage_key": context.get("storage_key"),
                    "location": context.get("location"),
                }
            )

    def _add_record_extras(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        """Add extra fields from log record."""
        for field in self._EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)


def setup_transfer_logging(
    level: int = logging.INFO,
    logger_name: str = "stowage",
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Attach a JSON-formatted handler to the stowage logger.

    Args:
        level: Logging level
        logger_name: Logger to configure
        handler: Handler to use (defaults to a StreamHandler)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    handler = handler or logging.StreamHandler()
    handler.setFormatter(TransferJsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
