"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

One JSON object per log line, built on the standard logging module.

Example:
    >>> logger = StructuredLogger(component="converter")
    >>> logger.info(
    ...     event=LogEvent.CONVERSION_COMPLETED,
    ...     message="Converted 3 records",
    ...     metadata={'converted': 3, 'failed': 0}
    ... )

Output:
    {"timestamp": "2026-10-19T08:30:45.123456+00:00", "level": "INFO",
     "component": "converter", "event": "conversion.completed",
     "message": "Converted 3 records", "metadata": {"converted": 3, "failed": 0}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "converter", "cli")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: flatwkt.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"flatwkt.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        log_entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': logging.getLevelName(level),
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(level, json.dumps(log_entry, default=str))

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message (per-record detail)."""
        self._log(logging.DEBUG, event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log INFO level message."""
        self._log(logging.INFO, event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception that caused the error

        Example:
            >>> try:
            ...     unmarshal(line)
            ... except GeometryError as e:
            ...     logger.error(
            ...         event=LogEvent.DECODE_ERROR,
            ...         message="Failed to decode record",
            ...         exc_info=e,
            ...         metadata={'line': 12}
            ...     )
        """
        self._log(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """Pass-through formatter: StructuredLogger messages are already JSON."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("converter", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
