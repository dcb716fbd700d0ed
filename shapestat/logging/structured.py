"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

This module provides a structured logger that outputs JSON logs.

Design:
- JSON output (compatible with log aggregators)
- Thread-safe (uses standard logging module)
- Contextual metadata (component, scene_id, shape index, etc.)
- Type-safe events (LogEvent enum)

Architecture:
- Wraps Python's logging module under the "shapestat" logger hierarchy
- Library code only emits records; configure_logging() attaches the
  JSON handler (done once by the CLI / host application)

Example:
    >>> configure_logging(logging.INFO)
    >>> logger = StructuredLogger(component="analytics")
    >>> logger.info(
    ...     event=LogEvent.STATS_COMPUTED,
    ...     message="Computed stats",
    ...     metadata={'shape_count': 5}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "analytics",
        "event": "stats.computed",
        "message": "Computed stats",
        "metadata": {"shape_count": 5}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, TextIO
from .events import LogEvent

ROOT_LOGGER_NAME = "shapestat"


class StructuredLogger:
    """
    JSON structured logger.

    Wraps Python's logging module with structured metadata support.

    Attributes:
        component: Component name (e.g., "registry", "analytics")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: Optional[int] = None,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "registry")
            level: Logging level (default: inherit from "shapestat")
            logger_name: Custom logger name (default: shapestat.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"{ROOT_LOGGER_NAME}.{component}"
        self.logger = logging.getLogger(self.logger_name)
        if level is not None:
            self.logger.setLevel(level)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception for ERROR logs
        """
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
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

        self.logger.log(
            log_level,
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.SHAPE_ADDED,
            ...     message="Added shape",
            ...     metadata={'kind': 'triangle', 'index': 0}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log WARNING level message.

        Example:
            >>> logger.warning(
            ...     event=LogEvent.STATS_SHAPE_SKIPPED,
            ...     message="Shape excluded from area extrema",
            ...     metadata={'index': 3}
            ... )
        """
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Example:
            >>> try:
            ...     observer.on_largest_shape_processed(description)
            ... except Exception as e:
            ...     logger.error(
            ...         event=LogEvent.STATS_OBSERVER_FAILED,
            ...         message="Observer raised",
            ...         exc_info=e
            ...     )
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """
    Formatter for records produced by StructuredLogger.

    The message is already a JSON document, so it is passed through.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Attach the JSON handler to the "shapestat" logger hierarchy.

    Idempotent: a second call only updates the level.

    Args:
        level: Logging level for every shapestat component
        stream: Output stream (default: stderr)

    Returns:
        The configured root "shapestat" logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)

    return root


# Convenience factory function
def create_logger(
    component: str,
    level: Optional[int] = None
) -> StructuredLogger:
    """
    Factory function to create a StructuredLogger.

    Example:
        >>> logger = create_logger("analytics", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
