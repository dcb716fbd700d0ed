"""
Structured Logging for shapestat
================================

Bounded Context: Observability

JSON-structured logging shared by the core and the MQTT layer.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    configure_logging: Attach the JSON handler (host application, once)

Example:
    >>> from shapestat.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="analytics")
    >>> logger.info(
    ...     event=LogEvent.STATS_COMPUTED,
    ...     message="Computed stats for 5 shapes",
    ...     metadata={'shape_count': 5}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger, configure_logging

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    'configure_logging',
]
