"""
shapestat MQTT Communication Package
====================================

Bounded Context: Publishing shape statistics

Broadcasts aggregation results and largest-shape notifications so other
services can consume them without linking against the core.

Architecture:
- schemas/: Immutable message structures
- publishers/: Message producers (StatsPublisher, LargestShapePublisher)

Logging comes from shapestat.logging (shared with the core).

Example:
    >>> from shapestat import StatsAggregator, StatsDispatcher
    >>> from shapestat.logging import create_logger
    >>> from shapestat_mqtt import StatsPublisher
    >>>
    >>> publisher = StatsPublisher(
    ...     broker_host="localhost",
    ...     topic="shapestat/stats/lab",
    ...     scene_id="lab",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> StatsDispatcher().compute_stats(registry, publisher.handle_stats)
"""

__version__ = "1.0.0"

# Schemas
from .schemas import (
    Timestamp,
    ShapeStatsMessage,
    LargestShapeNotice,
)

# Publishers
from .publishers import (
    BasePublisher,
    StatsPublisher,
    LargestShapePublisher,
)

__all__ = [
    '__version__',
    # Schemas
    'Timestamp',
    'ShapeStatsMessage',
    'LargestShapeNotice',
    # Publishers
    'BasePublisher',
    'StatsPublisher',
    'LargestShapePublisher',
]
