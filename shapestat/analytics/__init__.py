"""
Analytics Layer
===============

Bounded Context: Aggregated statistics over shape snapshots.

Components:
- StatsAggregator: Single-pass extrema reduction
- ShapeStats: Immutable result snapshot
- ShapeObserver: Largest-shape notification protocol
"""

from shapestat.analytics.stats import (
    StatsAggregator,
    ShapeStats,
    SkippedShape,
    AreaReport,
    ShapeObserver,
)

__all__ = [
    "StatsAggregator",
    "ShapeStats",
    "SkippedShape",
    "AreaReport",
    "ShapeObserver",
]
