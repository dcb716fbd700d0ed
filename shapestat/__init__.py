"""
shapestat
=========

Bounded Context: 2-D shape measurement and shape-collection statistics.

Architecture:

    shapestat/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── primitives.py  # Point, distance, triangle_area
    │   ├── shapes.py      # Line, Triangle, Quadrilateral, Rectangle, Square, Rhombus
    │   └── errors.py      # ShapeError taxonomy
    │
    ├── registry.py        # ShapeRegistry (ordered, thread-safe)
    ├── analytics/         # StatsAggregator, ShapeStats (single-pass extrema)
    ├── delivery.py        # StatsDispatcher (sync / deferred result delivery)
    ├── config.py          # SceneConfig (YAML scenes)
    └── logging/           # StructuredLogger, LogEvent

Usage:

    from shapestat import (
        Point, Triangle, Line, Square, Rectangle, Rhombus,
        ShapeRegistry, StatsAggregator, StatsDispatcher,
    )

    registry = ShapeRegistry()
    registry.add_shape(Triangle.from_points([Point(0, 0), Point(3, 0), Point(0, 4)], name="T1"))
    registry.add_shape(Line.from_length(4, name="L1"))
    registry.add_shape(Rhombus(side=5, height=4, name="Rh1"))

    stats = StatsAggregator().compute(registry.shapes())
    stats.largest_area_description   # "Rhombus 'Rh1' area: 20.0"

    with StatsDispatcher() as dispatcher:
        dispatcher.compute_stats_async(registry, print).result()
"""

# Geometry Layer (immutable, stateless)
from shapestat.geometry import (
    ShapeError,
    InvalidLengthError,
    NotATriangleError,
    InvalidDimensionsError,
    InvalidPointError,
    NegativeAreaError,
    Point,
    distance,
    ShapeKind,
    Shape,
    Line,
    Triangle,
    Quadrilateral,
    Rectangle,
    Square,
    Rhombus,
)

# Registry + Analytics
from shapestat.registry import ShapeRegistry
from shapestat.analytics import StatsAggregator, ShapeStats, SkippedShape, ShapeObserver

# Delivery
from shapestat.delivery import StatsDispatcher, InlineContext, QueueContext

# Configuration
from shapestat.config import SceneConfig, ShapeConfig, MQTTConfig

__all__ = [
    # Geometry
    "ShapeError",
    "InvalidLengthError",
    "NotATriangleError",
    "InvalidDimensionsError",
    "InvalidPointError",
    "NegativeAreaError",
    "Point",
    "distance",
    "ShapeKind",
    "Shape",
    "Line",
    "Triangle",
    "Quadrilateral",
    "Rectangle",
    "Square",
    "Rhombus",
    # Registry + Analytics
    "ShapeRegistry",
    "StatsAggregator",
    "ShapeStats",
    "SkippedShape",
    "ShapeObserver",
    # Delivery
    "StatsDispatcher",
    "InlineContext",
    "QueueContext",
    # Configuration
    "SceneConfig",
    "ShapeConfig",
    "MQTTConfig",
]

__version__ = "1.0.0"
