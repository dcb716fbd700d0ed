"""
Geometry Layer
==============

Bounded Context: Pure geometric shapes and their measurements.

Responsibilities:
- Point and distance primitives
- Shape variants with area/perimeter
- Construction-time validation (typed errors)
- NO state, NO aggregation, NO delivery

Design Philosophy:
- Immutable data structures (frozen dataclasses)
- Fail-fast validation in constructors
- Zero side effects
"""

from shapestat.geometry.errors import (
    ShapeError,
    InvalidLengthError,
    NotATriangleError,
    InvalidDimensionsError,
    InvalidPointError,
    NegativeAreaError,
)
from shapestat.geometry.primitives import Point, distance, triangle_area
from shapestat.geometry.shapes import (
    ShapeKind,
    Shape,
    SHAPE_TYPES,
    Line,
    Triangle,
    Quadrilateral,
    Rectangle,
    Square,
    Rhombus,
    is_shape,
)

__all__ = [
    # Errors
    "ShapeError",
    "InvalidLengthError",
    "NotATriangleError",
    "InvalidDimensionsError",
    "InvalidPointError",
    "NegativeAreaError",
    # Primitives
    "Point",
    "distance",
    "triangle_area",
    # Shapes
    "ShapeKind",
    "Shape",
    "SHAPE_TYPES",
    "Line",
    "Triangle",
    "Quadrilateral",
    "Rectangle",
    "Square",
    "Rhombus",
    "is_shape",
]
