"""
Geometry Primitives
===================

Pure value types and formulas shared by every shape variant.

Design:
- Point is a frozen dataclass (value object, no identity)
- Functions are total and side-effect free
- numpy for vector arithmetic (same as the zone geometry layer)
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from shapestat.geometry.errors import InvalidPointError


@dataclass(frozen=True)
class Point:
    """
    Immutable 2-D point.

    Raises:
        InvalidPointError: If either coordinate is NaN or infinite

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate
    """

    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidPointError(self.x, self.y)

    def as_array(self) -> np.ndarray:
        """Return the point as a float64 vector."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_pair(cls, pair: Tuple[float, float]) -> "Point":
        """Build a point from an (x, y) pair (YAML lists, tuples)."""
        if len(pair) != 2:
            raise ValueError(f"Point needs exactly 2 coordinates, got {len(pair)}")
        return cls(x=float(pair[0]), y=float(pair[1]))


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(b.x - a.x, b.y - a.y))


def triangle_area(p0: Point, p1: Point, p2: Point) -> float:
    """
    Shoelace area of the triangle (p0, p1, p2).

    Cross product of the two edge vectors leaving p0, halved. Always >= 0.
    """
    edge_a = p1.as_array() - p0.as_array()
    edge_b = p2.as_array() - p0.as_array()
    cross = edge_a[0] * edge_b[1] - edge_a[1] * edge_b[0]
    return float(abs(cross) / 2)
