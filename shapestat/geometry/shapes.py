"""
Shape Variants
==============

Pure geometric figures - NO state, NO side effects.

Design:
- Closed set of variants (tagged union over frozen dataclasses)
- Each variant holds only its own fields
- Constructors are the only validation gate (__post_init__ / classmethods)
- area()/perimeter() are pure functions of validated fields

Variants:
    Line, Triangle, Quadrilateral, Rectangle, Square, Rhombus
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Optional, Tuple, Union

from shapestat.geometry.errors import (
    InvalidDimensionsError,
    InvalidLengthError,
    NegativeAreaError,
    NotATriangleError,
)
from shapestat.geometry.primitives import Point, distance, triangle_area

UNNAMED = "Unnamed"

# Heron products below this fraction of s^4 are numerical noise for point-built triangles
DEGENERACY_TOLERANCE = 1e-12


class ShapeKind(str, Enum):
    """Shape variant tag."""

    LINE = "line"
    TRIANGLE = "triangle"
    QUADRILATERAL = "quadrilateral"
    RECTANGLE = "rectangle"
    SQUARE = "square"
    RHOMBUS = "rhombus"


def _label(name: Optional[str]) -> str:
    return UNNAMED if name is None else name


@dataclass(frozen=True)
class Line:
    """
    Immutable line segment.

    Area is always 0, perimeter is the segment length.

    Raises:
        InvalidLengthError: If start and end coincide
    """

    start: Point
    end: Point
    name: Optional[str] = None

    kind: ClassVar[ShapeKind] = ShapeKind.LINE

    def __post_init__(self):
        if self.start == self.end:
            raise InvalidLengthError(0.0)

    @classmethod
    def from_length(cls, length: float, name: Optional[str] = None) -> "Line":
        """
        Build a horizontal line of the given length starting at the origin.

        Raises:
            InvalidLengthError: If length <= 0
        """
        if not length > 0:
            raise InvalidLengthError(length)
        return cls(start=Point(0.0, 0.0), end=Point(float(length), 0.0), name=name)

    def length(self) -> float:
        return distance(self.start, self.end)

    def vector(self) -> Tuple[float, float]:
        """(dx, dy) from start to end."""
        return (self.end.x - self.start.x, self.end.y - self.start.y)

    def area(self) -> float:
        return 0.0

    def perimeter(self) -> float:
        return self.length()

    @property
    def description(self) -> str:
        return f"Line '{_label(self.name)}' length: {self.perimeter()}"


@dataclass(frozen=True)
class Triangle:
    """
    Immutable triangle stored as three side lengths.

    Two construction paths:
    - Triangle(a, b, c): sides validated against the strict triangle
      inequality at construction (NotATriangleError)
    - Triangle.from_points(points): sides derived from vertices, NOT
      validated; degeneracy surfaces later from area() (NegativeAreaError)

    Attributes:
        a, b, c: Side lengths
        name: Optional display name
        vertices: Source points when built with from_points(), else None
            (sides must equal the vertex distances)
    """

    a: float
    b: float
    c: float
    name: Optional[str] = None
    vertices: Optional[Tuple[Point, Point, Point]] = field(default=None, compare=False)

    kind: ClassVar[ShapeKind] = ShapeKind.TRIANGLE

    def __post_init__(self):
        if self.vertices is not None:
            if len(self.vertices) != 3:
                raise ValueError(
                    f"A triangle must have exactly 3 points, got {len(self.vertices)}"
                )
            p0, p1, p2 = self.vertices
            measured = (distance(p0, p1), distance(p1, p2), distance(p2, p0))
            if not all(math.isclose(side, m, rel_tol=1e-9, abs_tol=1e-12)
                       for side, m in zip(self.sides, measured)):
                raise ValueError(
                    f"Triangle sides {self.sides} do not match its vertices {measured}"
                )
            return

        a, b, c = self.a, self.b, self.c
        if not (a + b > c and a + c > b and b + c > a):
            raise NotATriangleError(a, b, c)

    @classmethod
    def from_points(
        cls,
        points: Iterable[Point],
        name: Optional[str] = None,
    ) -> "Triangle":
        """
        Build a triangle from exactly three vertices.

        Raises:
            ValueError: If the point count is not 3 (caller contract violation)
        """
        vertices = tuple(points)
        if len(vertices) != 3:
            raise ValueError(f"A triangle must have exactly 3 points, got {len(vertices)}")

        p0, p1, p2 = vertices
        return cls(
            a=distance(p0, p1),
            b=distance(p1, p2),
            c=distance(p2, p0),
            name=name,
            vertices=vertices,
        )

    @property
    def sides(self) -> Tuple[float, float, float]:
        return (self.a, self.b, self.c)

    def perimeter(self) -> float:
        return self.a + self.b + self.c

    def area(self) -> float:
        """
        Heron's formula on the semi-perimeter.

        Raises:
            NegativeAreaError: If the Heron product is non-positive
                (collinear or coincident vertices)
        """
        s = self.perimeter() / 2
        product = s * (s - self.a) * (s - self.b) * (s - self.c)

        threshold = DEGENERACY_TOLERANCE * (s * s) * (s * s) if self.vertices is not None else 0.0
        if not product > threshold:
            raise NegativeAreaError(product)

        return math.sqrt(product)

    @property
    def description(self) -> str:
        try:
            return f"Triangle '{_label(self.name)}' area: {self.area()}"
        except NegativeAreaError:
            return f"Triangle '{_label(self.name)}' degenerate, perimeter: {self.perimeter()}"


@dataclass(frozen=True)
class Quadrilateral:
    """
    General quadrilateral from four consecutive vertices.

    Area splits along the p0-p2 diagonal into two shoelace triangles.

    Raises:
        ValueError: If the point count is not 4 (caller contract violation)
    """

    vertices: Tuple[Point, Point, Point, Point]
    name: Optional[str] = None

    kind: ClassVar[ShapeKind] = ShapeKind.QUADRILATERAL

    def __post_init__(self):
        vertices = tuple(self.vertices)
        if len(vertices) != 4:
            raise ValueError(
                f"A quadrilateral must have exactly 4 points, got {len(vertices)}"
            )
        object.__setattr__(self, "vertices", vertices)

    def sides(self) -> Tuple[float, float, float, float]:
        p0, p1, p2, p3 = self.vertices
        return (distance(p0, p1), distance(p1, p2), distance(p2, p3), distance(p3, p0))

    def perimeter(self) -> float:
        return sum(self.sides())

    def area(self) -> float:
        p0, p1, p2, p3 = self.vertices
        return triangle_area(p0, p1, p2) + triangle_area(p0, p2, p3)

    @property
    def description(self) -> str:
        return f"Quadrilateral '{_label(self.name)}' area: {self.area()}"


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-free rectangle given by its dimensions.

    Raises:
        InvalidDimensionsError: If width or height <= 0
    """

    width: float
    height: float
    name: Optional[str] = None

    kind: ClassVar[ShapeKind] = ShapeKind.RECTANGLE

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise InvalidDimensionsError(
                f"Rectangle dimensions must be > 0, got {self.width}x{self.height}"
            )

    def area(self) -> float:
        return float(self.width * self.height)

    def perimeter(self) -> float:
        return float(2 * (self.width + self.height))

    @property
    def description(self) -> str:
        return f"Rectangle '{_label(self.name)}' area: {self.area()}"


@dataclass(frozen=True)
class Square:
    """
    Rectangle with equal width and height.

    Raises:
        InvalidDimensionsError: If side <= 0
    """

    side: float
    name: Optional[str] = None

    kind: ClassVar[ShapeKind] = ShapeKind.SQUARE

    def __post_init__(self):
        if not self.side > 0:
            raise InvalidDimensionsError(f"Square side must be > 0, got {self.side}")

    @property
    def width(self) -> float:
        return self.side

    @property
    def height(self) -> float:
        return self.side

    def area(self) -> float:
        return float(self.width * self.height)

    def perimeter(self) -> float:
        return float(2 * (self.width + self.height))

    @property
    def description(self) -> str:
        return f"Square '{_label(self.name)}' area: {self.area()}"


@dataclass(frozen=True)
class Rhombus:
    """
    Rhombus given by side length and height.

    The height of a rhombus is side * sin(angle), so it can never exceed
    the side.
    Rejecting height > side is a deliberate tightening over plain
    positivity checks.

    Raises:
        InvalidDimensionsError: If side <= 0, height <= 0 or height > side
    """

    side: float
    height: float
    name: Optional[str] = None

    kind: ClassVar[ShapeKind] = ShapeKind.RHOMBUS

    def __post_init__(self):
        if not (self.side > 0 and self.height > 0):
            raise InvalidDimensionsError(
                f"Rhombus side and height must be > 0, got side={self.side}, height={self.height}"
            )
        if self.height > self.side:
            raise InvalidDimensionsError(
                f"Rhombus height ({self.height}) cannot exceed its side ({self.side})"
            )

    def area(self) -> float:
        return float(self.side * self.height)

    def perimeter(self) -> float:
        return float(4 * self.side)

    @property
    def description(self) -> str:
        return f"Rhombus '{_label(self.name)}' area: {self.area()}"


Shape = Union[Line, Triangle, Quadrilateral, Rectangle, Square, Rhombus]

SHAPE_TYPES = (Line, Triangle, Quadrilateral, Rectangle, Square, Rhombus)


def is_shape(obj: object) -> bool:
    """True if obj is one of the supported shape variants."""
    return isinstance(obj, SHAPE_TYPES)
