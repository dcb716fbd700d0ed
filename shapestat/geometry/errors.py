"""
Shape Error Taxonomy
====================

Bounded Context: Geometry validation.

Construction-time errors (raised by constructors, nothing is built):
- InvalidLengthError: non-positive line length
- NotATriangleError: triangle inequality violated
- InvalidDimensionsError: non-positive rectangle/square/rhombus dimensions
- InvalidPointError: non-finite point coordinate (NaN or infinity)

Evaluation-time errors (raised by area()):
- NegativeAreaError: Heron degeneracy for point-built triangles

Precondition violations (wrong point count) are NOT part of this taxonomy.
They raise ValueError so that `except ShapeError` never hides a caller bug.
"""


class ShapeError(Exception):
    """Base class for recoverable shape errors."""
    pass


class InvalidLengthError(ShapeError):
    """Raised when a line has a non-positive length."""

    def __init__(self, length: float):
        self.length = length
        super().__init__(f"Line length must be > 0, got {length}")


class NotATriangleError(ShapeError):
    """Raised when three sides violate the strict triangle inequality."""

    def __init__(self, a: float, b: float, c: float):
        self.sides = (a, b, c)
        super().__init__(f"Sides ({a}, {b}, {c}) do not form a triangle")


class InvalidDimensionsError(ShapeError):
    """Raised when a quadrilateral dimension is out of range."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidPointError(ShapeError):
    """Raised when a point coordinate is NaN or infinite."""

    def __init__(self, x: float, y: float):
        self.coordinates = (x, y)
        super().__init__(f"Point coordinates must be finite, got ({x}, {y})")


class NegativeAreaError(ShapeError):
    """Raised by area() when Heron's formula degenerates to a non-positive (or NaN) value."""

    def __init__(self, product: float):
        self.product = product
        super().__init__(
            f"Heron's formula produced a non-positive area term ({product})"
        )
