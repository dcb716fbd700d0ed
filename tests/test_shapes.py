import dataclasses
import math

import pytest

from shapestat.geometry import (
    InvalidDimensionsError,
    InvalidLengthError,
    InvalidPointError,
    Line,
    NegativeAreaError,
    NotATriangleError,
    Point,
    Quadrilateral,
    Rectangle,
    Rhombus,
    ShapeError,
    ShapeKind,
    Square,
    Triangle,
    is_shape,
)


def heron(a, b, c):
    s = (a + b + c) / 2
    return math.sqrt(s * (s - a) * (s - b) * (s - c))


# ---------------------------------------------------------------- Line

def test_line_from_points():
    line = Line(start=Point(0, 0), end=Point(3, 4), name="L")
    assert line.area() == 0.0
    assert line.perimeter() == 5.0
    assert line.length() == 5.0
    assert line.vector() == (3, 4)
    assert line.kind is ShapeKind.LINE
    assert line.description == "Line 'L' length: 5.0"


def test_line_from_length():
    line = Line.from_length(4, name="L1")
    assert line.perimeter() == 4.0
    assert line.area() == 0.0


@pytest.mark.parametrize("length", [0, -1, -0.5, float("nan")])
def test_line_rejects_non_positive_length(length):
    with pytest.raises(InvalidLengthError):
        Line.from_length(length)


def test_line_rejects_coincident_points():
    with pytest.raises(InvalidLengthError):
        Line(start=Point(1, 1), end=Point(1, 1))


def test_unnamed_shapes_render_placeholder():
    assert Line.from_length(2).description == "Line 'Unnamed' length: 2.0"


# ---------------------------------------------------------------- Triangle

@pytest.mark.parametrize("a, b, c", [
    (3, 4, 5),
    (5, 5, 6),
    (7, 8, 9),
    (2, 2, 2),
    (0.5, 0.7, 1.1),
    (100, 100, 199),
])
def test_triangle_from_sides_perimeter_and_heron(a, b, c):
    triangle = Triangle(a, b, c)
    assert triangle.perimeter() == a + b + c
    assert triangle.area() == pytest.approx(heron(a, b, c), abs=1e-9)


@pytest.mark.parametrize("a, b, c", [
    (1, 2, 3),      # a + b == c
    (1, 1, 5),
    (5, 1, 1),
    (1, 5, 1),
    (0, 1, 1),
    (-3, 4, 5),
])
def test_triangle_rejects_inequality_violations(a, b, c):
    with pytest.raises(NotATriangleError) as exc_info:
        Triangle(a, b, c)
    assert exc_info.value.sides == (a, b, c)


def test_right_triangle_from_points():
    triangle = Triangle.from_points([Point(0, 0), Point(3, 0), Point(0, 4)], name="T1")
    assert triangle.sides == (3.0, 5.0, 4.0)
    assert triangle.perimeter() == 12.0
    assert triangle.area() == 6.0
    assert triangle.description == "Triangle 'T1' area: 6.0"


def test_collinear_points_fail_at_area_time_not_construction():
    triangle = Triangle.from_points([Point(0, 0), Point(1, 0), Point(2, 0)], name="Flat")

    assert triangle.perimeter() == 4.0
    with pytest.raises(NegativeAreaError):
        triangle.area()
    assert triangle.description == "Triangle 'Flat' degenerate, perimeter: 4.0"


def test_coincident_points_fail_at_area_time():
    triangle = Triangle.from_points([Point(0, 0), Point(0, 0), Point(1, 1)])
    with pytest.raises(NegativeAreaError):
        triangle.area()


@pytest.mark.parametrize("count", [2, 4])
def test_triangle_point_count_is_a_precondition(count):
    points = [Point(i, i * i) for i in range(count)]
    with pytest.raises(ValueError) as exc_info:
        Triangle.from_points(points)
    assert not isinstance(exc_info.value, ShapeError)


def test_explicit_vertices_must_match_sides():
    p = Point(0, 0)
    with pytest.raises(ValueError):
        Triangle(3, 4, 5, vertices=(p, p, p))
    with pytest.raises(ValueError):
        Triangle(1, 2, 10, vertices=(Point(0, 0), Point(3, 0), Point(0, 4)))

    triangle = Triangle(3, 5, 4, vertices=(Point(0, 0), Point(3, 0), Point(0, 4)))
    assert triangle.area() == 6.0


def test_nan_heron_product_is_degenerate():
    triangle = Triangle(3, 4, 5, name="N")
    object.__setattr__(triangle, "a", float("nan"))

    with pytest.raises(NegativeAreaError):
        triangle.area()


def test_triangle_from_nan_point_is_rejected():
    with pytest.raises(InvalidPointError):
        Triangle.from_points([Point(float("nan"), 0), Point(1, 0), Point(0, 1)])


# ---------------------------------------------------------------- Quadrilateral

def test_quadrilateral_square_points():
    quad = Quadrilateral(
        vertices=[Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)],
        name="Q",
    )
    assert quad.perimeter() == 8.0
    assert quad.area() == 4.0
    assert quad.description == "Quadrilateral 'Q' area: 4.0"
    assert isinstance(quad.vertices, tuple)


def test_quadrilateral_area_sums_both_diagonal_triangles():
    # trapezoid: parallel sides 4 and 2, height 2
    quad = Quadrilateral(vertices=(Point(0, 0), Point(4, 0), Point(3, 2), Point(1, 2)))
    assert quad.area() == pytest.approx(6.0)
    assert quad.sides() == pytest.approx((4.0, math.sqrt(5), 2.0, math.sqrt(5)))


@pytest.mark.parametrize("count", [3, 5])
def test_quadrilateral_point_count_is_a_precondition(count):
    with pytest.raises(ValueError):
        Quadrilateral(vertices=[Point(i, 0) for i in range(count)])


# ---------------------------------------------------------------- Rectangle family

def test_square():
    square = Square(side=4, name="S1")
    assert square.area() == 16.0
    assert square.perimeter() == 16.0
    assert (square.width, square.height) == (4, 4)
    assert square.description == "Square 'S1' area: 16.0"


def test_rectangle():
    rect = Rectangle(width=3, height=6, name="R1")
    assert rect.area() == 18.0
    assert rect.perimeter() == 18.0
    assert rect.description == "Rectangle 'R1' area: 18.0"


def test_rhombus():
    rhombus = Rhombus(side=5, height=4, name="Rh1")
    assert rhombus.area() == 20.0
    assert rhombus.perimeter() == 20.0
    assert rhombus.description == "Rhombus 'Rh1' area: 20.0"


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 3), (3, -2)])
def test_rectangle_rejects_non_positive_dimensions(width, height):
    with pytest.raises(InvalidDimensionsError):
        Rectangle(width=width, height=height)


@pytest.mark.parametrize("side", [0, -4])
def test_square_rejects_non_positive_side(side):
    with pytest.raises(InvalidDimensionsError):
        Square(side=side)


@pytest.mark.parametrize("side, height", [(0, 1), (5, 0), (-5, 4), (5, 6)])
def test_rhombus_rejects_invalid_dimensions(side, height):
    with pytest.raises(InvalidDimensionsError):
        Rhombus(side=side, height=height)


# ---------------------------------------------------------------- common

def test_error_taxonomy():
    for error in (
        InvalidLengthError,
        NotATriangleError,
        InvalidDimensionsError,
        InvalidPointError,
        NegativeAreaError,
    ):
        assert issubclass(error, ShapeError)


def test_shapes_are_frozen():
    square = Square(side=4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        square.side = 10


def test_is_shape():
    assert is_shape(Square(side=1))
    assert is_shape(Line.from_length(1))
    assert not is_shape("square")
    assert not is_shape(Point(0, 0))
