"""Shared fixtures: the five-shape lab scene and logging isolation."""

import logging

import pytest

from shapestat import Line, Point, Rectangle, Rhombus, ShapeRegistry, Square, Triangle
from shapestat.logging.structured import ROOT_LOGGER_NAME


LAB_SCENE_YAML = """
scene_id: "lab"
shapes:
  - type: triangle
    name: T1
    points: [[0, 0], [3, 0], [0, 4]]
  - type: line
    name: L1
    length: 4
  - type: square
    name: S1
    side: 4
  - type: rectangle
    name: R1
    width: 3
    height: 6
  - type: rhombus
    name: Rh1
    side: 5
    height: 4
"""


@pytest.fixture(autouse=True)
def reset_shapestat_logging():
    """Drop handlers attached by configure_logging() between tests."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


@pytest.fixture()
def lab_shapes():
    return [
        Triangle.from_points([Point(0, 0), Point(3, 0), Point(0, 4)], name="T1"),
        Line(start=Point(0, 0), end=Point(0, 4), name="L1"),
        Square(side=4, name="S1"),
        Rectangle(width=3, height=6, name="R1"),
        Rhombus(side=5, height=4, name="Rh1"),
    ]


@pytest.fixture()
def lab_registry(lab_shapes):
    return ShapeRegistry(lab_shapes)


@pytest.fixture()
def lab_scene_path(tmp_path):
    path = tmp_path / "scene.yaml"
    path.write_text(LAB_SCENE_YAML)
    return path
