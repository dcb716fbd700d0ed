import logging
from pathlib import Path

import pytest

from shapestat import Line, Rhombus, Triangle
from shapestat.config import MQTTConfig, SceneConfig, ShapeConfig
from shapestat.geometry import InvalidDimensionsError, InvalidPointError, NotATriangleError

REPO_SCENE = Path(__file__).parent.parent / "config" / "scene.yaml"


def test_lab_scene_builds_in_order(lab_scene_path):
    scene = SceneConfig.from_yaml(lab_scene_path)
    registry = scene.build_registry()

    assert scene.scene_id == "lab"
    assert scene.log_level == "INFO"
    assert scene.mqtt_config is None
    assert [shape.name for shape in registry] == ["T1", "L1", "S1", "R1", "Rh1"]
    assert isinstance(registry.shapes()[0], Triangle)
    assert isinstance(registry.shapes()[1], Line)
    assert isinstance(registry.shapes()[4], Rhombus)


def test_repository_example_scene_loads():
    scene = SceneConfig.from_yaml(REPO_SCENE)
    registry = scene.build_registry()

    assert len(registry) == 5
    assert scene.level == logging.WARNING
    assert scene.mqtt_config.broker == "localhost"
    assert scene.mqtt_config.stats_topic_for(scene.scene_id) == "shapestat/stats/lab"
    assert scene.mqtt_config.largest_topic_for(scene.scene_id) == "shapestat/largest/lab"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SceneConfig.from_yaml(tmp_path / "nope.yaml")


def test_malformed_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scene_id: [unclosed\n")
    with pytest.raises(ValueError):
        SceneConfig.from_yaml(path)


def test_scene_requires_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        SceneConfig.from_yaml(path)


def test_scene_validation():
    with pytest.raises(ValueError):
        SceneConfig(scene_id="")
    with pytest.raises(ValueError):
        SceneConfig(scene_id="lab", log_level="LOUD")


def test_log_level_is_case_insensitive():
    scene = SceneConfig.from_dict({"scene_id": "lab", "log_level": "debug"})
    assert scene.level == logging.DEBUG


def test_shape_type_is_case_insensitive():
    config = ShapeConfig.from_dict({"type": "Square", "side": 2})
    assert config.shape_type == "square"


@pytest.mark.parametrize("data", [
    {"type": "hexagon", "side": 1},
    {"side": 1},
    {"type": "square"},
    {"type": "rectangle", "width": 1},
    {"type": "rhombus", "side": 2},
    {"type": "line"},
    {"type": "line", "length": 2, "points": [[0, 0], [1, 1]]},
    {"type": "line", "points": [[0, 0]]},
    {"type": "triangle", "points": [[0, 0], [1, 0]]},
    {"type": "triangle", "sides": [3, 4]},
    {"type": "quadrilateral", "points": [[0, 0], [1, 0], [1, 1]]},
])
def test_invalid_shape_entries(data):
    with pytest.raises(ValueError):
        ShapeConfig.from_dict(data)


def test_triangle_from_sides_and_quadrilateral():
    triangle = ShapeConfig.from_dict({"type": "triangle", "name": "T", "sides": [3, 4, 5]}).build()
    quad = ShapeConfig.from_dict({
        "type": "quadrilateral",
        "name": "Q",
        "points": [[0, 0], [2, 0], [2, 2], [0, 2]],
    }).build()

    assert triangle.area() == 6.0
    assert quad.area() == 4.0


def test_geometry_errors_propagate_from_build_registry(caplog):
    scene = SceneConfig.from_dict({
        "scene_id": "broken",
        "shapes": [
            {"type": "square", "name": "ok", "side": 1},
            {"type": "triangle", "name": "bad", "sides": [1, 2, 10]},
        ],
    })

    with caplog.at_level(logging.ERROR, logger="shapestat"):
        with pytest.raises(NotATriangleError):
            scene.build_registry()

    assert any('"event": "shape.rejected"' in r.getMessage() for r in caplog.records)


def test_invalid_dimensions_propagate():
    scene = SceneConfig.from_dict({
        "scene_id": "broken",
        "shapes": [{"type": "rectangle", "width": -1, "height": 2}],
    })
    with pytest.raises(InvalidDimensionsError):
        scene.build_registry()


def test_mqtt_config_defaults_and_topics():
    config = MQTTConfig(broker="broker.local")
    assert config.port == 1883
    assert config.qos == 0
    assert config.stats_topic_for("yard") == "shapestat/stats/yard"

    custom = MQTTConfig(broker="b", stats_topic="scenes/{scene_id}/stats")
    assert custom.stats_topic_for("yard") == "scenes/yard/stats"


@pytest.mark.parametrize("kwargs", [
    {"broker": ""},
    {"broker": "b", "port": 0},
    {"broker": "b", "port": 70000},
    {"broker": "b", "qos": 3},
])
def test_mqtt_config_validation(kwargs):
    with pytest.raises(ValueError):
        MQTTConfig(**kwargs)


def test_configs_are_frozen():
    config = MQTTConfig(broker="b")
    with pytest.raises(AttributeError):
        config.port = 1


def test_null_shapes_is_an_empty_scene():
    scene = SceneConfig.from_dict({"scene_id": "empty", "shapes": None})
    assert scene.shapes == []
    assert len(scene.build_registry()) == 0


@pytest.mark.parametrize("data", [
    {"scene_id": "lab", "mqtt_config": {"broker": "b", "color": "red"}},
    {"scene_id": "lab", "mqtt_config": {"broker": "b", "port": "high"}},
    {"scene_id": "lab", "mqtt_config": ["b"]},
    {"scene_id": "lab", "shapes": {"type": "square", "side": 1}},
])
def test_malformed_scene_documents_raise_value_error(data):
    with pytest.raises(ValueError):
        SceneConfig.from_dict(data)


def test_nan_coordinate_in_yaml_is_rejected(tmp_path):
    path = tmp_path / "nan.yaml"
    path.write_text(
        "scene_id: nan\n"
        "shapes:\n"
        "  - {type: triangle, name: T, points: [[.nan, 0], [1, 0], [0, 1]]}\n"
    )
    scene = SceneConfig.from_yaml(path)

    with pytest.raises(InvalidPointError):
        scene.build_registry()
