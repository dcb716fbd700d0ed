"""
Configuration schema for shapestat scenes.

A scene is a named, ordered list of shape definitions plus optional MQTT
publishing settings. Scenes are loaded from YAML and validated at load time;
shape geometry is validated when the scene is built into a registry.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from shapestat.geometry import (
    Line,
    Point,
    Quadrilateral,
    Rectangle,
    Rhombus,
    Shape,
    ShapeError,
    ShapeKind,
    Square,
    Triangle,
)
from shapestat.logging import StructuredLogger, LogEvent
from shapestat.registry import ShapeRegistry

VALID_SHAPE_TYPES = {kind.value for kind in ShapeKind}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class ShapeConfig:
    """
    Single shape definition.

    Required fields per shape_type:
    - line: points (2) or length
    - triangle: points (3) or sides (3)
    - quadrilateral: points (4)
    - rectangle: width, height
    - square: side
    - rhombus: side, height
    """

    shape_type: str
    name: Optional[str] = None
    points: Optional[List[Tuple[float, float]]] = None
    sides: Optional[List[float]] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    side: Optional[float] = None

    def __post_init__(self):
        """Validate that the fields match the shape type."""
        if self.shape_type not in VALID_SHAPE_TYPES:
            raise ValueError(
                f"Invalid shape_type: {self.shape_type}. "
                f"Must be one of {sorted(VALID_SHAPE_TYPES)}"
            )

        label = self.name or self.shape_type

        if self.shape_type == ShapeKind.LINE.value:
            if (self.points is None) == (self.length is None):
                raise ValueError(f"Line '{label}' needs either 'points' or 'length'")
            self._require_point_count(2, label)

        elif self.shape_type == ShapeKind.TRIANGLE.value:
            if (self.points is None) == (self.sides is None):
                raise ValueError(f"Triangle '{label}' needs either 'points' or 'sides'")
            if self.sides is not None and len(self.sides) != 3:
                raise ValueError(
                    f"Triangle '{label}' must have exactly 3 sides, got {len(self.sides)}"
                )
            self._require_point_count(3, label)

        elif self.shape_type == ShapeKind.QUADRILATERAL.value:
            if self.points is None:
                raise ValueError(f"Quadrilateral '{label}' needs 'points'")
            self._require_point_count(4, label)

        elif self.shape_type == ShapeKind.RECTANGLE.value:
            if self.width is None or self.height is None:
                raise ValueError(f"Rectangle '{label}' needs 'width' and 'height'")

        elif self.shape_type == ShapeKind.SQUARE.value:
            if self.side is None:
                raise ValueError(f"Square '{label}' needs 'side'")

        elif self.shape_type == ShapeKind.RHOMBUS.value:
            if self.side is None or self.height is None:
                raise ValueError(f"Rhombus '{label}' needs 'side' and 'height'")

    def _require_point_count(self, count: int, label: str) -> None:
        if self.points is not None and len(self.points) != count:
            raise ValueError(
                f"{self.shape_type.capitalize()} '{label}' must have exactly "
                f"{count} points, got {len(self.points)}"
            )

    def _vertices(self) -> List[Point]:
        return [Point.from_pair(pair) for pair in self.points or []]

    def build(self) -> Shape:
        """
        Construct the shape.

        Raises:
            ShapeError: If the geometry is invalid
        """
        kind = ShapeKind(self.shape_type)

        if kind is ShapeKind.LINE:
            if self.length is not None:
                return Line.from_length(self.length, name=self.name)
            start, end = self._vertices()
            return Line(start=start, end=end, name=self.name)

        if kind is ShapeKind.TRIANGLE:
            if self.sides is not None:
                a, b, c = self.sides
                return Triangle(a=a, b=b, c=c, name=self.name)
            return Triangle.from_points(self._vertices(), name=self.name)

        if kind is ShapeKind.QUADRILATERAL:
            return Quadrilateral(vertices=tuple(self._vertices()), name=self.name)

        if kind is ShapeKind.RECTANGLE:
            return Rectangle(width=self.width, height=self.height, name=self.name)

        if kind is ShapeKind.SQUARE:
            return Square(side=self.side, name=self.name)

        return Rhombus(side=self.side, height=self.height, name=self.name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShapeConfig":
        """Parse one YAML shape entry."""
        if "type" not in data:
            raise ValueError(f"Shape entry missing 'type': {data}")

        points = data.get("points")
        sides = data.get("sides")
        return cls(
            shape_type=str(data["type"]).lower(),
            name=data.get("name"),
            points=[tuple(coord) for coord in points] if points is not None else None,
            sides=[float(s) for s in sides] if sides is not None else None,
            length=data.get("length"),
            width=data.get("width"),
            height=data.get("height"),
            side=data.get("side"),
        )


@dataclass(frozen=True)
class MQTTConfig:
    """MQTT broker configuration for stats publishing."""

    broker: str
    port: int = 1883
    username: Optional[str] = None
    password: Optional[str] = None
    qos: int = 0
    client_id: str = "shapestat"

    stats_topic: str = "shapestat/stats/{scene_id}"
    largest_topic: str = "shapestat/largest/{scene_id}"

    def __post_init__(self):
        """Validate MQTT configuration."""
        if not self.broker:
            raise ValueError("MQTT broker cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ValueError(
                f"MQTT port must be in [1, 65535], got {self.port}"
            )

        if self.qos not in {0, 1, 2}:
            raise ValueError(
                f"MQTT QoS must be 0, 1, or 2, got {self.qos}"
            )

    def stats_topic_for(self, scene_id: str) -> str:
        return self.stats_topic.format(scene_id=scene_id)

    def largest_topic_for(self, scene_id: str) -> str:
        return self.largest_topic.format(scene_id=scene_id)


@dataclass(frozen=True)
class SceneConfig:
    """
    Main configuration for one shape scene.

    Loaded from YAML and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    scene_id: str
    shapes: List[ShapeConfig] = field(default_factory=list)
    mqtt_config: Optional[MQTTConfig] = None
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate scene configuration."""
        if not self.scene_id:
            raise ValueError("scene_id cannot be empty")

        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level)

    def build_registry(self, logger: Optional[StructuredLogger] = None) -> ShapeRegistry:
        """
        Construct every shape, in order, into a new registry.

        Raises:
            ShapeError: On the first shape whose geometry is invalid
                (nothing is registered for it)
        """
        logger = logger or StructuredLogger(component="config")
        registry = ShapeRegistry(logger=logger)

        for index, shape_config in enumerate(self.shapes):
            try:
                shape = shape_config.build()
            except ShapeError as e:
                logger.error(
                    event=LogEvent.SHAPE_REJECTED,
                    message="Shape failed validation",
                    exc_info=e,
                    metadata={
                        'scene_id': self.scene_id,
                        'index': index,
                        'shape_type': shape_config.shape_type,
                        'name': shape_config.name,
                    }
                )
                raise
            registry.add_shape(shape)

        return registry

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SceneConfig":
        """
        Parse a scene document (already loaded from YAML).

        A null or missing shapes list is an empty scene.

        Raises:
            ValueError: If the document or any entry is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Scene must be a mapping, got {type(data).__name__}")

        mqtt_data = data.get("mqtt_config")
        mqtt_config = None
        if mqtt_data:
            if not isinstance(mqtt_data, dict):
                raise ValueError(f"mqtt_config must be a mapping, got {type(mqtt_data).__name__}")
            try:
                mqtt_config = MQTTConfig(**mqtt_data)
            except TypeError as e:
                raise ValueError(f"Invalid mqtt_config: {e}")

        shapes = data.get("shapes") or []
        if not isinstance(shapes, list):
            raise ValueError(f"shapes must be a list, got {type(shapes).__name__}")

        return cls(
            scene_id=str(data.get("scene_id", "")),
            shapes=[ShapeConfig.from_dict(s) for s in shapes],
            mqtt_config=mqtt_config,
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "SceneConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            scene_id: "lab"
            log_level: "INFO"

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

            mqtt_config:
              broker: "localhost"
              port: 1883

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML or the scene is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Scene file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}")

        scene = cls.from_dict(data)
        StructuredLogger(component="config").info(
            event=LogEvent.CONFIG_LOADED,
            message="Loaded scene configuration",
            metadata={'scene_id': scene.scene_id, 'path': str(path), 'shape_count': len(scene.shapes)}
        )
        return scene
