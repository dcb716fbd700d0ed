"""
Shape Stats Message Schema
==========================

Bounded Context: Stats Message Data Structures

Message Flow:
    StatsAggregator → ShapeStats → ShapeStatsMessage → StatsPublisher → MQTT
    StatsAggregator → observer → LargestShapeNotice → LargestShapePublisher → MQTT
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from shapestat.analytics import ShapeStats
from .common import Timestamp

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class ShapeStatsMessage:
    """
    Complete stats message for MQTT publication.

    Attributes:
        schema_version: Message schema version (for evolution)
        timestamp: ISO 8601 timestamp of message creation
        scene_id: Scene the stats were computed for
        stats: Aggregation result

    Example:
        >>> msg = ShapeStatsMessage(
        ...     schema_version="1.0",
        ...     timestamp=Timestamp.now(),
        ...     scene_id="lab",
        ...     stats=aggregator.compute(registry.shapes())
        ... )
    """
    schema_version: str
    timestamp: Timestamp
    scene_id: str
    stats: ShapeStats

    def __post_init__(self):
        """Validate invariants."""
        if not self.scene_id:
            raise ValueError("scene_id cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'scene_id': self.scene_id,
            'stats': self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShapeStatsMessage':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                schema_version=str(data['schema_version']),
                timestamp=Timestamp(value=data['timestamp']),
                scene_id=str(data['scene_id']),
                stats=ShapeStats.from_dict(data['stats']),
            )
        except KeyError as e:
            raise ValueError(f"Missing required ShapeStatsMessage field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid ShapeStatsMessage data: {e}")

    @classmethod
    def create(cls, scene_id: str, stats: ShapeStats) -> 'ShapeStatsMessage':
        """Build a message stamped with the current time and schema version."""
        return cls(
            schema_version=SCHEMA_VERSION,
            timestamp=Timestamp.now(),
            scene_id=scene_id,
            stats=stats,
        )


@dataclass(frozen=True)
class LargestShapeNotice:
    """
    Largest-area shape notification.

    description is None when no shape in the pass had a valid area.
    """
    schema_version: str
    timestamp: Timestamp
    scene_id: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'scene_id': self.scene_id,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LargestShapeNotice':
        """Deserialize from dict."""
        try:
            return cls(
                schema_version=str(data['schema_version']),
                timestamp=Timestamp(value=data['timestamp']),
                scene_id=str(data['scene_id']),
                description=data.get('description'),
            )
        except KeyError as e:
            raise ValueError(f"Missing required LargestShapeNotice field: {e}")
