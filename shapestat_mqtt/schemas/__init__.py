"""
shapestat MQTT Schemas
======================

Bounded Context: Data Structures

Design:
- Frozen dataclasses (immutability)
- to_dict() for JSON serialization
- from_dict() for deserialization
- Schema versioning for evolution

Public API
----------
    Timestamp: ISO 8601 timestamp wrapper
    ShapeStatsMessage: Aggregation result message
    LargestShapeNotice: Largest-shape notification
"""

from .common import Timestamp
from .stats import SCHEMA_VERSION, ShapeStatsMessage, LargestShapeNotice

__all__ = [
    'Timestamp',
    'SCHEMA_VERSION',
    'ShapeStatsMessage',
    'LargestShapeNotice',
]
