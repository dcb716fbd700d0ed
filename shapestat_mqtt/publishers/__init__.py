"""
MQTT Publishers
==============

Bounded Context: Message Production

Design:
- BasePublisher: Abstract base with connection management
- StatsPublisher: Publishes aggregation results
- LargestShapePublisher: Publishes largest-shape notifications (observer)

Public API
----------
    BasePublisher: Abstract publisher (for custom publishers)
    StatsPublisher: Stats message publisher
    LargestShapePublisher: Largest-shape notice publisher
"""

from .base import BasePublisher
from .stats import StatsPublisher, LargestShapePublisher

__all__ = [
    'BasePublisher',
    'StatsPublisher',
    'LargestShapePublisher',
]
