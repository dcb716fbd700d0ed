"""
Stats Publishers
================

Bounded Context: Stats Message Production

Design:
- Inherit from BasePublisher (connection management)
- StatsPublisher doubles as a StatsDispatcher handler (handle_stats)
- LargestShapePublisher implements the ShapeObserver protocol

Message Flow:
    StatsDispatcher → handle_stats() → ShapeStatsMessage → MQTT Broker
    StatsAggregator → on_largest_shape_processed() → LargestShapeNotice → MQTT Broker

Example:
    >>> logger = create_logger("publisher")
    >>> stats_pub = StatsPublisher(
    ...     broker_host="localhost",
    ...     topic="shapestat/stats/lab",
    ...     scene_id="lab",
    ...     logger=logger
    ... )
    >>> largest_pub = LargestShapePublisher(
    ...     broker_host="localhost",
    ...     topic="shapestat/largest/lab",
    ...     scene_id="lab",
    ...     logger=logger
    ... )
    >>> stats_pub.connect() and largest_pub.connect()
    >>> dispatcher = StatsDispatcher(aggregator=StatsAggregator(observer=largest_pub))
    >>> dispatcher.compute_stats(registry, stats_pub.handle_stats)
"""

from typing import Dict, Any, Optional

from shapestat.analytics import ShapeStats
from shapestat.logging import StructuredLogger, LogEvent
from .base import BasePublisher
from ..schemas import SCHEMA_VERSION, ShapeStatsMessage, LargestShapeNotice, Timestamp


class StatsPublisher(BasePublisher):
    """
    Publisher for aggregation results.

    Attributes:
        Same as BasePublisher, plus:
        scene_id: Scene stamped on every message
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        scene_id: str,
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "shapestat_stats_publisher",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        super().__init__(
            broker_host=broker_host,
            broker_port=broker_port,
            topic=topic,
            client_id=client_id,
            logger=logger,
            username=username,
            password=password,
            qos=qos
        )
        self.scene_id = scene_id

    def format_message(self, stats_msg: ShapeStatsMessage) -> Dict[str, Any]:
        """
        Format ShapeStatsMessage to JSON-compatible dict.

        Raises:
            ValueError: If stats_msg cannot be serialized
        """
        try:
            formatted = stats_msg.to_dict()

            self.logger.debug(
                event=LogEvent.STATS_SERIALIZED,
                message="Serialized stats message",
                metadata={
                    'scene_id': stats_msg.scene_id,
                    'shape_count': stats_msg.stats.shape_count
                }
            )

            return formatted

        except Exception as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Failed to serialize stats message",
                exc_info=e,
                metadata={'scene_id': getattr(stats_msg, 'scene_id', None)}
            )
            raise ValueError(f"Failed to format stats message: {e}")

    def publish_stats(self, stats_msg: ShapeStatsMessage) -> bool:
        """
        Publish a stats message to the broker.

        Returns:
            True if published successfully, False otherwise
        """
        try:
            message_data = self.format_message(stats_msg)
            return self.publish(message_data)

        except Exception as e:
            self.logger.error(
                event=LogEvent.MQTT_PUBLISH_ERROR,
                message="Error publishing stats message",
                exc_info=e,
                metadata={'scene_id': stats_msg.scene_id, 'topic': self.topic}
            )
            return False

    def handle_stats(self, stats: ShapeStats) -> None:
        """StatsDispatcher handler: wrap and publish a result."""
        self.publish_stats(ShapeStatsMessage.create(self.scene_id, stats))


class LargestShapePublisher(BasePublisher):
    """
    Largest-shape observer that forwards each notification to MQTT.

    Plug into StatsAggregator(observer=...). The aggregator borrows it;
    connection lifecycle stays with the caller.
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        scene_id: str,
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "shapestat_largest_publisher",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        super().__init__(
            broker_host=broker_host,
            broker_port=broker_port,
            topic=topic,
            client_id=client_id,
            logger=logger,
            username=username,
            password=password,
            qos=qos
        )
        self.scene_id = scene_id

    def format_message(self, notice: LargestShapeNotice) -> Dict[str, Any]:
        return notice.to_dict()

    def on_largest_shape_processed(self, description: Optional[str]) -> None:
        notice = LargestShapeNotice(
            schema_version=SCHEMA_VERSION,
            timestamp=Timestamp.now(),
            scene_id=self.scene_id,
            description=description,
        )
        self.publish(self.format_message(notice))
