"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<category>.<action>

    component: shape, stats, config, mqtt, error

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.scene_id
    | filter event = "stats.shape_skipped"
    | stats count() by bin(5m)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - shape.*: Registry membership
    - stats.*: Aggregation and result delivery
    - config.*: Scene configuration
    - mqtt.*: MQTT broker interactions
    - error.*: Error conditions
    """

    # ========== Shape Events ==========
    SHAPE_ADDED = "shape.added"
    """Shape appended to a registry."""

    SHAPE_REJECTED = "shape.rejected"
    """Shape construction failed validation."""

    # ========== Stats Events ==========
    STATS_COMPUTED = "stats.computed"
    """Aggregation pass finished."""

    STATS_SHAPE_SKIPPED = "stats.shape_skipped"
    """Shape excluded from area extrema (evaluation error)."""

    STATS_DISPATCHED = "stats.dispatched"
    """Aggregation submitted to a background worker."""

    STATS_DELIVERED = "stats.delivered"
    """Result handler invoked."""

    STATS_OBSERVER_FAILED = "stats.observer_failed"
    """Largest-shape observer raised during notification."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Scene configuration loaded from YAML."""

    # ========== MQTT Events ==========
    MQTT_CONNECTED = "mqtt.connected"
    """MQTT broker connection established."""

    MQTT_DISCONNECTED = "mqtt.disconnected"
    """MQTT broker connection lost."""

    MQTT_PUBLISH_SUCCESS = "mqtt.publish.success"
    """Message successfully published to broker."""

    MQTT_PUBLISH_FAILED = "mqtt.publish.failed"
    """Message publication failed."""

    STATS_SERIALIZED = "stats.serialized"
    """Stats message serialized to JSON."""

    # ========== Error Events ==========
    SERIALIZATION_ERROR = "error.serialization"
    """Failed to serialize message to JSON."""

    DELIVERY_ERROR = "error.delivery"
    """Deferred aggregation failed before delivery."""

    MQTT_CONNECTION_ERROR = "error.mqtt_connection"
    """Failed to connect to MQTT broker."""

    MQTT_PUBLISH_ERROR = "error.mqtt_publish"
    """Error during message publication."""


# Event categories for filtering
SHAPE_EVENTS = {
    LogEvent.SHAPE_ADDED,
    LogEvent.SHAPE_REJECTED,
}

STATS_EVENTS = {
    LogEvent.STATS_COMPUTED,
    LogEvent.STATS_SHAPE_SKIPPED,
    LogEvent.STATS_DISPATCHED,
    LogEvent.STATS_DELIVERED,
    LogEvent.STATS_OBSERVER_FAILED,
    LogEvent.STATS_SERIALIZED,
}

MQTT_EVENTS = {
    LogEvent.MQTT_CONNECTED,
    LogEvent.MQTT_DISCONNECTED,
    LogEvent.MQTT_PUBLISH_SUCCESS,
    LogEvent.MQTT_PUBLISH_FAILED,
}

ERROR_EVENTS = {
    LogEvent.SERIALIZATION_ERROR,
    LogEvent.DELIVERY_ERROR,
    LogEvent.MQTT_CONNECTION_ERROR,
    LogEvent.MQTT_PUBLISH_ERROR,
}
