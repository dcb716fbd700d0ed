"""
Base MQTT Publisher
===================

Bounded Context: MQTT Infrastructure

Design:
- One paho-mqtt client per publisher, network loop on paho's own thread
- Subclasses turn domain objects into dicts (format_message); the base
  class owns JSON encoding, QoS and delivery bookkeeping
- Every broker interaction is reported through StructuredLogger

Architecture:
    BasePublisher (abstract)
        ↓
    StatsPublisher, LargestShapePublisher (concrete)
"""

import json
import threading
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import paho.mqtt.client as mqtt

from shapestat.logging import StructuredLogger, LogEvent


class BasePublisher(ABC):
    """
    Connection-owning MQTT publisher.

    Attributes:
        broker_host, broker_port: Broker address
        topic: Destination topic for every message
        client_id: MQTT client identifier
        qos: Quality of Service for every message
        logger: Structured logger
        client: Underlying paho-mqtt client

    Thread Safety:
        publish() may be called from worker threads (e.g. a deferred stats
        handler); the message counter is lock-guarded and the connection
        flag is a threading.Event set from paho's callback thread.
    """

    def __init__(
        self,
        broker_host: str,
        broker_port: int,
        topic: str,
        client_id: str,
        logger: StructuredLogger,
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0
    ):
        self.broker_host = broker_host
        self.broker_port = broker_port
        self.topic = topic
        self.client_id = client_id
        self.logger = logger
        self.qos = qos

        self.client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id
        )
        if username and password:
            self.client.username_pw_set(username, password)
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect

        self._connected = threading.Event()
        self._count_lock = threading.Lock()
        self._message_count = 0

    @property
    def broker(self) -> str:
        """Broker address as host:port."""
        return f"{self.broker_host}:{self.broker_port}"

    # ------------------------------------------------------------------
    # paho callbacks (run on the network loop thread)
    # ------------------------------------------------------------------

    def _on_connect(self, client, userdata, flags, reason_code, properties=None) -> None:
        if reason_code.is_failure:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message=f"Broker refused connection: {reason_code}",
                metadata={'broker': self.broker, 'client_id': self.client_id}
            )
            return

        self._connected.set()
        self.logger.info(
            event=LogEvent.MQTT_CONNECTED,
            message="Connected to MQTT broker",
            metadata={'broker': self.broker, 'client_id': self.client_id, 'topic': self.topic}
        )

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None) -> None:
        self._connected.clear()
        self.logger.warning(
            event=LogEvent.MQTT_DISCONNECTED,
            message="Connection to MQTT broker closed",
            metadata={'broker': self.broker, 'reason_code': str(reason_code)}
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def connect(self, timeout: float = 10.0) -> bool:
        """
        Open the connection and start the network loop.

        Returns:
            True once the broker acknowledged, False on refusal, socket
            error or timeout (the failure is logged)
        """
        try:
            self.client.connect(self.broker_host, self.broker_port)
        except OSError as e:
            self.logger.error(
                event=LogEvent.MQTT_CONNECTION_ERROR,
                message="Could not reach MQTT broker",
                exc_info=e,
                metadata={'broker': self.broker}
            )
            return False

        self.client.loop_start()
        if self._connected.wait(timeout=timeout):
            return True

        self.logger.error(
            event=LogEvent.MQTT_CONNECTION_ERROR,
            message="No connection acknowledgement from broker",
            metadata={'broker': self.broker, 'timeout': timeout}
        )
        return False

    def disconnect(self) -> None:
        """Stop the network loop and close the connection."""
        self.client.loop_stop()
        self.client.disconnect()
        self._connected.clear()
        self.logger.info(
            event=LogEvent.MQTT_DISCONNECTED,
            message="Publisher closed",
            metadata={'broker': self.broker, 'message_count': self._message_count}
        )

    def is_connected(self) -> bool:
        return self._connected.is_set()

    def __enter__(self) -> "BasePublisher":
        if not self.connect():
            raise ConnectionError(f"Could not connect to MQTT broker {self.broker}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    @abstractmethod
    def format_message(self, *args, **kwargs) -> Dict[str, Any]:
        """Turn a domain object into a JSON-ready dict."""

    def publish(self, message_data: Dict[str, Any], retain: bool = False) -> bool:
        """
        Encode and send one message.

        Returns:
            True if paho accepted the message, False otherwise (logged)
        """
        if not self._connected.is_set():
            self.logger.warning(
                event=LogEvent.MQTT_PUBLISH_FAILED,
                message="Not connected, message dropped",
                metadata={'topic': self.topic}
            )
            return False

        try:
            payload = json.dumps(message_data)
        except (TypeError, ValueError) as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Message is not JSON serializable",
                exc_info=e,
                metadata={'topic': self.topic}
            )
            return False

        info = self.client.publish(topic=self.topic, payload=payload, qos=self.qos, retain=retain)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            self.logger.warning(
                event=LogEvent.MQTT_PUBLISH_FAILED,
                message=f"paho rejected message (rc={info.rc})",
                metadata={'topic': self.topic}
            )
            return False

        with self._count_lock:
            self._message_count += 1
            count = self._message_count

        self.logger.debug(
            event=LogEvent.MQTT_PUBLISH_SUCCESS,
            message="Published message",
            metadata={'topic': self.topic, 'qos': self.qos, 'message_count': count}
        )
        return True

    def get_stats(self) -> Dict[str, Any]:
        """Delivery counters and connection state."""
        with self._count_lock:
            count = self._message_count
        return {
            'message_count': count,
            'connected': self.is_connected(),
            'topic': self.topic,
            'broker': self.broker,
        }
