"""Small MQTT publisher built on top of paho-mqtt.

Why this exists:
- A simulation run can stream its activity log to a broker so dashboards can
  follow it live.
- The simulation itself never waits on the network: publishing is fire and
  forget (QoS 0) and the paho network loop runs in the background.

`LogPublisher` bridges an `ActivityLog` to a topic: register it with
`ActivityLog.add_handler()` and every appended line is published.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import paho.mqtt.client as mqtt

from .cart import format_money
from .mqtt_topics import DEFAULT_NAMESPACE, activity_log, counter_status, run_summary
from .store import Store


class Publisher(Protocol):
    def publish(self, topic: str, message: dict[str, Any]) -> None: ...


class MqttClient:
    """Thin wrapper around paho-mqtt with a JSON publish API."""

    def __init__(
        self,
        *,
        client_id: str,
        host: str,
        port: int,
        keepalive: int = 30,
    ) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port
        self.keepalive = keepalive

        self._client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id, clean_session=True)
        self._started = False

    def start(self) -> None:
        """Connect and start the background network loop."""
        if self._started:
            return
        self._client.connect(self.host, self.port, keepalive=self.keepalive)
        self._client.loop_start()
        self._started = True

    def stop(self) -> None:
        """Flush, stop and disconnect."""
        if not self._started:
            return
        self._client.disconnect()
        self._client.loop_stop()
        self._started = False

    def publish(self, topic: str, message: dict[str, Any]) -> None:
        payload = json.dumps(message, separators=(",", ":")).encode("utf-8")
        self._client.publish(topic, payload=payload, qos=0)


class LogPublisher:
    """Activity log handler that publishes each line with its sequence number."""

    def __init__(self, publisher: Publisher, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._publisher = publisher
        self._topic = activity_log(namespace)
        self._seq = 0

    def __call__(self, line: str) -> None:
        self._seq += 1
        self._publisher.publish(self._topic, {"type": "log_line", "seq": self._seq, "line": line})


def publish_run_summary(publisher: Publisher, store: Store, namespace: str = DEFAULT_NAMESPACE) -> None:
    """Publish one status message per counter, then the run totals."""
    for counter in store.counters:
        publisher.publish(
            counter_status(counter.counter_id, namespace),
            {
                "type": "counter_status",
                "counter_id": counter.counter_id,
                "current_time": counter.current_time,
                "sales_amount": format_money(counter.sales_amount),
            },
        )
    publisher.publish(
        run_summary(namespace),
        {
            "type": "run_summary",
            "phase": store.phase.value,
            "counters": len(store.counters),
            "total_sales": format_money(store.total_sales_amount),
        },
    )
