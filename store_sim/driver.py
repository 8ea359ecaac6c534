from __future__ import annotations

# Event driver.
#
# Replays an event stream against a Store:
#   Setup -> Assigning (arrivals / counter openings) -> Draining -> Done
# Nothing is retried; any error aborts the whole run.

import argparse
import sys
import time
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .activity_log import ActivityLog
from .errors import StoreSimError
from .events import ClientArrival, CounterOpening, Event, StoreConfig, load_config, load_events
from .store import Store


@dataclass
class SimulationResult:
    store: Store
    log: ActivityLog
    clients: int
    counters_opened: int


def simulate(config: StoreConfig, events: Iterable[Event], log: ActivityLog | None = None) -> SimulationResult:
    """Run one full simulation from already-parsed inputs."""
    log = log if log is not None else ActivityLog()
    store = Store.from_config(config, log)

    clients = 0
    opened = 0
    for event in events:
        if isinstance(event, ClientArrival):
            client = store.new_client(event.client_code, event.product_codes, event.time)
            store.assign(client)
            clients += 1
        elif isinstance(event, CounterOpening):
            store.open_counter(event.time)
            opened += 1
        else:
            raise TypeError(f"unsupported event: {event!r}")

    store.finish_assignments()
    store.drain()
    return SimulationResult(store=store, log=log, clients=clients, counters_opened=opened)


def run_simulation(
    config_path: str | Path, events_path: str | Path, log: ActivityLog | None = None
) -> SimulationResult:
    """Load both input files and run the simulation.

    Both files are read before any counter opens, so a missing file means the
    simulation never starts.
    """
    config = load_config(config_path)
    events = load_events(events_path)
    return simulate(config, events, log)


def main() -> None:
    parser = argparse.ArgumentParser(description="Store checkout simulation")
    parser.add_argument("--config", required=True, help="store configuration file")
    parser.add_argument("--events", required=True, help="event file")
    parser.add_argument("--output", default=None, help="write the activity log here instead of stdout")
    parser.add_argument("--mqtt-host", default=None, help="stream the activity log to this MQTT broker")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default="store/v0")
    args = parser.parse_args()

    log = ActivityLog()
    mqtt_client = None
    if args.mqtt_host:
        # Import MQTT dependencies only when streaming.
        from .mqtt_client import LogPublisher, MqttClient

        mqtt_client = MqttClient(client_id=f"store-sim-{int(time.time())}", host=args.mqtt_host, port=args.mqtt_port)
        mqtt_client.start()
        log.add_handler(LogPublisher(mqtt_client, args.namespace))
        print(f"[run] streaming to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}", file=sys.stderr)

    try:
        result = run_simulation(args.config, args.events, log)
        if mqtt_client is not None:
            from .mqtt_client import publish_run_summary

            publish_run_summary(mqtt_client, result.store, args.namespace)
    except StoreSimError as e:
        print(f"[run] error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if mqtt_client is not None:
            mqtt_client.stop()

    if args.output:
        log.write(args.output)
        print(
            f"[run] {result.clients} clients, {len(result.store.counters)} counters, "
            f"{len(log)} log lines written to {args.output}"
        )
    else:
        print(log.text())


if __name__ == "__main__":
    main()
