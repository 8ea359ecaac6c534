"""MQTT topic helpers.

We keep topic construction in one place so publishers and subscribers agree on
naming.

Topic layout under a configurable namespace (default: `store/v0`):

- `<ns>/log`
    Every activity log line, in simulation order (one message per line).
- `<ns>/counters/status/<counter_id>`
    Final per-counter snapshot after the drain phase.
- `<ns>/summary`
    One message at the end of a run with totals.

You can run multiple independent simulations on a shared broker by changing
the `namespace` parameter (e.g. `--namespace demo/alice`).
"""

from __future__ import annotations

DEFAULT_NAMESPACE = "store/v0"


def activity_log(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/log"


def counter_status(counter_id: int | str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/counters/status/{counter_id}"


def run_summary(namespace: str = DEFAULT_NAMESPACE) -> str:
    """End-of-run totals. Observers subscribe here to learn a run is done."""
    return f"{namespace}/summary"
