"""Append-only activity log.

Every component of a run writes to the same `ActivityLog`, in the order the
simulation's logical clock produces entries. Line formats:

- `[TS <t>] Counter <id> open.`
- `[TS <t>] Client <code> assigned to counter <id>, processing will take <d>.`
- `[TS <t>] Client <code> has finished processing. Total wait time: <w>. Payment: <amount>€.`
- `All clients have been assigned to a counter!`
- `All clients have been processed!`
- `Total sales: <amount>€.`

Handlers registered with `add_handler()` see each line as it is appended
(the CLI uses this to stream the log over MQTT).
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Callable

from .cart import format_money

LineHandler = Callable[[str], None]


def counter_open_line(time: int, counter_id: int) -> str:
    return f"[TS {time}] Counter {counter_id} open."


def client_assigned_line(time: int, client_code: int, counter_id: int, duration: int) -> str:
    return f"[TS {time}] Client {client_code} assigned to counter {counter_id}, processing will take {duration}."


def client_finished_line(time: int, client_code: int, wait: int, payment: Decimal) -> str:
    return (
        f"[TS {time}] Client {client_code} has finished processing. "
        f"Total wait time: {wait}. Payment: {format_money(payment)}€."
    )


ALL_ASSIGNED_LINE = "All clients have been assigned to a counter!"
ALL_PROCESSED_LINE = "All clients have been processed!"


def total_sales_line(amount: Decimal) -> str:
    return f"Total sales: {format_money(amount)}€."


class ActivityLog:
    """Ordered, append-only list of log lines."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._handlers: list[LineHandler] = []

    def add_handler(self, handler: LineHandler) -> None:
        self._handlers.append(handler)

    def append(self, line: str) -> None:
        self._lines.append(line)
        for h in list(self._handlers):
            h(line)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    def write(self, path: str | Path) -> None:
        Path(path).write_text(self.text() + "\n", encoding="utf-8")
