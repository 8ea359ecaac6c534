"""Shared error types.

We keep failures consistent across parsing, the counters and the store:
everything raised on purpose derives from `StoreSimError`.
"""

from __future__ import annotations


class StoreSimError(Exception):
    """Base class for all simulation errors."""


class InputFileError(StoreSimError):
    """An input artifact (config or event file) is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class ParseError(StoreSimError, ValueError):
    """A config or event line could not be parsed."""

    def __init__(self, message: str, *, source: str = "<input>", line_no: int | None = None, line: str = "") -> None:
        where = source if line_no is None else f"{source}:{line_no}"
        super().__init__(f"{where}: {message}")
        self.source = source
        self.line_no = line_no
        self.line = line


class EmptyCounterError(StoreSimError, IndexError):
    """Peek/pop on a counter with no queued clients."""


class SimulationStateError(StoreSimError, RuntimeError):
    """An operation was called in the wrong simulation phase."""
