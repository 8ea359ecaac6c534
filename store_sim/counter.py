from __future__ import annotations

# A single service counter: a FIFO queue of clients plus its own clock.
#
# Counters are advanced lazily. Nothing happens at a counter until somebody
# asks it to catch up to a later tick (`advance_until_time`) or to spend a fixed
# amount of time (`advance_by_duration`); the queue is then consumed from the
# front for exactly that many ticks.

from collections import deque
from decimal import Decimal

from .activity_log import ActivityLog, client_assigned_line, client_finished_line, counter_open_line
from .cart import cart_total
from .errors import EmptyCounterError
from .models import Client


class Counter:
    """One counter and its queue.

    Invariant: `total_processing_duration` always equals the sum of
    `remaining_processing_duration` over the queued clients.
    """

    def __init__(self, counter_id: int, current_time: int, log: ActivityLog) -> None:
        self._counter_id = counter_id
        self._current_time = current_time
        self._sales_amount = Decimal("0")
        self._total_processing_duration = 0
        self._queue: deque[Client] = deque()
        self._log = log
        log.append(counter_open_line(current_time, counter_id))

    # -------------------- queue operations --------------------

    def enqueue(self, client: Client) -> None:
        """Put a client at the end of this counter's queue."""
        if client.remaining_processing_duration < 0:
            raise ValueError("remaining_processing_duration must be >= 0")
        self._queue.append(client)
        self._total_processing_duration += client.remaining_processing_duration
        self._log.append(
            client_assigned_line(
                client.arrival_time, client.code, self._counter_id, client.remaining_processing_duration
            )
        )

    def peek_front(self) -> Client:
        """Return the client currently being served."""
        if not self._queue:
            raise EmptyCounterError(f"counter {self._counter_id} has no clients")
        return self._queue[0]

    def pop_front(self) -> Client:
        """Finish the front client: charge its cart and drop it from the queue."""
        client = self.peek_front()
        self._total_processing_duration -= client.remaining_processing_duration
        payment = cart_total(client.cart)
        self._sales_amount += payment
        self._log.append(
            client_finished_line(
                self._current_time, client.code, self._current_time - client.arrival_time, payment
            )
        )
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)

    # -------------------- clock --------------------

    def advance_by_duration(self, duration: int) -> None:
        """Spend `duration` ticks serving the queue.

        The clock moves first, so every client finished inside the window is
        logged at the end of the window. Zero, one or many clients can finish.
        """
        if duration < 0:
            raise ValueError("duration must be >= 0")

        self._current_time += duration
        while self._queue and duration > 0:
            client = self._queue[0]
            remaining = client.remaining_processing_duration
            if remaining <= duration:
                duration -= remaining
                self.pop_front()
                client.remaining_processing_duration = 0
            else:
                client.remaining_processing_duration = remaining - duration
                self._total_processing_duration -= duration
                duration = 0

    def advance_until_time(self, time: int) -> None:
        """Catch up to `time`. Ticks in the past leave the counter untouched."""
        if time > self._current_time:
            self.advance_by_duration(time - self._current_time)

    # -------------------- accessors --------------------

    @property
    def counter_id(self) -> int:
        return self._counter_id

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def sales_amount(self) -> Decimal:
        return self._sales_amount

    @property
    def total_processing_duration(self) -> int:
        return self._total_processing_duration

    def outstanding_load(self) -> int:
        """Ticks of work still queued here (0 for an empty counter)."""
        return 0 if self.is_empty() else self._total_processing_duration

    def queued_clients(self) -> tuple[Client, ...]:
        return tuple(self._queue)
