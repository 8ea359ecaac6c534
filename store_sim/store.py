from __future__ import annotations

# The Store is the router and the clock driver of the simulation.
#
# It owns the counters (append-only: new counters open mid-run, none ever
# close) and the product catalog. Two separate rankings live here:
# 1) `first_counter_to_finish()`: used when a client arrives; compares the
#    *total* outstanding load of every counter.
# 2) `first_counter_to_finish_client()`: used while draining; compares only the
#    *front* client of every non-empty counter.

import enum
from collections.abc import Iterable, Mapping
from decimal import Decimal

from .activity_log import ALL_ASSIGNED_LINE, ALL_PROCESSED_LINE, ActivityLog, total_sales_line
from .cart import cart_processing_duration, cart_total
from .counter import Counter
from .errors import SimulationStateError
from .events import StoreConfig
from .models import Client, Product


class Phase(enum.Enum):
    SETUP = "setup"
    ASSIGNING = "assigning"
    DRAINING = "draining"
    DONE = "done"


class Store:
    """Routes arriving clients to counters and drains them at the end."""

    def __init__(self, num_counters: int, catalog: Mapping[str, Product], log: ActivityLog) -> None:
        if num_counters < 0:
            raise ValueError("num_counters must be >= 0")
        self._log = log
        self._catalog: dict[str, Product] = dict(catalog)
        self._counters: list[Counter] = [Counter(i, 0, log) for i in range(num_counters)]
        self._total_sales_amount = Decimal("0")
        self._phase = Phase.SETUP

    @classmethod
    def from_config(cls, config: StoreConfig, log: ActivityLog) -> Store:
        return cls(config.num_counters, config.catalog(), log)

    # -------------------- clients --------------------

    def new_client(self, code: int, product_codes: Iterable[str], arrival_time: int) -> Client:
        """Build a client from raw product codes.

        Unknown codes are skipped. The cart total is booked into the store-wide
        sales right here, on arrival, not when the client leaves its counter.
        """
        cart = tuple(self._catalog[c] for c in product_codes if c in self._catalog)
        self._total_sales_amount += cart_total(cart)
        return Client(
            code=code,
            cart=cart,
            arrival_time=arrival_time,
            remaining_processing_duration=cart_processing_duration(cart),
        )

    def assign(self, client: Client) -> Counter:
        """Catch every counter up to the arrival tick, then enqueue on the least loaded one."""
        self._enter_assigning("assign")
        for counter in self._counters:
            counter.advance_until_time(client.arrival_time)
        counter = self._counters[self.first_counter_to_finish()]
        counter.enqueue(client)
        return counter

    def open_counter(self, at_time: int) -> Counter:
        self._enter_assigning("open_counter")
        counter = Counter(len(self._counters), at_time, self._log)
        self._counters.append(counter)
        return counter

    # -------------------- rankings --------------------

    def first_counter_to_finish(self) -> int:
        """Index of the counter with the least outstanding load.

        Strict comparison in ascending index order, so the lowest index wins ties.
        """
        if not self._counters:
            raise SimulationStateError("store has no counters")
        best = 0
        for i in range(1, len(self._counters)):
            if self._counters[i].outstanding_load() < self._counters[best].outstanding_load():
                best = i
        return best

    def first_counter_to_finish_client(self) -> int | None:
        """Index of the non-empty counter whose front client needs the fewest ticks.

        Returns None when every counter is empty.
        """
        best: int | None = None
        best_remaining = 0
        for i, counter in enumerate(self._counters):
            if counter.is_empty():
                continue
            remaining = counter.peek_front().remaining_processing_duration
            if best is None or remaining < best_remaining:
                best = i
                best_remaining = remaining
        return best

    # -------------------- draining --------------------

    def finish_assignments(self) -> None:
        """Close the input side: no more arrivals or openings after this."""
        if self._phase not in (Phase.SETUP, Phase.ASSIGNING):
            raise SimulationStateError(f"cannot finish assignments in phase {self._phase.value}")
        self._log.append(ALL_ASSIGNED_LINE)
        self._phase = Phase.DRAINING

    def drain_step(self) -> Counter | None:
        """Finish the globally shortest front client. Returns the counter that moved."""
        idx = self.first_counter_to_finish_client()
        if idx is None:
            return None
        counter = self._counters[idx]
        remaining = counter.peek_front().remaining_processing_duration
        if remaining == 0:
            # A zero-tick advance is a no-op, so empty carts are popped directly.
            counter.pop_front()
        else:
            counter.advance_by_duration(remaining)
        return counter

    def drain(self) -> Decimal:
        """Run the drain phase to completion and return the final store-wide sales."""
        if self._phase is not Phase.DRAINING:
            raise SimulationStateError(f"cannot drain in phase {self._phase.value}")
        while not self.is_finished():
            self.drain_step()
        self._log.append(ALL_PROCESSED_LINE)
        self._log.append(total_sales_line(self._total_sales_amount))
        self._phase = Phase.DONE
        return self._total_sales_amount

    def is_finished(self) -> bool:
        return all(counter.is_empty() for counter in self._counters)

    # -------------------- accessors --------------------

    def _enter_assigning(self, op: str) -> None:
        if self._phase is Phase.SETUP:
            self._phase = Phase.ASSIGNING
        elif self._phase is not Phase.ASSIGNING:
            raise SimulationStateError(f"{op} not allowed in phase {self._phase.value}")

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def counters(self) -> tuple[Counter, ...]:
        return tuple(self._counters)

    @property
    def catalog(self) -> dict[str, Product]:
        return dict(self._catalog)

    @property
    def total_sales_amount(self) -> Decimal:
        return self._total_sales_amount

    def counter_sales_amount(self) -> Decimal:
        """Revenue booked by the counters on completion."""
        return sum((c.sales_amount for c in self._counters), Decimal("0"))
