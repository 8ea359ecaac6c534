from __future__ import annotations

# Plain data records shared by the counters and the store.

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """Catalog entry. Shared read-only by every cart that references it."""

    code: str
    price: Decimal
    processing_duration: int  # ticks


@dataclass
class Client:
    """One arriving client.

    `remaining_processing_duration` starts at the sum of the cart durations and
    is decremented by the counter that serves the client.
    """

    code: int
    cart: tuple[Product, ...]
    arrival_time: int
    remaining_processing_duration: int = field(default=0)
