from __future__ import annotations

# Cart helpers.
#
# A client's cart is an ordered sequence of catalog products. Both the time it
# takes to serve the client and the amount it pays are plain sums over the cart:
#   processing_duration = sum(product.processing_duration)
#   payment             = sum(product.price)

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from .models import Product

CENT = Decimal("0.01")


def cart_processing_duration(cart: Iterable[Product]) -> int:
    """Compute how many ticks a counter needs to serve this cart.

    Returns:
        Non-negative int.
    """
    total = 0
    for product in cart:
        if product.processing_duration < 0:
            raise ValueError("processing_duration must be >= 0")
        total += product.processing_duration
    return total


def cart_total(cart: Iterable[Product]) -> Decimal:
    """Sum of the product prices in the cart."""
    return sum((product.price for product in cart), Decimal("0"))


def format_money(amount: Decimal) -> str:
    """Two decimals, half-up rounding, `.` separator (locale independent)."""
    return format(amount.quantize(CENT, rounding=ROUND_HALF_UP), "f")
