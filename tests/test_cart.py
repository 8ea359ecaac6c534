from decimal import Decimal

import pytest

from store_sim.cart import cart_processing_duration, cart_total, format_money
from store_sim.models import Product


def test_cart_totals():
    apple = Product("APPLE", Decimal("0.35"), 1)
    wine = Product("WINE", Decimal("7.90"), 3)
    cart = (apple, wine, apple)
    assert cart_processing_duration(cart) == 5
    assert cart_total(cart) == Decimal("8.60")


def test_empty_cart_is_free_and_instant():
    assert cart_processing_duration(()) == 0
    assert cart_total(()) == Decimal("0")


def test_cart_processing_duration_rejects_negative():
    with pytest.raises(ValueError):
        cart_processing_duration([Product("BAD", Decimal("1"), -1)])


def test_format_money_two_decimals_half_up():
    assert format_money(Decimal("10")) == "10.00"
    assert format_money(Decimal("0.125")) == "0.13"
    assert format_money(Decimal("1234.5")) == "1234.50"
    assert format_money(Decimal("1.005")) == "1.01"
