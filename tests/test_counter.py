import random
from decimal import Decimal

import pytest

from store_sim.activity_log import ActivityLog
from store_sim.counter import Counter
from store_sim.errors import EmptyCounterError
from store_sim.models import Client, Product

P1 = Product("P1", Decimal("10.00"), 1)


def make_client(code, duration, arrival=0, cart=(P1,)):
    return Client(code=code, cart=cart, arrival_time=arrival, remaining_processing_duration=duration)


def assert_invariant(counter):
    assert counter.total_processing_duration == sum(
        c.remaining_processing_duration for c in counter.queued_clients()
    )


def test_new_counter_logs_open():
    log = ActivityLog()
    c = Counter(4, 7, log)
    assert log.lines == ("[TS 7] Counter 4 open.",)
    assert c.counter_id == 4
    assert c.current_time == 7
    assert c.is_empty()
    assert c.outstanding_load() == 0


def test_enqueue_logs_arrival_time_and_updates_load():
    log = ActivityLog()
    c = Counter(0, 0, log)
    c.enqueue(make_client(1, 2, arrival=3))
    c.enqueue(make_client(2, 5, arrival=3))
    assert log.lines[-2:] == (
        "[TS 3] Client 1 assigned to counter 0, processing will take 2.",
        "[TS 3] Client 2 assigned to counter 0, processing will take 5.",
    )
    assert c.outstanding_load() == 7
    assert len(c) == 2
    assert c.peek_front().code == 1


def test_advance_finishes_many_clients_in_one_window():
    log = ActivityLog()
    c = Counter(0, 0, log)
    for code, d in [(1, 2), (2, 3), (3, 4)]:
        c.enqueue(make_client(code, d))

    c.advance_by_duration(6)

    assert c.current_time == 6
    assert [cl.code for cl in c.queued_clients()] == [3]
    assert c.peek_front().remaining_processing_duration == 3
    assert c.total_processing_duration == 3
    # Clients finished inside the window are stamped with the window's end.
    assert log.lines[-2:] == (
        "[TS 6] Client 1 has finished processing. Total wait time: 6. Payment: 10.00€.",
        "[TS 6] Client 2 has finished processing. Total wait time: 6. Payment: 10.00€.",
    )
    assert c.sales_amount == Decimal("20.00")


def test_advance_partially_serves_front_client():
    c = Counter(0, 0, ActivityLog())
    c.enqueue(make_client(1, 5))
    c.advance_by_duration(2)
    assert c.peek_front().remaining_processing_duration == 3
    assert c.outstanding_load() == 3
    assert c.sales_amount == Decimal("0")


def test_advance_past_all_work_empties_queue():
    c = Counter(0, 0, ActivityLog())
    c.enqueue(make_client(1, 2))
    c.enqueue(make_client(2, 1))
    c.advance_by_duration(100)
    assert c.is_empty()
    assert c.current_time == 100
    assert c.total_processing_duration == 0


def test_advance_by_zero_changes_nothing():
    log = ActivityLog()
    c = Counter(0, 5, log)
    c.enqueue(make_client(1, 0, arrival=5))
    before = (c.current_time, c.total_processing_duration, len(c), len(log))
    c.advance_by_duration(0)
    assert (c.current_time, c.total_processing_duration, len(c), len(log)) == before


def test_advance_by_negative_duration_is_rejected():
    c = Counter(0, 0, ActivityLog())
    with pytest.raises(ValueError):
        c.advance_by_duration(-1)


def test_advance_until_past_time_does_not_roll_clock_back():
    c = Counter(0, 10, ActivityLog())
    c.enqueue(make_client(1, 4, arrival=10))
    c.advance_until_time(3)
    assert c.current_time == 10
    assert c.outstanding_load() == 4
    c.advance_until_time(12)
    assert c.current_time == 12
    assert c.outstanding_load() == 2


def test_peek_and_pop_on_empty_counter_raise():
    c = Counter(0, 0, ActivityLog())
    with pytest.raises(EmptyCounterError):
        c.peek_front()
    with pytest.raises(IndexError):
        c.pop_front()


def test_pop_front_takes_the_client_off_the_queued_total():
    c = Counter(0, 0, ActivityLog())
    c.enqueue(make_client(1, 3))
    c.enqueue(make_client(2, 2))
    c.pop_front()
    assert c.total_processing_duration == 2
    assert c.outstanding_load() == 2
    assert_invariant(c)


def test_pop_front_charges_the_whole_cart():
    cart = (P1, Product("P2", Decimal("0.55"), 0), P1)
    log = ActivityLog()
    c = Counter(2, 0, log)
    c.enqueue(make_client(9, 0, arrival=0, cart=cart))
    c.pop_front()
    assert c.sales_amount == Decimal("20.55")
    assert log.lines[-1] == "[TS 0] Client 9 has finished processing. Total wait time: 0. Payment: 20.55€."


def test_invariant_and_monotonic_clock_under_random_steps():
    rng = random.Random(42)
    c = Counter(0, 0, ActivityLog())
    last_time = c.current_time
    for i in range(200):
        if rng.random() < 0.5:
            c.enqueue(make_client(i, rng.randint(0, 6), arrival=c.current_time))
        else:
            c.advance_by_duration(rng.randint(0, 5))
        assert_invariant(c)
        assert c.current_time >= last_time
        last_time = c.current_time
