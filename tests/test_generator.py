import pytest

from store_sim.driver import simulate
from store_sim.events import ClientArrival, CounterOpening, parse_config, parse_events
from store_sim.generator import generate_events, write_events
from store_sim.store import Phase

CONFIG = parse_config(["2 3", "A 1.00 1", "B 2.50 3", "C 0.99 0"])


def test_generate_events_is_deterministic_with_seed():
    a = generate_events(CONFIG, num_clients=20, rate_per_tick=0.5, seed=11)
    b = generate_events(CONFIG, num_clients=20, rate_per_tick=0.5, seed=11)
    assert a == b
    assert len(a) == 20


def test_generated_events_parse_and_replay():
    lines = generate_events(CONFIG, num_clients=30, rate_per_tick=1.0, seed=3, open_counter_every=10)
    events = list(parse_events(lines))

    arrivals = [e for e in events if isinstance(e, ClientArrival)]
    openings = [e for e in events if isinstance(e, CounterOpening)]
    assert [e.client_code for e in arrivals] == list(range(1, 31))
    assert len(openings) == 2
    assert all(e.product_codes for e in arrivals)
    times = [e.time for e in events]
    assert times == sorted(times)

    result = simulate(CONFIG, events)
    assert result.store.phase is Phase.DONE
    assert len(result.store.counters) == 4


def test_generate_events_validates_arguments():
    with pytest.raises(ValueError):
        generate_events(parse_config(["1 0"]), num_clients=1, rate_per_tick=1.0)
    with pytest.raises(ValueError):
        generate_events(CONFIG, num_clients=1, rate_per_tick=0.0)
    with pytest.raises(ValueError):
        generate_events(CONFIG, num_clients=1, rate_per_tick=1.0, open_counter_every=0)


def test_write_events(tmp_path):
    out = tmp_path / "events.txt"
    write_events(out, ["0 CLIENT 1 A", "1 COUNTER"])
    assert out.read_text(encoding="utf-8") == "0 CLIENT 1 A\n1 COUNTER\n"
