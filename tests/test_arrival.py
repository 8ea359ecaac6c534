import random

import pytest

from store_sim.arrival import arrival_ticks, sample_exponential_interarrival


def test_exponential_interarrival_requires_positive_rate():
    with pytest.raises(ValueError):
        sample_exponential_interarrival(rate_per_tick=0)


def test_exponential_interarrival_deterministic_with_rng():
    rng = random.Random(123)
    a = sample_exponential_interarrival(rate_per_tick=2.0, rng=rng)
    rng = random.Random(123)
    b = sample_exponential_interarrival(rate_per_tick=2.0, rng=rng)
    assert a == b
    assert a > 0


def test_arrival_ticks_are_non_decreasing_integers():
    ticks = arrival_ticks(count=50, rate_per_tick=0.5, rng=random.Random(7))
    assert len(ticks) == 50
    assert all(isinstance(t, int) and t >= 0 for t in ticks)
    assert ticks == sorted(ticks)
