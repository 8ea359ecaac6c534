from __future__ import annotations

"""Arrival models for synthetic event streams.

For a Poisson arrival process with rate λ (clients/tick):
- The number of arrivals in a time window follows a Poisson distribution.
- The *inter-arrival times* are i.i.d. Exponential(λ).

Simulation time is an integer tick counter, so sampled arrival instants are
accumulated as floats and truncated to whole ticks when written out.
"""

import math
import random


def sample_exponential_interarrival(*, rate_per_tick: float, rng: random.Random | None = None) -> float:
    """Sample the next inter-arrival time (ticks) for a Poisson process.

    Args:
        rate_per_tick: λ, the arrival rate in clients/tick. Must be > 0.
        rng: optional RNG (useful for deterministic tests).

    Returns:
        A positive float representing ticks until the next arrival.
    """
    if rate_per_tick <= 0:
        raise ValueError("rate_per_tick must be > 0")

    r = rng or random
    return float(r.expovariate(rate_per_tick))


def arrival_ticks(*, count: int, rate_per_tick: float, rng: random.Random | None = None) -> list[int]:
    """Non-decreasing integer arrival ticks for `count` clients."""
    if count < 0:
        raise ValueError("count must be >= 0")

    ticks: list[int] = []
    t = 0.0
    for _ in range(count):
        t += sample_exponential_interarrival(rate_per_tick=rate_per_tick, rng=rng)
        ticks.append(math.floor(t))
    return ticks
