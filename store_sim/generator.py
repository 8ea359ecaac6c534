from __future__ import annotations

# Event file generator.
#
# Produces a synthetic event stream for a given store configuration, in the
# same text format the driver reads, so large runs can be replayed and compared.
#
# Poisson arrival model:
# - Clients arrive according to a Poisson process with rate λ (clients/tick)
# - Inter-arrival times are exponential with mean 1/λ
# - Each cart draws a basket size, then products uniformly from the catalog

import argparse
import math
import random
from pathlib import Path

from .arrival import arrival_ticks
from .events import CLIENT, COUNTER, StoreConfig, load_config


def generate_events(
    config: StoreConfig,
    *,
    num_clients: int,
    rate_per_tick: float,
    seed: int | None = None,
    mean_basket_size: float = 5.0,
    open_counter_every: int | None = None,
) -> list[str]:
    """Build event lines for `num_clients` arrivals.

    Args:
        rate_per_tick: λ, clients per tick.
        seed: if provided, makes the stream deterministic.
        mean_basket_size: average number of products per cart (every cart has at least one).
        open_counter_every: if provided, open a new counter after every N clients.
    """
    if not config.products:
        raise ValueError("catalog is empty")
    if num_clients < 0:
        raise ValueError("num_clients must be >= 0")
    if open_counter_every is not None and open_counter_every <= 0:
        raise ValueError("open_counter_every must be > 0")

    rng = random.Random(seed)
    codes = [p.code for p in config.products]

    lines: list[str] = []
    ticks = arrival_ticks(count=num_clients, rate_per_tick=rate_per_tick, rng=rng)
    for i, t in enumerate(ticks, start=1):
        basket_size = max(1, _sample_basket_size(mean=mean_basket_size, rng=rng))
        cart = " ".join(rng.choice(codes) for _ in range(basket_size))
        lines.append(f"{t} {CLIENT} {i} {cart}")
        if open_counter_every is not None and i % open_counter_every == 0 and i < num_clients:
            lines.append(f"{t} {COUNTER}")
    return lines


def _sample_basket_size(*, mean: float, rng: random.Random) -> int:
    """Sample a non-negative integer basket size.

    - For mean <= 30 we use Knuth's exact Poisson sampler.
    - For mean > 30 we approximate with a Gaussian N(mean, sqrt(mean)).
    """
    if mean <= 0:
        return 0

    if mean <= 30:
        l = math.exp(-mean)
        k = 0
        p = 1.0
        while p > l:
            k += 1
            p *= rng.random()
        return max(0, k - 1)

    return max(0, int(rng.gauss(mean, math.sqrt(mean))))


def write_events(path: str | Path, lines: list[str]) -> None:
    Path(path).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser(description="Event file generator (Poisson arrivals)")
    parser.add_argument("--config", required=True, help="store configuration file")
    parser.add_argument("--output", required=True, help="event file to write")
    parser.add_argument("--num-clients", type=int, required=True)
    parser.add_argument(
        "--arrival-rate",
        type=float,
        required=True,
        help="arrival rate λ in clients/tick (Poisson process)",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mean-basket-size", type=float, default=5.0)
    parser.add_argument("--open-counter-every", type=int, default=None, help="open a counter after every N clients")
    args = parser.parse_args()

    config = load_config(args.config)
    lines = generate_events(
        config,
        num_clients=args.num_clients,
        rate_per_tick=args.arrival_rate,
        seed=args.seed,
        mean_basket_size=args.mean_basket_size,
        open_counter_every=args.open_counter_every,
    )
    write_events(args.output, lines)
    print(f"[generate] wrote {len(lines)} events for {args.num_clients} clients to {args.output}")


if __name__ == "__main__":
    main()
