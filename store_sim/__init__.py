"""Store checkout simulation.

Clients with carts of catalog products arrive at integer ticks and are routed
to the counter that will finish its current queue soonest:
- `Counter`: FIFO queue plus its own lazily advanced clock
- `Store`: routing on arrival, counter openings, and the final drain phase
- `driver`: replays a config file and an event file against a `Store`

Run `python -m store_sim.app -h` for the CLI.
"""
