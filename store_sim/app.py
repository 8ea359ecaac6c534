from __future__ import annotations

# Single-entrypoint runner.
#
# CLI:
# - Run a simulation from a config file and an event file:
#     python -m store_sim.app run --config store.txt --events events.txt [--output log.txt]
# - Generate a synthetic event file for a config:
#     python -m store_sim.app generate --config store.txt --output events.txt --num-clients N --arrival-rate L

import argparse


def main() -> None:
    parser = argparse.ArgumentParser(description="Store checkout simulation - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Replay an event file and print the activity log")
    p_run.add_argument("--config", required=True)
    p_run.add_argument("--events", required=True)
    p_run.add_argument("--output", default=None)
    p_run.add_argument("--mqtt-host", default=None, help="stream the activity log over MQTT")
    p_run.add_argument("--mqtt-port", type=int, default=1883)
    p_run.add_argument("--namespace", default="store/v0")

    p_gen = sub.add_parser("generate", help="Write a synthetic event file (Poisson arrivals)")
    p_gen.add_argument("--config", required=True)
    p_gen.add_argument("--output", required=True)
    p_gen.add_argument("--num-clients", type=int, required=True)
    p_gen.add_argument("--arrival-rate", type=float, required=True, help="λ clients/tick")
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--mean-basket-size", type=float, default=5.0)
    p_gen.add_argument("--open-counter-every", type=int, default=None)

    args = parser.parse_args()

    if args.cmd == "run":
        from .driver import main as run

        run_args = ["--config", args.config, "--events", args.events]
        if args.output is not None:
            run_args += ["--output", args.output]
        if args.mqtt_host is not None:
            run_args += [
                "--mqtt-host",
                args.mqtt_host,
                "--mqtt-port",
                str(args.mqtt_port),
                "--namespace",
                args.namespace,
            ]
        _dispatch_to_module_main(run, run_args)
        return

    if args.cmd == "generate":
        from .generator import main as run

        run_args = [
            "--config",
            args.config,
            "--output",
            args.output,
            "--num-clients",
            str(args.num_clients),
            "--arrival-rate",
            str(args.arrival_rate),
            "--mean-basket-size",
            str(args.mean_basket_size),
        ]
        if args.seed is not None:
            run_args += ["--seed", str(args.seed)]
        if args.open_counter_every is not None:
            run_args += ["--open-counter-every", str(args.open_counter_every)]
        _dispatch_to_module_main(run, run_args)
        return


def _dispatch_to_module_main(module_main, argv: list[str]) -> None:
    import sys

    old_argv = sys.argv[:]
    try:
        sys.argv = [old_argv[0], *argv]
        module_main()
    finally:
        sys.argv = old_argv


if __name__ == "__main__":
    main()
