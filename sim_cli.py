#!/usr/bin/env python3
"""
MarketSim - Synthetic Market CLI

Thin shell over the simulator:
  python sim_cli.py run --ticks 6000 --step-ms 10 --seed 7 --preset UPTREND
  python sim_cli.py serve --port 3001
  python sim_cli.py presets
  python sim_cli.py config

NO simulation logic lives here. Everything goes through src/sim/*.
"""

import argparse
import sys

from src.api import run_server
from src.cli import console, print_candles, print_config, print_error, print_presets, print_run_summary
from src.config import get_config, load_simulation_config
from src.sim import (
    PATTERN_PRESETS,
    InvalidConfigError,
    MarketSimulator,
    PatternType,
    RandomSource,
    preset_overrides,
)
from src.utils.logger import setup_logger


def setup_argparse(argv=None) -> argparse.Namespace:
    """Parse command-line arguments for sim_cli."""
    parser = argparse.ArgumentParser(
        description="MarketSim - synthetic market data and simulated trading",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python sim_cli.py run --ticks 6000 --seed 7             # 60s of 10ms ticks
  python sim_cli.py run --preset DOUBLE_TOP --csv out.csv # Export candles
  python sim_cli.py serve --port 3001                     # HTTP API
        """
    )

    # Verbosity: mutually exclusive group (-q / -v)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Quiet mode: WARNING only")
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Verbose mode: DEBUG logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    run_parser = subparsers.add_parser("run", help="Drive the engine with a simulated clock")
    run_parser.add_argument("--ticks", type=int, default=1000, help="Number of ticks (default: 1000)")
    run_parser.add_argument("--step-ms", type=float, default=None, help="Simulated ms per tick (default: updateInterval)")
    run_parser.add_argument("--start-ms", type=float, default=0, help="Simulated start time in epoch ms (default: 0)")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")
    run_parser.add_argument("--pattern", choices=[p.value for p in PatternType], default=None, help="Pattern type")
    run_parser.add_argument("--preset", choices=list(PATTERN_PRESETS), type=str.upper, default=None, help="Apply a named preset")
    run_parser.add_argument("--config", dest="config_file", help="YAML file of config overrides")
    run_parser.add_argument("--interval", type=int, default=None, help="Candle interval to display/export in ms")
    run_parser.add_argument("--show", type=int, default=10, help="Candles to print (default: 10)")
    run_parser.add_argument("--csv", dest="csv_path", help="Write the candle series to CSV")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API server")
    serve_parser.add_argument("--host", default=None, help="Host to bind (default: SIM_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: SIM_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload for development")

    subparsers.add_parser("presets", help="List pattern presets")
    subparsers.add_parser("config", help="Show the effective simulation config")

    return parser.parse_args(argv)


def handle_run(args: argparse.Namespace) -> int:
    """Offline run: tick N times at a fixed simulated step."""
    sim_config = get_config().simulation
    if args.config_file:
        sim_config = load_simulation_config(args.config_file, base=sim_config)
    if args.preset:
        sim_config = sim_config.merged(preset_overrides(args.preset))
    if args.pattern:
        sim_config = sim_config.merged({"pattern_type": args.pattern})
    if args.ticks < 1:
        print_error("--ticks must be at least 1")
        return 1

    step_ms = args.step_ms if args.step_ms is not None else sim_config.update_interval_ms
    simulator = MarketSimulator(
        sim_config,
        random_source=RandomSource(seed=args.seed),
        start_ms=args.start_ms,
    )

    now = args.start_ms
    snapshot = None
    with console.status(f"Simulating {args.ticks} ticks..."):
        for _ in range(args.ticks):
            now += step_ms
            snapshot = simulator.tick(now)

    interval = args.interval or sim_config.candle_interval_ms
    print_run_summary(snapshot, simulator.stats(), sim_config.initial_price)
    print_candles(simulator.candles(interval, limit=None), interval, limit=args.show)

    if args.csv_path:
        df = simulator.candles_dataframe(interval)
        df.to_csv(args.csv_path, index=False)
        console.print(f"[green]Wrote {len(df)} candles to {args.csv_path}[/]")
    return 0


def handle_serve(args: argparse.Namespace) -> int:
    server = get_config().server
    run_server(
        host=args.host or server.host,
        port=args.port or server.port,
        reload=args.reload,
    )
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    # Parse CLI arguments FIRST (before any config or logging)
    args = setup_argparse(argv)

    try:
        config = get_config()
    except InvalidConfigError as e:
        print_error("Invalid simulator configuration", "\n".join(e.errors))
        return 1

    level = config.log.level
    if args.quiet:
        level = "WARNING"
    elif args.verbose:
        level = "DEBUG"
    setup_logger(config.log.log_dir, level, config.log.log_to_file)

    try:
        if args.command == "run":
            return handle_run(args)
        if args.command == "serve":
            return handle_serve(args)
        if args.command == "presets":
            print_presets(PATTERN_PRESETS.values())
            return 0
        if args.command == "config":
            print_config(config.simulation)
            return 0
    except InvalidConfigError as e:
        print_error("Invalid simulator configuration", "\n".join(e.errors))
        return 1
    except (FileNotFoundError, ValueError) as e:
        print_error(str(e))
        return 1

    console.print("[yellow]Usage: sim_cli.py {run|serve|presets|config} --help[/]")
    return 1


if __name__ == "__main__":
    sys.exit(main())
