#!/usr/bin/env python3
"""
Taxi Dispatch Simulation

Compares greedy nearest-taxi dispatch against optimal (Hungarian) batch
assignment on the same procedurally generated city and demand.

Usage:
    python -m taxi_dispatch.main [--config configs/default.yaml] [options]

Examples:
    python -m taxi_dispatch.main
    python -m taxi_dispatch.main --config configs/default.yaml --ticks 1000
    python -m taxi_dispatch.main --fleet 20 --queue-size 6 --out-dir results/
    python -m taxi_dispatch.main --solver scipy --no-csv --quiet
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SimulationConfig, load_config
from .model.city import DegenerateCityError
from .model.engine import ComparisonEngine
from .model.hungarian import SOLVERS
from .export.csv_writer import CSVWriter, METRIC_FIELDS, TAXI_FIELDS
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Taxi Dispatch Simulation: greedy vs optimal assignment',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m taxi_dispatch.main
    python -m taxi_dispatch.main --config configs/default.yaml --ticks 1000
    python -m taxi_dispatch.main --fleet 20 --queue-size 6 --out-dir results/
    python -m taxi_dispatch.main --solver scipy --no-csv --quiet
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in defaults)')

    # Optional overrides
    parser.add_argument('--ticks', type=int, default=None,
                        help='Override number of ticks to simulate')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for city, fleet and demand')
    parser.add_argument('--fleet', type=int, default=None,
                        help='Override fleet size')
    parser.add_argument('--queue-size', type=int, default=None,
                        help='Override the optimal strategy batching threshold')
    parser.add_argument('--solver', choices=sorted(SOLVERS), default=None,
                        help='Assignment solver for the optimal strategy')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    return parser.parse_args(argv)


def apply_overrides(config: SimulationConfig, args: argparse.Namespace) -> SimulationConfig:
    """Apply CLI overrides and re-validate."""
    if args.ticks is not None:
        config.max_ticks = args.ticks
    if args.seed is not None:
        config.seed = args.seed
    if args.fleet is not None:
        config.fleet.size = args.fleet
    if args.queue_size is not None:
        config.dispatch.queue_size = args.queue_size
    if args.solver is not None:
        config.dispatch.solver = args.solver
    if args.csv is not None:
        config.csv_enabled = args.csv
    config.quiet = args.quiet
    config.out_dir = args.out_dir
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Load configuration
    try:
        config = load_config(args.config) if args.config else SimulationConfig.default()
        config = apply_overrides(config, args)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Initialize engine
    if not config.quiet:
        print("Initializing simulation...")
        print(f"  City: {config.city.width}x{config.city.height} (seed {config.seed})")
        print(f"  Taxis: {config.fleet.size}")
        print(f"  Optimal batch size: {config.dispatch.queue_size} ({config.dispatch.solver})")
        print(f"  Ticks: {config.max_ticks}")

    try:
        engine = ComparisonEngine(config)
    except DegenerateCityError as e:
        print(f"Error generating city: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"  Pickup spots: {len(engine.city.pickup_spots)}")

    # Initialize exporters
    taxi_writer = None
    metrics_writer = None
    if config.csv_enabled:
        taxi_writer = CSVWriter(config.out_dir / 'taxis.csv', TAXI_FIELDS)
        metrics_writer = CSVWriter(config.out_dir / 'metrics.csv', METRIC_FIELDS)
        taxi_writer.open()
        metrics_writer.open()

    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    # Main simulation loop
    if not config.quiet:
        print("\nRunning simulation...")

    final = None
    try:
        while not engine.is_finished():
            snapshot = engine.step()
            final = snapshot

            # Export CSV
            if taxi_writer:
                taxi_writer.append(snapshot.to_csv_rows())
                metrics_writer.append(snapshot.metrics_rows())

            # Update reporter
            reporter.update(snapshot)

            # Progress indicator
            if not config.quiet and snapshot.tick % 100 == 0:
                parts = [
                    f"{name} {s.metrics.total_passengers_served} served / "
                    f"{s.metrics.total_passengers_waiting} waiting"
                    for name, s in snapshot.strategies.items()
                ]
                print(f"  Tick {snapshot.tick}: " + ", ".join(parts))

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    # Cleanup
    if taxi_writer:
        taxi_writer.close()
        metrics_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'taxis.csv'}, {config.out_dir / 'metrics.csv'}")

    # Print summary report
    if not config.quiet and final:
        print(reporter.generate_summary(final, config.out_dir, config.csv_enabled))

    return 0


if __name__ == '__main__':
    sys.exit(main())
