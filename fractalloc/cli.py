"""
Command-line interface for fractalloc.

This module provides CLI commands for comparing allocation strategies
and inspecting the offset sequence.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .exceptions import FractallocError
from .factory import create_default_config, parse_strategy
from .memory.sequence import OffsetSequence
from .simulation.report import ReportWriter, write_summary
from .simulation.runner import ComparisonRunner
from .types.descriptors import ComparisonConfig


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def compare_command(argv: Optional[List[str]] = None) -> int:
    """CLI command comparing allocators under one random workload."""
    parser = argparse.ArgumentParser(description='Compare fractal and serial allocation')
    parser.add_argument('--steps', type=int, default=1000,
                       help='Number of workload requests')
    parser.add_argument('--warmup-steps', type=int, default=200,
                       help='Leading steps that only allocate')
    parser.add_argument('--free-probability', type=float, default=0.5,
                       help='Chance of a free after warmup')
    parser.add_argument('--strategies', nargs='+', default=['fractal', 'serial'],
                       help='Strategies to compare, in column order')
    parser.add_argument('--seed', type=int, help='Workload seed')
    parser.add_argument('--output', type=str,
                       help='CSV file for per-step results (.zst to compress)')
    parser.add_argument('--summary', type=str, help='Output file for the JSON summary')
    parser.add_argument('--no-verify', action='store_true',
                       help='Skip writing and checking cell contents')
    parser.add_argument('--log-level', default='warning',
                       choices=['debug', 'info', 'warning', 'error'],
                       help='Logging verbosity')

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = create_default_config(
            seed=args.seed,
            steps=args.steps,
            warmup_steps=args.warmup_steps,
            free_probability=args.free_probability,
            strategies=tuple(parse_strategy(name) for name in args.strategies),
            verify=not args.no_verify
        )
        summary = run_comparison(config, args.output)
    except FractallocError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.summary:
        write_summary(args.summary, summary)
    else:
        print(json.dumps(summary, indent=2))
    return 0


def run_comparison(config: ComparisonConfig, output: Optional[str] = None) -> Dict[str, Any]:
    """Run one comparison and optionally write the per-step report."""
    runner = ComparisonRunner(config)
    records = runner.run()

    if output:
        with ReportWriter(output, runner.strategies) as writer:
            writer.write_all(records)

    return runner.summary()


def sequence_command(argv: Optional[List[str]] = None) -> int:
    """CLI command printing the first terms of the offset sequence."""
    parser = argparse.ArgumentParser(description='Print offset sequence terms')
    parser.add_argument('--count', type=int, default=16, help='Number of terms')

    args = parser.parse_args(argv)
    print(" ".join(str(v) for v in OffsetSequence().take(args.count)))
    return 0


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("Usage: python -m fractalloc.cli <command>")
        print("Commands: compare, sequence")
        sys.exit(1)

    command = sys.argv[1]
    rest = sys.argv[2:]

    if command == 'compare':
        sys.exit(compare_command(rest))
    elif command == 'sequence':
        sys.exit(sequence_command(rest))
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)
