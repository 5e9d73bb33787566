"""
Entry point for stepping a preset L-system.

Usage:
    python -m lindenmayer.runtime algae --generations 4
    python -m lindenmayer.runtime stochastic_plant -n 3 --seed 42 --verbose
"""

import argparse
import logging
import sys
from typing import NoReturn

import structlog
from pydantic import ValidationError

from lindenmayer.core.errors import LSystemError
from lindenmayer.runtime.presets import PRESETS

logger = structlog.get_logger()


def configure_logging(verbose: bool = False) -> None:
    """Configure structured logging to stderr."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m lindenmayer.runtime",
        description="Step a preset L-system and print each generation.",
    )
    parser.add_argument("preset", choices=sorted(PRESETS), help="Preset model to run")
    parser.add_argument(
        "-n", "--generations", type=int, default=4, help="Number of generations to step"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for stochastic presets")
    parser.add_argument(
        "--max-length", type=int, default=None, help="Fail when a generation grows beyond this"
    )
    parser.add_argument(
        "--last-only", action="store_true", help="Print only the final generation"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(argv: list[str] | None = None) -> int:
    """Run a preset and print its generations to stdout. Returns an exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    factory = PRESETS[args.preset]
    kwargs: dict[str, object] = {"max_length": args.max_length}
    if args.preset == "stochastic_plant":
        kwargs["seed"] = args.seed

    try:
        system = factory(**kwargs)
        if not args.last_only:
            print(f"{system.generation}: {system.current}")
        for _ in range(args.generations):
            system.step()
            if not args.last_only:
                print(f"{system.generation}: {system.current}")
        if args.last_only:
            print(system.current)
    except (LSystemError, ValidationError) as e:
        logger.error("lsystem_error", preset=args.preset, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info("preset_completed", preset=args.preset, generation=system.generation)
    return 0


def main() -> NoReturn:
    """Main entry point."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        logger.info("interrupted")
        sys.exit(130)
    except Exception:
        logger.exception("fatal_error")
        sys.exit(1)


if __name__ == "__main__":
    main()
