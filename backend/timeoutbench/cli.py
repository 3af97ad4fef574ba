"""
Timeout Harness CLI

Usage:
    python -m timeoutbench.cli                 # 10 iterations per strategy
    python -m timeoutbench.cli -n 20 -vvv      # 20 iterations, every invocation shown
    python -m timeoutbench.cli --delay 2.0 --timeout 750 --grace 250
    python -m timeoutbench.cli --help
"""
import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, List, TextIO

from errors import ConfigError, log_error
from logging_config import setup_logging
from timeoutbench.config import (
    DEFAULT_DELAY_S,
    DEFAULT_GRACE_MS,
    DEFAULT_ITERATIONS,
    DEFAULT_TIMEOUT_MS,
    RunConfig,
    delay_url,
)
from timeoutbench.harness import Harness

logger = logging.getLogger("timeoutbench")

EXAMPLES = """\
Examples:
  timeoutbench -n 20 -vvv     Run 20 iterations with high verbosity
  timeoutbench --help         Show usage information
"""


@dataclass
class Platform:
    """Everything the entry point needs from the process, passed in explicitly."""

    argv: List[str]
    exit: Callable[[int], None]
    stdout: TextIO = field(default_factory=lambda: sys.stdout)


def default_platform() -> Platform:
    return Platform(argv=sys.argv[1:], exit=sys.exit, stdout=sys.stdout)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeoutbench",
        description="Compare client-side strategies for bounding an HTTP request",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument(
        "-n", "--iterations", type=int, default=DEFAULT_ITERATIONS,
        help=f"Number of fetch calls per method; negative values run none [default: {DEFAULT_ITERATIONS}]",
    )
    parser.add_argument(
        "-v", dest="verbosity", action="count", default=0,
        help="Verbosity level (-v, -vv, -vvv; more 'v's for more verbose output)",
    )
    parser.add_argument(
        "-h", "--help", action="store_true",
        help="Show help information",
    )
    parser.add_argument(
        "--delay", type=float, default=DEFAULT_DELAY_S,
        help=f"Server-side delay in seconds [default: {DEFAULT_DELAY_S}]",
    )
    parser.add_argument(
        "--url", default="",
        help="Target URL (overrides the delay endpoint built from --delay)",
    )
    parser.add_argument(
        "--timeout", type=int, default=DEFAULT_TIMEOUT_MS,
        help=f"Fetch timeout in milliseconds [default: {DEFAULT_TIMEOUT_MS}]",
    )
    parser.add_argument(
        "--grace", type=int, default=DEFAULT_GRACE_MS,
        help=f"Grace period in milliseconds before a slow fetch is flagged [default: {DEFAULT_GRACE_MS}]",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for internal logging on stderr [default: WARNING]",
    )
    return parser


def _build_config(args) -> RunConfig:
    """Build RunConfig from CLI args."""
    return RunConfig(
        target_url=args.url or delay_url(args.delay),
        timeout_ms=args.timeout,
        grace_ms=args.grace,
        iterations=args.iterations,
        verbosity=args.verbosity,
        # A custom endpoint's delay is unknown
        server_delay_s=None if args.url else args.delay,
    )


def main(platform: Platform = None) -> int:
    """Parse arguments, run the harness, and report the exit code to the platform."""
    platform = platform or default_platform()
    parser = build_parser()

    # Help wins over everything else, even arguments that would not parse
    if "-h" in platform.argv or "--help" in platform.argv:
        platform.stdout.write(parser.format_help())
        platform.exit(0)
        return 0

    try:
        args = parser.parse_args(platform.argv)
    except SystemExit as e:
        # argparse usage error, already reported on stderr
        code = e.code if isinstance(e.code, int) else 2
        platform.exit(code)
        return code

    setup_logging(getattr(logging, args.log_level))

    try:
        config = _build_config(args)
    except ConfigError as e:
        log_error(logger, e, context="config")
        platform.exit(2)
        return 2

    asyncio.run(Harness(config, out=platform.stdout).run())
    platform.exit(0)
    return 0


def run() -> None:
    """Console-script entry point."""
    main(default_platform())


if __name__ == "__main__":
    run()
