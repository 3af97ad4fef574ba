"""
timeoutbench Logging Configuration - Color-Coded Console Logs

Provides:
- ColorFormatter: ANSI color-coded log output
- Helper functions: log_invocation, log_abandoned
- setup_logging(): Configure application logging

Diagnostics are printed to stdout by the harness; log records go to stderr
so the two never interleave in a captured report.

Usage:
    from logging_config import setup_logging, log_invocation
    setup_logging(logging.DEBUG)
    logger = logging.getLogger(__name__)
    log_invocation(logger, "race", result)
"""

import logging
import sys
from typing import Optional, TextIO

# ANSI color codes
COLORS = {
    "RESET": "\033[0m",
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
    # Event colors
    "OK": "\033[92m",  # Green - invocation succeeded
    "FAIL": "\033[95m",  # Magenta - invocation failed
    "LEAK": "\033[93m",  # Yellow - abandoned request settled
    "ERROR": "\033[91m",  # Red - errors
    "WARN": "\033[33m",  # Orange/Yellow - warnings
    "DEBUG": "\033[90m",  # Gray - debug info
}


class ColorFormatter(logging.Formatter):
    """Custom formatter with colors for different log levels."""

    LEVEL_COLORS = {
        logging.DEBUG: COLORS["DEBUG"],
        logging.INFO: COLORS["RESET"],
        logging.WARNING: COLORS["WARN"],
        logging.ERROR: COLORS["ERROR"],
        logging.CRITICAL: COLORS["ERROR"] + COLORS["BOLD"],
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, COLORS["RESET"])

        # Format: timestamp [LEVEL] name: message
        timestamp = self.formatTime(record, "%H:%M:%S")
        level = record.levelname[:4]

        formatted = (
            f"{COLORS['DIM']}{timestamp}{COLORS['RESET']} "
            f"[{color}{level}{COLORS['RESET']}] "
            f"{record.name}: {record.getMessage()}"
        )

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Configure colored logging for the application."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColorFormatter())

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# =============================================================================
# COLORED LOG HELPER FUNCTIONS
# =============================================================================


def log_invocation(logger: logging.Logger, strategy: str, result) -> None:
    """Log one timed invocation.

    Args:
        logger: Logger instance
        strategy: Strategy name
        result: TimedResult of the invocation
    """
    if result.succeeded:
        logger.debug(f"{COLORS['OK']}<<< OK{COLORS['RESET']} {strategy} in {result.elapsed_ms}ms")
    else:
        logger.debug(
            f"{COLORS['FAIL']}<<< FAIL{COLORS['RESET']} {strategy} after {result.elapsed_ms}ms "
            f"[{result.outcome.kind.value}] {result.outcome.message}"
        )


def log_abandoned(logger: logging.Logger, url: str, state: str, detail: str = "") -> None:
    """Log the late settlement of a request nobody is waiting on.

    Args:
        logger: Logger instance
        url: Request URL
        state: 'completed', 'failed' or 'cancelled'
        detail: Status code or failure message
    """
    logger.debug(f"{COLORS['LEAK']}... ABANDONED{COLORS['RESET']} {url} {state} {detail}".rstrip())
