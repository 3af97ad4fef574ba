"""
Stopwatch — times one async invocation and turns any failure into an Outcome.
"""
import logging
import time
from typing import Any, Awaitable, Callable

from timeoutbench.outcome import Failure, Success, TimedResult

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))


async def time_it(operation: Callable[[], Awaitable[Any]]) -> TimedResult:
    """Await ``operation()`` and report how long it took to settle.

    Failures raised by the operation are never re-raised: they come back as
    ``Failure`` outcomes. Cancellation of the caller (``CancelledError`` and
    other ``BaseException``s) still propagates.

    Args:
        operation: Zero-argument coroutine function to time.

    Returns:
        TimedResult with elapsed wall-clock milliseconds.
    """
    start = time.monotonic()
    try:
        await operation()
    except Exception as e:
        elapsed = _elapsed_ms(start)
        logger.debug("Invocation failed after %dms: %r", elapsed, e)
        return TimedResult(elapsed_ms=elapsed, outcome=Failure.from_exception(e))
    return TimedResult(elapsed_ms=_elapsed_ms(start), outcome=Success())
