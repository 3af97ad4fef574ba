"""
Race Strategy — first of (request, timer) to settle wins.

Only the caller's wait is bounded. When the timer wins, the request is left
running: it is never cancelled and finishes (or fails) on its own, unseen by
the harness. That leak is the behaviour under test, not something to fix.
"""
import asyncio
import logging
from functools import partial
from typing import Any, Dict, FrozenSet, Set

import httpx

from errors import TimeoutFailure, exception_message
from logging_config import log_abandoned
from timeoutbench.strategies.base import ABORT_REASON, Strategy

logger = logging.getLogger(__name__)

# The event loop only keeps weak references to tasks
_abandoned: Set[asyncio.Future] = set()


def abandoned_requests() -> FrozenSet[asyncio.Future]:
    """Requests that lost a race and are still running."""
    return frozenset(t for t in _abandoned if not t.done())


def _settle_abandoned(url: str, task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        log_abandoned(logger, url, "cancelled")
        return
    error = task.exception()
    if error is not None:
        log_abandoned(logger, url, "failed", exception_message(error))
    else:
        log_abandoned(logger, url, "completed", str(getattr(task.result(), "status_code", "")))


def _abandon(task: asyncio.Future, url: str) -> None:
    _abandoned.add(task)
    task.add_done_callback(partial(_settle_abandoned, url))


class RaceStrategy(Strategy):
    """Bounds the wait on the request, not the request itself."""

    name = "race"
    description = "request raced against a timer; the losing request keeps running in the background"

    async def _expire(self, url: str, timeout_ms: int):
        await asyncio.sleep(timeout_ms / 1000)
        raise TimeoutFailure(url, timeout_ms, reason=ABORT_REASON, strategy=self.name)

    async def invoke(self, url: str, options: Dict[str, Any], timeout_ms: int) -> httpx.Response:
        request = asyncio.ensure_future(self._fetch(url, options))
        timer = asyncio.ensure_future(self._expire(url, timeout_ms))

        try:
            done, _ = await asyncio.wait({request, timer}, return_when=asyncio.FIRST_COMPLETED)
            winner = request if request in done else timer
            return winner.result()
        finally:
            # A timer firing with nobody awaiting it would log an unretrieved
            # exception. Disarming it cannot change the winner.
            if not timer.cancel() and not timer.cancelled():
                # Fired in the same tick the request settled; mark it seen
                timer.exception()
            if not request.done():
                _abandon(request, url)
