"""
Cooperative Cancel Strategy — a timer aborts the request through a token.

The request runs as its own task bound to an AbortToken. A loop timer fires
``token.abort()`` after ``timeout_ms``, which cancels the task: httpx stops
the socket operation and closes the connection, so the network work itself
ends rather than merely being ignored.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from errors import TimeoutFailure
from timeoutbench.strategies.base import ABORT_REASON, Strategy
from timeoutbench.transport import Fetch

logger = logging.getLogger(__name__)


class AbortToken:
    """Cancellation signal shared by a timer and the request it guards."""

    def __init__(self):
        self.aborted = False
        self.reason = ""
        self._task: Optional[asyncio.Future] = None

    def bind(self, task: asyncio.Future) -> None:
        """Attach the task that should stop when the token is aborted."""
        self._task = task

    def abort(self, reason: str = ABORT_REASON) -> None:
        if self.aborted:
            return
        self.aborted = True
        self.reason = reason
        logger.debug("Abort signalled: %s", reason)
        if self._task is not None:
            self._task.cancel(reason)


class CooperativeCancelStrategy(Strategy):
    """Bounds the request by actually cancelling it when the timer fires."""

    name = "cooperative_cancel"
    description = "timer aborts the request via a cancellation token; the request itself stops"

    def __init__(
        self,
        fetch: Optional[Fetch] = None,
        token_factory: Callable[[], AbortToken] = AbortToken,
    ):
        super().__init__(fetch)
        self._token_factory = token_factory

    async def invoke(self, url: str, options: Dict[str, Any], timeout_ms: int) -> httpx.Response:
        loop = asyncio.get_running_loop()
        token = self._token_factory()
        request = asyncio.ensure_future(self._fetch(url, options))
        token.bind(request)
        timer = loop.call_later(timeout_ms / 1000, token.abort)

        try:
            return await request
        except (asyncio.CancelledError, Exception) as e:
            # Only a failure caused by our own abort becomes a timeout.
            # Organic failures and cancellation of the caller pass through.
            if not token.aborted:
                raise
            raise TimeoutFailure(
                url, timeout_ms, reason=str(e) or token.reason, strategy=self.name
            ) from e
        finally:
            timer.cancel()
