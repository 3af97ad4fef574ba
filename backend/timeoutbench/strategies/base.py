"""
Strategy — abstract base class for all request-timeout strategies.

A strategy decides how (and whether) the caller's wait on a request is
bounded. Every strategy exposes the same two calls so the harness can treat
them uniformly:

    invoke(url, options, timeout_ms)   -> response, or raises
    measure(url, options, timeout_ms)  -> TimedResult, never raises
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from timeoutbench.outcome import TimedResult
from timeoutbench.stopwatch import time_it
from timeoutbench.transport import Fetch, HttpFetcher

# Reason carried by every timeout this package raises
ABORT_REASON = "The operation was aborted"


class Strategy(ABC):
    """Abstract request-invocation policy."""

    name: str = "base"
    # False when the strategy makes no attempt to honour timeout_ms
    bounded: bool = True
    description: str = ""

    def __init__(self, fetch: Optional[Fetch] = None):
        self._fetch: Fetch = fetch or HttpFetcher()

    @abstractmethod
    async def invoke(self, url: str, options: Dict[str, Any], timeout_ms: int) -> httpx.Response:
        """Issue the request under this strategy's timeout policy.

        Args:
            url: Target URL.
            options: Extra keyword arguments for the GET.
            timeout_ms: Timeout in milliseconds (ignored by unbounded strategies).

        Returns:
            The response. Failures are raised.
        """
        ...

    async def measure(self, url: str, options: Dict[str, Any], timeout_ms: int) -> TimedResult:
        """Time one invocation, folding any failure into the result."""
        return await time_it(lambda: self.invoke(url, options, timeout_ms))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
