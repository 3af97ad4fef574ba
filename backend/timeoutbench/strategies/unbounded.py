"""
Unbounded Strategy — the baseline: no deadline, no cancellation.
"""
from typing import Any, Dict

import httpx

from timeoutbench.strategies.base import Strategy


class UnboundedStrategy(Strategy):
    """Awaits the request for as long as the server takes."""

    name = "unbounded"
    bounded = False
    description = "plain request with no timeout; expected to take as long as the server does"

    async def invoke(self, url: str, options: Dict[str, Any], timeout_ms: int) -> httpx.Response:
        return await self._fetch(url, options)
