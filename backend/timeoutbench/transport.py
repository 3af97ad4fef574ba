"""
HTTP transport — one GET per call, no client-side deadline.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from errors import TransportFailure

logger = logging.getLogger(__name__)

# fetch(url, options) -> response
Fetch = Callable[[str, Dict[str, Any]], Awaitable[httpx.Response]]


class HttpFetcher:
    """Issues a single GET through its own short-lived ``httpx.AsyncClient``.

    The client is created with ``timeout=None`` so httpx never imposes a
    deadline of its own; bounding the request is left entirely to the
    strategy calling it. Each call owns its client, so a request abandoned
    by its caller still closes its connection when it eventually settles.

    Non-2xx responses are returned, not raised.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    async def __call__(self, url: str, options: Dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            logger.debug("GET %s", url)
            try:
                resp = await client.get(url, **options)
            except httpx.TransportError as e:
                raise TransportFailure(str(e) or type(e).__name__, url=url) from e
            logger.debug("GET %s -> %d", url, resp.status_code)
            return resp
