"""
Thin async HTTP wrapper shared by the outbound integrations.

Used by the distance matrix adapter and the webhook notification channel.
Accepts an optional httpx transport so tests can substitute
``httpx.MockTransport`` without touching the network.
"""

import time
from typing import Any, Dict, Optional

import httpx

from src.config.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Owns one ``httpx.AsyncClient`` for the duration of an ``async with`` block."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HTTPClient":
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self._send("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """POST ``data`` as a JSON body."""
        return await self._send("POST", url, json=data, headers=headers)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self.client is None:
            raise RuntimeError("HTTPClient must be used as an async context manager")

        # Query strings may carry API keys
        target = url.split("?", 1)[0]
        started = time.perf_counter()
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "Outbound request failed",
                method=method,
                url=target,
                error_type=type(e).__name__,
                error=str(e),
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        logger.debug(
            "Outbound request completed",
            method=method,
            url=target,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
