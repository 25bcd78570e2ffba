"""
Async HTTP client wrapper shared by the fetch and publish stages.
One instance is owned by the run and passed to each stage; no retries.
"""
from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from shared.utils.logging import get_logger

logger = get_logger(__name__)


class WidgetHTTPClient:
    """
    Thin lifecycle + logging wrapper around httpx.AsyncClient.

    The default timeout applies to every request unless a call passes its own
    httpx.Timeout (httpx.Timeout(None) disables it).
    """

    def __init__(
        self,
        timeout_s: Optional[float] = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout_s
        self._default_headers = headers or {"Accept": "application/json"}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        """Initialize the underlying httpx client."""
        self._client = httpx.AsyncClient(
            headers=self._default_headers,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "WidgetHTTPClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> httpx.Response:
        """
        Perform a single GET request.

        Args:
            url: Absolute URL.
            params: Query parameters, URL-encoded by httpx.
            timeout: Per-request override of the client timeout.

        Returns:
            httpx.Response, whatever its status code.

        Raises:
            httpx.HTTPError: On transport failure or timeout.
        """
        if not self._client:
            raise RuntimeError("WidgetHTTPClient not started. Call start() first.")

        start_time = time.perf_counter()
        kwargs: dict[str, Any] = {"params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            resp = await self._client.get(url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "http_request_error",
                url=url,
                error=str(exc) or exc.__class__.__name__,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        logger.debug(
            "http_request_done",
            url=url,
            status=resp.status_code,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return resp
