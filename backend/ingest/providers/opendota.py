"""
OpenDota live-match provider.
Fetches the public /api/live feed once and decodes it into LiveMatch records.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from shared.models.domain import LiveMatch
from shared.utils.http_client import WidgetHTTPClient
from shared.utils.logging import get_logger

logger = get_logger(__name__)

OPENDOTA_LIVE_URL = "https://api.opendota.com/api/live"


class FetchResult:
    """Container for a live feed fetch with metadata."""

    def __init__(
        self,
        success: bool,
        latency_ms: float,
        matches: Optional[list[LiveMatch]] = None,
        error: Optional[str] = None,
        skipped: int = 0,
    ) -> None:
        self.success = success
        self.latency_ms = latency_ms
        self.matches = matches or []
        self.error = error
        self.skipped = skipped


def parse_live_matches(data: Any) -> tuple[list[LiveMatch], int]:
    """
    Validate a decoded /live body.

    Returns the valid matches in feed order and the number of elements skipped.
    Raises ValueError if the body is not a JSON array.
    """
    if not isinstance(data, list):
        raise ValueError(f"expected JSON array, got {type(data).__name__}")

    matches: list[LiveMatch] = []
    skipped = 0
    for item in data:
        try:
            matches.append(LiveMatch.model_validate(item))
        except ValidationError as exc:
            skipped += 1
            logger.debug("opendota_record_invalid", errors=exc.error_count())
    return matches, skipped


class OpenDotaLiveProvider:
    """Reads the OpenDota live feed through a caller-owned HTTP client."""

    def __init__(
        self,
        http_client: WidgetHTTPClient,
        url: str = OPENDOTA_LIVE_URL,
        timeout_s: Optional[float] = 10.0,
    ) -> None:
        self._http = http_client
        self._url = url
        self._timeout = timeout_s

    @property
    def url(self) -> str:
        return self._url

    async def _get_body(self) -> Any:
        resp = await self._http.get(self._url)
        resp.raise_for_status()
        return resp.json()

    async def fetch_live_matches(self) -> FetchResult:
        """
        Fetch and decode the live feed.

        ``timeout_s`` bounds the whole request, body included; httpx's own
        timeouts only bound each connect/read/write phase.

        Never raises: transport errors, HTTP errors, timeouts and
        undecodable bodies come back as an unsuccessful FetchResult with
        no matches.
        """
        start = time.perf_counter()
        try:
            data = await asyncio.wait_for(self._get_body(), timeout=self._timeout)
            matches, skipped = parse_live_matches(data)
        except asyncio.TimeoutError:
            return FetchResult(
                success=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                error=f"live feed not received within {self._timeout}s",
            )
        except (httpx.HTTPError, ValueError) as exc:
            return FetchResult(
                success=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                error=str(exc) or exc.__class__.__name__,
            )

        latency_ms = (time.perf_counter() - start) * 1000
        if skipped:
            logger.warning("opendota_records_skipped", skipped=skipped, kept=len(matches))
        return FetchResult(success=True, latency_ms=latency_ms, matches=matches, skipped=skipped)
