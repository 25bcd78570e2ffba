"""
VK community app widget publisher.
Calls appWidgets.update with the rendered widget code.
"""
from __future__ import annotations

import time
from typing import Optional

import httpx

from shared.models.enums import WidgetType
from shared.utils.http_client import WidgetHTTPClient
from shared.utils.logging import get_logger

logger = get_logger(__name__)

VK_API_BASE = "https://api.vk.com/method"
VK_API_VERSION = "5.80"


class PublishResult:
    """Outcome of one widget update call."""

    def __init__(
        self,
        success: bool,
        latency_ms: float,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
    ) -> None:
        self.success = success
        self.latency_ms = latency_ms
        self.status_code = status_code
        self.error = error


class VKWidgetPublisher:
    """
    Pushes widget code to VK.

    Only transport failures count as errors; the HTTP status and the VK
    response body are not interpreted.
    """

    def __init__(
        self,
        http_client: WidgetHTTPClient,
        api_base: str = VK_API_BASE,
        api_version: str = VK_API_VERSION,
        timeout_s: Optional[float] = None,
    ) -> None:
        self._http = http_client
        self._api_base = api_base.rstrip("/")
        self._api_version = api_version
        self._timeout = httpx.Timeout(timeout_s)

    @property
    def update_url(self) -> str:
        return f"{self._api_base}/appWidgets.update"

    def build_params(self, code: str, widget_type: WidgetType, access_token: str) -> dict[str, str]:
        return {
            "access_token": access_token,
            "v": self._api_version,
            "type": widget_type.value,
            "code": code,
        }

    async def publish(self, code: str, widget_type: WidgetType, access_token: str) -> PublishResult:
        start = time.perf_counter()
        try:
            resp = await self._http.get(
                self.update_url,
                params=self.build_params(code, widget_type, access_token),
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            return PublishResult(
                success=False,
                latency_ms=(time.perf_counter() - start) * 1000,
                error=str(exc) or exc.__class__.__name__,
            )

        latency_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "vk_widget_update_sent",
            widget_type=widget_type.value,
            status=resp.status_code,
            latency_ms=round(latency_ms, 2),
        )
        return PublishResult(success=True, latency_ms=latency_ms, status_code=resp.status_code)
