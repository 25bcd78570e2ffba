"""
Widget job entrypoint.
One run: load config, fetch live matches, build the widget, push it to VK, exit.
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

# Ensure backend root is on path when run as python -m widget.main
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from builder.service import BuiltPayload, build_payload, select_matches
from ingest.providers.opendota import FetchResult, OpenDotaLiveProvider
from publisher.vk import PublishResult, VKWidgetPublisher
from shared.config import Settings, get_settings, load_app_config
from shared.utils.http_client import WidgetHTTPClient
from shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


class RunOutcome:
    """What a single run did; the exit code is derived from it."""

    def __init__(
        self,
        payload: BuiltPayload,
        publish: PublishResult,
        fetch: FetchResult,
        config_error: Optional[str] = None,
    ) -> None:
        self.payload = payload
        self.publish = publish
        self.fetch = fetch
        self.config_error = config_error

    @property
    def fetch_error(self) -> Optional[str]:
        return self.fetch.error

    @property
    def exit_code(self) -> int:
        return 0 if self.publish.success else 1


async def run_pipeline(settings: Settings, http: WidgetHTTPClient) -> RunOutcome:
    """
    Execute the pipeline once with an already-started HTTP client.

    Config and fetch failures degrade to an empty run (fallback widget);
    a publish transport failure is reported through the outcome.
    """
    loaded = load_app_config(settings.app_config_path)
    if loaded.error:
        logger.error("app_config_load_failed", path=str(settings.app_config_path), error=loaded.error)
    config = loaded.config

    provider = OpenDotaLiveProvider(
        http, url=settings.live_matches_url, timeout_s=settings.fetch_timeout_s
    )
    fetched = await provider.fetch_live_matches()
    if not fetched.success:
        logger.warning(
            "live_matches_fetch_failed",
            url=provider.url,
            error=fetched.error,
            latency_ms=round(fetched.latency_ms, 2),
        )

    selected = select_matches(fetched.matches, config.whitelist, limit=settings.max_widget_matches)
    payload = build_payload(selected, title=settings.widget_title)
    logger.info(
        "widget_payload_built",
        live_matches=len(fetched.matches),
        skipped_records=fetched.skipped,
        fetch_latency_ms=round(fetched.latency_ms, 2),
        selected=payload.match_count,
        widget_type=payload.widget_type.value,
    )

    publisher = VKWidgetPublisher(
        http,
        api_base=settings.vk_api_base,
        api_version=settings.vk_api_version,
        timeout_s=settings.publish_timeout_s,
    )
    published = await publisher.publish(payload.code, payload.widget_type, config.vk_api_key)

    return RunOutcome(
        payload=payload,
        publish=published,
        fetch=fetched,
        config_error=loaded.error,
    )


async def main() -> int:
    settings = get_settings()
    setup_logging("widget", settings)

    async with WidgetHTTPClient(timeout_s=settings.fetch_timeout_s) as http:
        outcome = await run_pipeline(settings, http)

    if not outcome.publish.success:
        logger.critical("vk_widget_update_failed", error=outcome.publish.error)
    else:
        logger.info("widget_run_complete", widget_type=outcome.payload.widget_type.value)
    return outcome.exit_code


def run() -> None:
    """Console-script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
