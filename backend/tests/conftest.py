"""Shared fixtures: OpenDota records, app config files, and a recording mock transport."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from shared.config import Settings

LIVE_URL = "https://opendota.test/api/live"
VK_BASE = "https://vk.test/method"


def live_match(league_id: int, radiant: str = "Alpha", dire: str = "Beta", **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "activate_time": 1700000000,
        "deactivate_time": 0,
        "server_steam_id": "90123456789012345",
        "lobby_id": "27110133251631234",
        "league_id": league_id,
        "lobby_type": 1,
        "game_time": 1234,
        "delay": 120,
        "spectators": 5021,
        "game_mode": 2,
        "average_mmr": 0,
        "sort_score": 9000,
        "last_update_time": 1700001234,
        "radiant_lead": 3100,
        "radiant_score": 12,
        "dire_score": 9,
        "players": [
            {"account_id": 111, "hero_id": 14, "name": "player1", "team_id": 1, "is_pro": True},
            {"account_id": 222, "hero_id": 86, "name": None, "team_id": 2},
        ],
        "building_state": 4784201,
        "team_name_radiant": radiant,
        "team_name_dire": dire,
        "team_logo_radiant": "1234",
        "team_logo_dire": "5678",
    }
    record.update(extra)
    return record


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


def route(live: Callable[[httpx.Request], httpx.Response] | list[dict[str, Any]],
          vk: Callable[[httpx.Request], httpx.Response] | None = None) -> RecordingTransport:
    """Build a transport answering the live feed and the VK update endpoint."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "opendota.test":
            if callable(live):
                return live(request)
            return httpx.Response(200, json=live)
        if request.url.host == "vk.test":
            if vk is not None:
                return vk(request)
            return httpx.Response(200, json={"response": 1})
        return httpx.Response(404)

    return RecordingTransport(handler)


@pytest.fixture
def write_app_config(tmp_path: Path) -> Callable[[Any], Path]:
    def _write(content: Any) -> Path:
        path = tmp_path / "app.json"
        path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def _make(app_config_path: Path | None = None, **overrides: Any) -> Settings:
        return Settings(
            app_config_path=app_config_path or tmp_path / "missing.json",
            live_matches_url=LIVE_URL,
            vk_api_base=VK_BASE,
            **overrides,
        )

    return _make
