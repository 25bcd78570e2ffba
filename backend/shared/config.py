"""
Central configuration for the Dota widget job.
Uses pydantic-settings for env-based runtime config; the application
config (VK token + league whitelist) lives in a local JSON file.
"""
from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models.domain import AppConfig


class Environment(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Runtime settings; defaults reproduce the fixed endpoints of a plain run."""

    model_config = SettingsConfigDict(
        env_prefix="DW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── General ──────────────────────────────────────────────
    environment: Environment = Environment.DEV
    log_level: str = "INFO"
    app_config_path: Path = Field(default=Path("config/app.json"))

    # ── OpenDota ─────────────────────────────────────────────
    live_matches_url: str = "https://api.opendota.com/api/live"
    fetch_timeout_s: float = 10.0

    # ── VK ───────────────────────────────────────────────────
    vk_api_base: str = "https://api.vk.com/method"
    vk_api_version: str = "5.80"
    publish_timeout_s: Optional[float] = Field(
        default=None, description="None disables the client-side timeout for the widget update"
    )

    # ── Widget ───────────────────────────────────────────────
    widget_title: str = "Live Dota 2 Matches"
    max_widget_matches: int = 5


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton access to validated settings."""
    return Settings()


class AppConfigResult:
    """Loaded application config plus the error that forced a fallback, if any."""

    def __init__(self, config: AppConfig, error: Optional[str] = None) -> None:
        self.config = config
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


def load_app_config(path: Path | str) -> AppConfigResult:
    """
    Read the JSON application config.

    Never raises: a missing, unreadable or malformed file yields an empty
    AppConfig (no token, no whitelist) together with the error message.
    The whitelist is deduplicated, keeping first-occurrence order.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        return AppConfigResult(AppConfig(), error=f"cannot read {path}: {exc}")

    try:
        data = json.loads(raw)
        config = AppConfig.model_validate(data)
    except json.JSONDecodeError as exc:
        return AppConfigResult(AppConfig(), error=f"invalid JSON in {path}: {exc}")
    except ValidationError as exc:
        return AppConfigResult(AppConfig(), error=f"invalid config in {path}: {exc.error_count()} error(s)")

    whitelist = list(dict.fromkeys(config.whitelist))
    return AppConfigResult(config.model_copy(update={"whitelist": whitelist}))
