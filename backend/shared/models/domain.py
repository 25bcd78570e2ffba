"""
Pydantic v2 domain models for the Dota widget job.
LiveMatch mirrors the OpenDota /live record; Widget* models are the VK wire shape.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _drop_nulls(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


# ── Base ────────────────────────────────────────────────────────────────
class DomainModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UpstreamModel(DomainModel):
    """Lenient decoding for third-party records: unknown keys ignored, nulls become defaults."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _drop_nulls(data)


# ── Application config ──────────────────────────────────────────────────
class AppConfig(BaseModel):
    """Local config file; types must match exactly (no "100" or true as a league id)."""

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    vk_api_key: str = Field(default="", alias="vkAPIkey")
    whitelist: list[int] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _drop_nulls(data)


# ── OpenDota live feed ──────────────────────────────────────────────────
class LivePlayer(UpstreamModel):
    account_id: int = 0
    hero_id: int = 0
    name: str = ""
    country_code: str = ""
    fantasy_role: int = 0
    team_id: int = 0
    team_name: str = ""
    team_tag: str = ""
    is_locked: bool = False
    is_pro: bool = False
    locked_until: int = 0


class LiveMatch(UpstreamModel):
    """One in-progress game as reported by the OpenDota live endpoint."""
    activate_time: int = 0
    deactivate_time: int = 0
    server_steam_id: str = ""
    lobby_id: str = ""
    league_id: int = 0
    lobby_type: int = 0
    game_time: int = 0
    delay: int = 0
    spectators: int = 0
    game_mode: int = 0
    average_mmr: int = 0
    sort_score: int = 0
    last_update_time: int = 0
    radiant_lead: int = 0
    radiant_score: int = 0
    dire_score: int = 0
    players: list[LivePlayer] = Field(default_factory=list)
    building_state: int = 0
    team_name_radiant: str = ""
    team_name_dire: str = ""
    team_logo_radiant: str = ""
    team_logo_dire: str = ""
    weekend_tourney_tournament_id: int = 0
    weekend_tourney_division: int = 0
    weekend_tourney_skill_level: int = 0
    weekend_tourney_bracket_round: int = 0


# ── VK widget ───────────────────────────────────────────────────────────
class WidgetTeam(DomainModel):
    model_config = ConfigDict(frozen=True)

    name: str


class WidgetScore(DomainModel):
    model_config = ConfigDict(frozen=True)

    team_a: int
    team_b: int


class WidgetMatch(DomainModel):
    """A single row of the "matches" widget."""

    model_config = ConfigDict(frozen=True)

    team_a: WidgetTeam
    team_b: WidgetTeam
    score: WidgetScore


class WidgetPayload(DomainModel):
    model_config = ConfigDict(frozen=True)

    title: str
    matches: list[WidgetMatch] = Field(default_factory=list)
