"""
Widget builder: picks whitelisted live matches and renders the VK widget code.

VK app widgets take a VKScript snippet, so the payload is a JSON object
wrapped as ``return{...};``.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from pydantic_core import PydanticSerializationError

from shared.models.domain import (
    LiveMatch,
    WidgetMatch,
    WidgetPayload,
    WidgetScore,
    WidgetTeam,
)
from shared.models.enums import WidgetType
from shared.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "Live Dota 2 Matches"
MAX_WIDGET_MATCHES = 5

NO_MATCHES_CODE = 'return{"title":"Live Dota 2 Matches","text": "No live matches in progress"};'


class BuiltPayload:
    """Widget code plus the widget type VK must render it as."""

    def __init__(self, code: str, widget_type: WidgetType, match_count: int = 0) -> None:
        self.code = code
        self.widget_type = widget_type
        self.match_count = match_count

    def __repr__(self) -> str:
        return f"BuiltPayload(type={self.widget_type.value}, matches={self.match_count})"


def project_match(match: LiveMatch) -> WidgetMatch:
    """Radiant is rendered as team A, Dire as team B."""
    return WidgetMatch(
        team_a=WidgetTeam(name=match.team_name_radiant),
        team_b=WidgetTeam(name=match.team_name_dire),
        score=WidgetScore(team_a=match.radiant_score, team_b=match.dire_score),
    )


def select_matches(
    matches: Iterable[LiveMatch],
    whitelist: Sequence[int],
    limit: int = MAX_WIDGET_MATCHES,
) -> list[WidgetMatch]:
    """
    Project the first ``limit`` matches (feed order) whose league is whitelisted.

    Each match is selected at most once, however many times its league
    appears in the whitelist.
    """
    leagues = set(whitelist)
    selected: list[WidgetMatch] = []
    for match in matches:
        if len(selected) >= limit:
            break
        if match.league_id in leagues:
            selected.append(project_match(match))
    return selected


def build_payload(selected: Sequence[WidgetMatch], title: str = DEFAULT_TITLE) -> BuiltPayload:
    """
    Render the widget code for the selected matches.

    An empty selection produces the fixed "no live matches" text widget.
    """
    if not selected:
        return BuiltPayload(NO_MATCHES_CODE, WidgetType.TEXT)

    payload = WidgetPayload(title=title, matches=list(selected))
    try:
        body = payload.model_dump_json()
    except PydanticSerializationError as exc:
        logger.error("widget_payload_serialize_error", error=str(exc))
        body = ""
    return BuiltPayload(f"return{body};", WidgetType.MATCHES, match_count=len(selected))
