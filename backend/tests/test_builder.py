"""Unit tests for match selection, projection, and widget code rendering."""
from __future__ import annotations

import json

import pytest

from builder.service import (
    NO_MATCHES_CODE,
    build_payload,
    project_match,
    select_matches,
)
from conftest import live_match
from shared.models.domain import LiveMatch
from shared.models.enums import WidgetType


def _matches(*league_ids: int) -> list[LiveMatch]:
    return [
        LiveMatch.model_validate(live_match(lid, radiant=f"R{i}", dire=f"D{i}"))
        for i, lid in enumerate(league_ids)
    ]


def _unwrap(code: str) -> dict:
    assert code.startswith("return")
    assert code.endswith(";")
    return json.loads(code[len("return"):-1])


# ── project_match ───────────────────────────────────────────────────────

class TestProjectMatch:

    def test_serialized_shape(self) -> None:
        match = LiveMatch.model_validate(
            {"team_name_radiant": "Alpha", "team_name_dire": "Beta", "radiant_score": 12, "dire_score": 9}
        )
        assert project_match(match).model_dump_json() == (
            '{"team_a":{"name":"Alpha"},"team_b":{"name":"Beta"},"score":{"team_a":12,"team_b":9}}'
        )

    def test_missing_team_names_are_empty(self) -> None:
        match = LiveMatch.model_validate({"league_id": 1, "team_name_radiant": None})
        widget = project_match(match)
        assert widget.team_a.name == ""
        assert widget.team_b.name == ""
        assert widget.score.team_a == 0


# ── select_matches ──────────────────────────────────────────────────────

class TestSelectMatches:

    def test_only_whitelisted_league_selected(self) -> None:
        selected = select_matches(_matches(100, 200), [100])
        assert len(selected) == 1
        assert selected[0].team_a.name == "R0"

    def test_never_more_than_five(self) -> None:
        selected = select_matches(_matches(*([100] * 9)), [100])
        assert len(selected) == 5
        assert [m.team_a.name for m in selected] == ["R0", "R1", "R2", "R3", "R4"]

    @pytest.mark.parametrize(
        "whitelist",
        [[], [100], [100, 200], [100, 100, 100], [200, 100, 300, 100], list(range(1000))],
    )
    def test_cap_holds_for_any_whitelist(self, whitelist: list[int]) -> None:
        feed = _matches(100, 200, 100, 300, 200, 100, 100, 200, 300)
        assert len(select_matches(feed, whitelist)) <= 5

    def test_duplicate_whitelist_selects_match_once(self) -> None:
        selected = select_matches(_matches(100), [100, 100])
        assert len(selected) == 1

    def test_feed_order_preserved(self) -> None:
        selected = select_matches(_matches(300, 100, 200, 100), [100, 300])
        assert [m.team_a.name for m in selected] == ["R0", "R1", "R3"]

    def test_custom_limit(self) -> None:
        assert len(select_matches(_matches(1, 1, 1), [1], limit=2)) == 2

    def test_empty_whitelist_selects_nothing(self) -> None:
        assert select_matches(_matches(100, 200), []) == []


# ── build_payload ───────────────────────────────────────────────────────

class TestBuildPayload:

    def test_no_matches_uses_text_fallback(self) -> None:
        built = build_payload([])
        assert built.widget_type == WidgetType.TEXT
        assert built.code == NO_MATCHES_CODE
        assert built.code == 'return{"title":"Live Dota 2 Matches","text": "No live matches in progress"};'
        assert built.match_count == 0

    def test_matches_widget_envelope(self) -> None:
        selected = select_matches(_matches(100, 200, 100), [100])
        built = build_payload(selected)
        assert built.widget_type == WidgetType.MATCHES
        assert built.match_count == 2
        body = _unwrap(built.code)
        assert body["title"] == "Live Dota 2 Matches"
        assert len(body["matches"]) == 2
        assert body["matches"][0] == {
            "team_a": {"name": "R0"},
            "team_b": {"name": "D0"},
            "score": {"team_a": 12, "team_b": 9},
        }

    def test_compact_json(self) -> None:
        built = build_payload(select_matches(_matches(7), [7]))
        assert built.code.startswith('return{"title":"Live Dota 2 Matches","matches":[{')
        assert " " not in built.code.replace("Live Dota 2 Matches", "")

    def test_custom_title(self) -> None:
        built = build_payload(select_matches(_matches(7), [7]), title="Pro games")
        assert _unwrap(built.code)["title"] == "Pro games"
