"""Shared fixtures: raw VBL records and the schedule built from them."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from kbbco_games import WeeklySchedule, schedule_to_dict
from kbbco_games.normalizer import build_weekly_schedule

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def today() -> date:
    # Saturday of ISO week 42; the fixture has games in weeks 41, 42 and 44.
    return date(2026, 10, 17)


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def raw_matches() -> list[dict]:
    return json.loads((FIXTURE_DIR / "matches.json").read_text(encoding="utf-8"))


@pytest.fixture
def schedule(raw_matches: list[dict]) -> WeeklySchedule:
    return build_weekly_schedule(raw_matches)


@pytest.fixture
def games_response(schedule: WeeklySchedule) -> dict:
    return {"success": True, "data": schedule_to_dict(schedule)}
