"""Turn raw VBL match records into a week-indexed schedule."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime

from kbbco_games import DisplayMatch, TeamInfo, WeeklySchedule
from kbbco_games.config import DEFAULT_CLUB_NAME
from kbbco_games.logging_config import get_logger
from kbbco_games.teams import TEAM_MAPPING, resolve_team_info
from kbbco_games.weeks import format_dutch_date, iso_week_of

CUP_MARKER = "Beker"

DATE_FORMATS = (
    "%d-%m-%Y",
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y %H:%M",
    "%Y-%m-%dT%H:%M:%S",
)

logger = get_logger(__name__)


def build_weekly_schedule(
    raw_matches: Iterable[Mapping],
    mapping: Mapping[str, TeamInfo] = TEAM_MAPPING,
    club_name: str = DEFAULT_CLUB_NAME,
) -> WeeklySchedule:
    """Normalize every record and bucket it by ISO week.

    Records are sorted on their ``jsDTCode`` first, so each week's games come
    out in chronological order. Records with an unreadable date are dropped.
    """
    schedule: WeeklySchedule = {}
    skipped = 0

    for raw in sorted(raw_matches, key=_sort_key):
        match = normalize_match(raw, mapping, club_name)
        if match is None:
            skipped += 1
            continue
        schedule.setdefault(match.week, []).append(match)

    if skipped:
        logger.debug("Skipped %d match(es) with an unreadable date", skipped)
    return schedule


def normalize_match(
    raw: Mapping,
    mapping: Mapping[str, TeamInfo] = TEAM_MAPPING,
    club_name: str = DEFAULT_CLUB_NAME,
) -> DisplayMatch | None:
    """Build a DisplayMatch, or None when the record's date cannot be read."""
    game_date = parse_match_date(str(raw.get("datumString") or ""))
    if game_date is None:
        return None

    home_name = str(raw.get("tTNaam") or "")
    away_name = str(raw.get("tUNaam") or "")
    is_home = club_name in home_name
    if is_home:
        our_team, opponent = home_name, away_name
        opponent_guid = raw.get("tUGUID")
    else:
        our_team, opponent = away_name, home_name
        opponent_guid = raw.get("tTGUID")

    competition = str(raw.get("pouleNaam") or "")
    score_home, score_away = parse_score(str(raw.get("uitslag") or ""))

    return DisplayMatch(
        week=iso_week_of(game_date),
        date=format_dutch_date(game_date),
        time=str(raw.get("beginTijd") or "").strip(),
        is_cup=CUP_MARKER in competition,
        competition=competition,
        team_info=resolve_team_info(our_team, mapping),
        opponent=opponent.strip(),
        opponent_guid=str(opponent_guid or ""),
        is_home=is_home,
        score_home=score_home,
        score_away=score_away,
        has_result=bool(score_home),
    )


def parse_match_date(text: str) -> date | None:
    text = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_score(result: str) -> tuple[str, str]:
    """Split ``"78 - 65"`` into ``("78", "65")``.

    Anything that is not exactly two non-empty halves counts as unplayed and
    gives two empty strings.
    """
    parts = [part.strip() for part in result.split("-")]
    if len(parts) != 2 or not all(parts):
        return "", ""
    return parts[0], parts[1]


def _sort_key(raw: Mapping) -> float:
    try:
        return float(raw.get("jsDTCode") or 0)
    except (TypeError, ValueError):
        return 0.0
