"""KBBCO Games: shared data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class TeamInfo:
    """Display metadata for one of the club's teams."""

    display: str
    link: str
    color: str
    original_level: str = ""


UNKNOWN_TEAM = TeamInfo(display="Unknown", link="#", color="#95a5a6", original_level="")


@dataclass(frozen=True)
class DisplayMatch:
    """A single game, oriented from the club's point of view."""

    week: int
    date: str
    time: str
    is_cup: bool
    competition: str
    team_info: TeamInfo
    opponent: str
    opponent_guid: str
    is_home: bool
    score_home: str = ""
    score_away: str = ""
    has_result: bool = False

    @property
    def is_unknown_team(self) -> bool:
        return self.team_info == UNKNOWN_TEAM

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> DisplayMatch:
        fields = dict(data)
        fields["team_info"] = TeamInfo(**fields.get("team_info") or asdict(UNKNOWN_TEAM))
        return cls(**fields)


# Week number -> games of that week, in chronological order.
WeeklySchedule = dict[int, list[DisplayMatch]]


def schedule_to_dict(schedule: WeeklySchedule) -> dict[str, list[dict]]:
    """Convert a schedule to its JSON form (week keys become strings)."""
    return {str(week): [m.to_dict() for m in games] for week, games in schedule.items()}


def schedule_from_dict(data: dict) -> WeeklySchedule:
    """Rebuild a schedule from its JSON form."""
    return {
        int(week): [DisplayMatch.from_dict(m) for m in games]
        for week, games in data.items()
    }
