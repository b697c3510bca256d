"""Which of the club's teams a visitor wants to see, remembered across visits."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from kbbco_games import DisplayMatch, WeeklySchedule
from kbbco_games.logging_config import get_logger
from kbbco_games.teams import is_senior

FILTER_KEY = "kbbco_team_filter"

logger = get_logger(__name__)


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryPreferences:
    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFilePreferences:
    """Preferences kept in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class TeamFilter:
    """Set of team display names to show.

    Nothing stored yet means every team found in the data is selected once the
    data arrives. A stored empty list is kept as is and hides every team.
    Games of unrecognised teams cannot be filtered and are always shown.
    """

    def __init__(self, store: PreferenceStore) -> None:
        self.store = store
        self.filtered_teams: set[str] = set()
        self.available_teams: set[str] = set()
        self.has_preference = False
        self.load()

    def load(self) -> None:
        saved = self.store.get(FILTER_KEY)
        if saved is None:
            return
        try:
            teams = json.loads(saved)
        except ValueError:
            logger.warning("Failed to load filter preferences")
            return
        if not isinstance(teams, list):
            logger.warning("Ignoring filter preferences that are not a list")
            return
        self.filtered_teams = {str(team) for team in teams}
        self.has_preference = True

    def save(self) -> None:
        self.store.set(FILTER_KEY, json.dumps(sorted(self.filtered_teams), ensure_ascii=False))
        self.has_preference = True

    def initialize(self, schedule: WeeklySchedule) -> None:
        """Collect the teams present in ``schedule``."""
        self.available_teams = {
            game.team_info.display
            for games in schedule.values()
            for game in games
            if not game.is_unknown_team and game.team_info.display
        }
        if not self.has_preference:
            self.filtered_teams = set(self.available_teams)

    def toggle(self, team: str) -> None:
        if team in self.filtered_teams:
            self.filtered_teams.discard(team)
        else:
            self.filtered_teams.add(team)
        self.save()

    def select_all(self) -> None:
        self.filtered_teams = set(self.available_teams)
        self.save()

    def select_seniors(self) -> None:
        self.filtered_teams = {team for team in self.available_teams if is_senior(team)}
        self.save()

    def select_youth(self) -> None:
        self.filtered_teams = {team for team in self.available_teams if not is_senior(team)}
        self.save()

    def clear_all(self) -> None:
        self.filtered_teams = set()
        self.save()

    def should_show(self, game: DisplayMatch) -> bool:
        if game.is_unknown_team or not game.team_info.display:
            return True
        return game.team_info.display in self.filtered_teams

    def sorted_teams(self) -> list[str]:
        """Senior teams first, then the youth teams, each alphabetically."""
        return sorted(self.available_teams, key=lambda team: (not is_senior(team), team))

    def count_label(self) -> str:
        selected = len(self.filtered_teams)
        total = len(self.available_teams)
        if selected == 0:
            return "Geen teams"
        if selected == total:
            return "Alle teams"
        return f"{selected}/{total} teams"
