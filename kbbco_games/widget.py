"""Widget controller: owns the navigation and filter state and builds the view."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from kbbco_games import DisplayMatch, WeeklySchedule, schedule_from_dict
from kbbco_games.calendar_gen import CalendarLinks, generate_calendar_links
from kbbco_games.logging_config import get_logger
from kbbco_games.navigator import WeekNavigator
from kbbco_games.team_filter import PreferenceStore, TeamFilter
from kbbco_games.teams import team_level_class
from kbbco_games.weeks import current_week, format_week_title

DEFAULT_ERROR = "Er is een fout opgetreden bij het laden van de wedstrijden."
NO_DATA = ("Geen wedstrijden beschikbaar", "Er zijn momenteel geen wedstrijden beschikbaar.")
NO_GAMES_THIS_WEEK = (
    "Geen wedstrijden deze week",
    "Er zijn geen wedstrijden gepland voor deze week.",
)
NO_GAMES_FOR_TEAMS = (
    "Geen wedstrijden voor geselecteerde teams",
    "Er zijn geen wedstrijden voor de geselecteerde teams deze week.",
)

logger = get_logger(__name__)


class Action(str, Enum):
    NEXT_WEEK = "next"
    PREV_WEEK = "prev"
    RELOAD = "reload"
    TOGGLE_FILTER = "toggle_filter"
    TOGGLE_TEAM = "toggle_team"
    SELECT_ALL = "select_all"
    SELECT_SENIORS = "select_seniors"
    SELECT_YOUTH = "select_youth"
    CLEAR_ALL = "clear_all"


@dataclass(frozen=True)
class Command:
    action: Action
    team: str | None = None


@dataclass
class MatchupView:
    match: DisplayMatch
    home_name: str
    away_name: str
    home_score: str
    away_score: str
    club_won: bool
    status: str
    level_class: str
    calendar: CalendarLinks | None = None


@dataclass
class DayGroup:
    label: str
    cup_competition: str
    matchups: list[MatchupView] = field(default_factory=list)


@dataclass
class WeekView:
    week: int
    title: str
    groups: list[DayGroup] = field(default_factory=list)
    message: tuple[str, str] | None = None
    error: str | None = None
    loading: bool = False
    filter_label: str = ""
    teams: list[str] = field(default_factory=list)
    selected_teams: set[str] = field(default_factory=set)
    filter_expanded: bool = False


class ScheduleWidget:
    """One instance per rendered widget.

    ``load_games`` returns the data endpoint's response body, i.e.
    ``{"success": True, "data": {...}}`` or ``{"success": False, "error": ...}``.
    """

    def __init__(
        self,
        load_games: Callable[[], Mapping],
        store: PreferenceStore,
        today: date | None = None,
        club_name: str = "KBBC Oostkamp",
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._load_games = load_games
        self.today = today or date.today()
        self.club_name = club_name
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.navigator = WeekNavigator(current_week(self.today))
        self.team_filter = TeamFilter(store)
        self.schedule: WeeklySchedule = {}
        self.error: str | None = None
        self.loaded = False
        self.filter_expanded = False

    @property
    def display_week(self) -> int:
        return self.navigator.display_week

    def load(self) -> None:
        """Ask the data endpoint for the schedule; the last response wins."""
        self.error = None
        try:
            response = self._load_games()
        except Exception as e:
            logger.error("Games request failed: %s", e)
            self.error = f"Failed to load games: {e}"
            return

        if not response.get("success") or not isinstance(response.get("data"), Mapping):
            logger.error("Invalid games response: %r", response)
            self.error = str(response.get("error") or "Invalid data received from server")
            return

        try:
            self.schedule = schedule_from_dict(response["data"])
        except (TypeError, ValueError, KeyError) as e:
            logger.error("Malformed schedule data: %s", e)
            self.error = "Invalid data received from server"
            return

        self.navigator.schedule = self.schedule
        if self.schedule and not self.team_filter.available_teams:
            self.team_filter.initialize(self.schedule)
        self.navigator.resolve_initial()
        self.loaded = True

    def dispatch(self, command: Command) -> WeekView:
        action = command.action
        if action is Action.NEXT_WEEK:
            self.navigator.next()
        elif action is Action.PREV_WEEK:
            self.navigator.prev()
        elif action is Action.RELOAD:
            self.load()
        elif action is Action.TOGGLE_FILTER:
            self.filter_expanded = not self.filter_expanded
        elif action is Action.TOGGLE_TEAM:
            if not command.team:
                raise ValueError("toggle_team needs a team")
            self.team_filter.toggle(command.team)
        elif action is Action.SELECT_ALL:
            self.team_filter.select_all()
        elif action is Action.SELECT_SENIORS:
            self.team_filter.select_seniors()
        elif action is Action.SELECT_YOUTH:
            self.team_filter.select_youth()
        elif action is Action.CLEAR_ALL:
            self.team_filter.clear_all()
        return self.render()

    def title(self) -> str:
        try:
            return format_week_title(self.display_week, self.navigator.current_week, self.today)
        except Exception:
            logger.exception("Error updating week title")
            return f"Week {self.display_week}"

    def render(self) -> WeekView:
        view = WeekView(
            week=self.display_week,
            title=self.title(),
            filter_label=self.team_filter.count_label(),
            teams=self.team_filter.sorted_teams(),
            selected_teams=set(self.team_filter.filtered_teams),
            filter_expanded=self.filter_expanded,
        )

        if self.error is not None:
            view.error = self.error
            return view
        if not self.loaded:
            view.loading = True
            return view
        if not self.schedule:
            view.message = NO_DATA
            return view

        games = self.schedule.get(self.display_week) or []
        if not games:
            view.message = NO_GAMES_THIS_WEEK
            return view

        visible = [game for game in games if self.team_filter.should_show(game)]
        if not visible:
            view.message = NO_GAMES_FOR_TEAMS
            return view

        view.groups = self._group_by_date(visible)
        return view

    def _group_by_date(self, games: list[DisplayMatch]) -> list[DayGroup]:
        grouped: dict[str, list[DisplayMatch]] = {}
        for game in games:
            grouped.setdefault(f"{game.date} om {game.time}", []).append(game)

        groups = []
        for label, day_games in grouped.items():
            cup = next((g.competition for g in day_games if g.is_cup), "")
            groups.append(
                DayGroup(
                    label=label,
                    cup_competition=cup,
                    matchups=[self._matchup(game) for game in day_games],
                )
            )
        return groups

    def _matchup(self, game: DisplayMatch) -> MatchupView:
        home_name = self.club_name if game.is_home else game.opponent
        away_name = game.opponent if game.is_home else self.club_name
        return MatchupView(
            match=game,
            home_name=home_name,
            away_name=away_name,
            home_score=game.score_home if game.has_result else "",
            away_score=game.score_away if game.has_result else "",
            club_won=club_won(game),
            status="Gespeeld" if game.has_result else "Te spelen",
            level_class=team_level_class(game.team_info.display),
            calendar=generate_calendar_links(game, self.club_name, now=self._now()),
        )


def club_won(game: DisplayMatch) -> bool:
    if not game.has_result:
        return False
    try:
        home, away = int(game.score_home), int(game.score_away)
    except ValueError:
        return False
    return home > away if game.is_home else away > home
