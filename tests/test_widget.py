"""Tests for the widget controller and its HTML rendering."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from urllib.parse import parse_qs, urlparse

import pytest
from bs4 import BeautifulSoup

from kbbco_games.html_gen import generate_index_html, generate_widget_html
from kbbco_games.team_filter import FILTER_KEY, MemoryPreferences
from kbbco_games.widget import (
    NO_DATA,
    NO_GAMES_FOR_TEAMS,
    Action,
    Command,
    ScheduleWidget,
    club_won,
)
from kbbco_games.weeks import THIS_WEEK_TITLE


@pytest.fixture
def store() -> MemoryPreferences:
    return MemoryPreferences()


@pytest.fixture
def widget(games_response: dict, store: MemoryPreferences, today: date, now: datetime) -> ScheduleWidget:
    widget = ScheduleWidget(lambda: games_response, store, today=today, now=lambda: now)
    widget.load()
    return widget


class TestLoading:
    def test_starts_on_current_week(self, widget: ScheduleWidget) -> None:
        view = widget.render()
        assert view.week == 42
        assert view.title == THIS_WEEK_TITLE
        assert view.error is None

    def test_not_loaded_yet(self, games_response: dict, store: MemoryPreferences, today: date) -> None:
        view = ScheduleWidget(lambda: games_response, store, today=today).render()
        assert view.loading is True
        assert view.groups == []

    def test_empty_current_week_moves_forward(self, games_response: dict, store: MemoryPreferences) -> None:
        widget = ScheduleWidget(lambda: games_response, store, today=date(2026, 10, 24))
        widget.load()
        assert widget.navigator.current_week == 43
        assert widget.display_week == 44
        assert widget.render().title == "Van maandag 26 oktober tem zondag 1 november"

    def test_no_data(self, store: MemoryPreferences, today: date) -> None:
        widget = ScheduleWidget(lambda: {"success": True, "data": {}}, store, today=today)
        widget.load()
        assert widget.render().message == NO_DATA

    def test_error_response(self, store: MemoryPreferences, today: date) -> None:
        widget = ScheduleWidget(
            lambda: {"success": False, "error": "Unable to fetch games data"}, store, today=today
        )
        widget.load()
        view = widget.render()
        assert view.error == "Unable to fetch games data"
        assert view.groups == []

    def test_loader_exception(self, store: MemoryPreferences, today: date) -> None:
        def broken() -> dict:
            raise TimeoutError("timed out")

        widget = ScheduleWidget(broken, store, today=today)
        widget.load()
        assert widget.render().error == "Failed to load games: timed out"

    def test_reload_recovers(self, games_response: dict, store: MemoryPreferences, today: date) -> None:
        responses = [{"success": False, "error": "down"}, games_response]
        widget = ScheduleWidget(lambda: responses.pop(0), store, today=today)
        widget.load()
        assert widget.render().error == "down"

        view = widget.dispatch(Command(Action.RELOAD))
        assert view.error is None
        assert len(view.groups) == 2

    def test_title_error_falls_back_to_week_number(
        self, widget: ScheduleWidget, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken(*args, **kwargs) -> str:
            raise RuntimeError("boom")

        monkeypatch.setattr("kbbco_games.widget.format_week_title", broken)
        assert widget.render().title == "Week 42"


class TestView:
    def test_groups_by_date_and_time(self, widget: ScheduleWidget) -> None:
        view = widget.render()
        assert [g.label for g in view.groups] == [
            "Zaterdag 17 oktober om 14.00",
            "Zaterdag 17 oktober om 20.30",
        ]
        assert [len(g.matchups) for g in view.groups] == [1, 2]
        assert view.groups[0].cup_competition == ""
        assert view.groups[1].cup_competition == "Beker van West-Vlaanderen"

    def test_away_matchup(self, widget: ScheduleWidget) -> None:
        matchup = widget.render().groups[0].matchups[0]
        assert matchup.home_name == "Brugge BBC J18 A"
        assert matchup.away_name == "KBBC Oostkamp"
        assert matchup.level_class == "u18"
        assert matchup.status == "Te spelen"
        assert matchup.calendar is not None

    def test_played_matchup(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.PREV_WEEK))
        assert view.week == 41
        assert view.title == "Van maandag 5 tem zondag 11 oktober"
        matchup = view.groups[0].matchups[0]
        assert (matchup.home_score, matchup.away_score) == ("78", "65")
        assert matchup.club_won is True
        assert matchup.status == "Gespeeld"
        assert matchup.calendar is None

    def test_club_won_from_away_side(self, widget: ScheduleWidget) -> None:
        game = widget.schedule[41][0]
        assert club_won(replace(game, is_home=False)) is False
        assert club_won(replace(game, score_home="n/a")) is False


class TestNavigation:
    def test_next_skips_empty_week(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.NEXT_WEEK))
        assert view.week == 44
        assert view.groups[0].matchups[0].match.is_unknown_team

    def test_prev_skips_back(self, widget: ScheduleWidget) -> None:
        widget.dispatch(Command(Action.NEXT_WEEK))
        assert widget.dispatch(Command(Action.PREV_WEEK)).week == 42

    def test_next_wraps_around(self, widget: ScheduleWidget) -> None:
        widget.dispatch(Command(Action.NEXT_WEEK))
        assert widget.dispatch(Command(Action.NEXT_WEEK)).week == 41


class TestFiltering:
    def test_first_load_shows_all_teams(self, widget: ScheduleWidget) -> None:
        view = widget.render()
        assert view.teams == ["ONE", "TWO", "U18 A"]
        assert view.filter_label == "Alle teams"

    def test_toggle_team_hides_its_games(self, widget: ScheduleWidget, store: MemoryPreferences) -> None:
        view = widget.dispatch(Command(Action.TOGGLE_TEAM, "U18 A"))
        assert [g.label for g in view.groups] == ["Zaterdag 17 oktober om 20.30"]
        assert store.get(FILTER_KEY) == '["ONE", "TWO"]'

    def test_toggle_team_needs_a_team(self, widget: ScheduleWidget) -> None:
        with pytest.raises(ValueError):
            widget.dispatch(Command(Action.TOGGLE_TEAM))

    def test_clear_all_leaves_message(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.CLEAR_ALL))
        assert view.message == NO_GAMES_FOR_TEAMS
        assert view.filter_label == "Geen teams"

    def test_clear_all_keeps_unknown_team(self, widget: ScheduleWidget) -> None:
        widget.dispatch(Command(Action.CLEAR_ALL))
        view = widget.dispatch(Command(Action.NEXT_WEEK))
        assert len(view.groups) == 1

    def test_seniors_and_youth(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.SELECT_SENIORS))
        assert view.selected_teams == {"ONE", "TWO"}
        view = widget.dispatch(Command(Action.SELECT_YOUTH))
        assert [g.label for g in view.groups] == ["Zaterdag 17 oktober om 14.00"]
        view = widget.dispatch(Command(Action.SELECT_ALL))
        assert view.filter_label == "Alle teams"

    def test_preference_survives_new_widget(
        self, widget: ScheduleWidget, games_response: dict, store: MemoryPreferences, today: date
    ) -> None:
        widget.dispatch(Command(Action.SELECT_SENIORS))
        again = ScheduleWidget(lambda: games_response, store, today=today)
        again.load()
        assert again.render().selected_teams == {"ONE", "TWO"}

    def test_toggle_filter_panel(self, widget: ScheduleWidget) -> None:
        assert widget.dispatch(Command(Action.TOGGLE_FILTER)).filter_expanded is True
        assert widget.dispatch(Command(Action.TOGGLE_FILTER)).filter_expanded is False


# --- HTML rendering ---


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _query(href: str) -> dict[str, list[str]]:
    return parse_qs(urlparse(href).query)


class TestHtml:
    def test_week_rendering(self, widget: ScheduleWidget) -> None:
        soup = _soup(generate_widget_html(widget.render(), base_url="/widget"))
        assert soup.find(id="week-title").get_text(strip=True) == THIS_WEEK_TITLE
        assert soup.find(id="week-42") is not None
        assert len(soup.find_all(class_="team-matchup")) == 3
        assert soup.find(class_="competition-badge").get_text() == "Beker van West-Vlaanderen"
        assert len(soup.find_all(class_="calendar-dropdown")) == 3

    def test_navigation_links(self, widget: ScheduleWidget) -> None:
        soup = _soup(generate_widget_html(widget.render(), base_url="/widget"))
        next_link = soup.find("a", class_="next-btn")["href"]
        assert next_link.startswith("/widget?")
        assert _query(next_link) == {"week": ["42"], "action": ["next"]}
        assert _query(soup.find("a", class_="prev-btn")["href"])["action"] == ["prev"]

    def test_container_attributes(self, widget: ScheduleWidget) -> None:
        html = generate_widget_html(widget.render(), show_weeks=6, theme='compact"><script>')
        container = _soup(html).find(id="kbbco-games-container")
        assert container["data-theme"] == 'compact"><script>'
        assert container["data-show-weeks"] == "6"
        assert "<script>" not in html

    def test_played_game_shows_scores_and_winner(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.PREV_WEEK))
        soup = _soup(generate_widget_html(view))
        assert [s.get_text() for s in soup.find_all(class_="team-score")] == ["78", "65"]
        assert soup.find(class_="kbbc-winner") is not None
        assert soup.find(class_="calendar-dropdown") is None
        assert soup.find(class_="game-status").get_text() == "Gespeeld"

    def test_filter_checkboxes_when_expanded(self, widget: ScheduleWidget) -> None:
        widget.dispatch(Command(Action.TOGGLE_TEAM, "TWO"))
        view = widget.dispatch(Command(Action.TOGGLE_FILTER))
        soup = _soup(generate_widget_html(view))
        boxes = soup.find_all("a", class_="team-checkbox")
        assert [b.get_text(strip=True) for b in boxes] == ["ONE", "TWO", "U18 A"]
        assert ["checked" in b["class"] for b in boxes] == [True, False, True]
        assert _query(boxes[1]["href"]) == {
            "week": ["42"], "action": ["toggle_team"], "team": ["TWO"], "expanded": ["1"],
        }
        assert soup.find(class_="filter-count").get_text() == "2/3 teams"

    def test_error_has_retry(self, store: MemoryPreferences, today: date) -> None:
        widget = ScheduleWidget(lambda: {"success": False, "error": "down"}, store, today=today)
        widget.load()
        soup = _soup(generate_widget_html(widget.render()))
        assert soup.find(id="error-message").p.get_text() == "down"
        assert _query(soup.find("a", class_="retry-btn")["href"])["action"] == ["reload"]

    def test_message_rendering(self, widget: ScheduleWidget) -> None:
        view = widget.dispatch(Command(Action.CLEAR_ALL))
        soup = _soup(generate_widget_html(view))
        assert soup.find(class_="no-games-message").h3.get_text() == NO_GAMES_FOR_TEAMS[0]

    def test_index_page(self, widget: ScheduleWidget) -> None:
        html = generate_index_html(generate_widget_html(widget.render()), "2026-10-17T10:00:00Z")
        assert html.startswith("<!DOCTYPE html>")
        assert 'id="kbbco-games-container"' in html
        assert "2026-10-17T10:00:00Z" in html
