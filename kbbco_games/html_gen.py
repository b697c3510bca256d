"""HTML rendering of the games widget."""

from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from kbbco_games.teams import team_level_class
from kbbco_games.widget import Action, DayGroup, MatchupView, WeekView

SITE_URL = "https://kbbco.be"
OPPONENT_URL = "https://vblweb.wisseq.eu/Home/TeamDetail?teamguid="

PREV_ICON = '<path d="M15.41 7.41L14 6l-6 6 6 6 1.41-1.41L10.83 12z"/>'
NEXT_ICON = '<path d="M10 6L8.59 7.41 13.17 12l-4.58 4.59L10 18l6-6z"/>'


def _action_url(base_url: str, view: WeekView, action: Action, **extra: str) -> str:
    params = {"week": str(view.week), "action": action.value, **extra}
    if view.filter_expanded:
        params["expanded"] = "1"
    return f"{base_url}?{urlencode(params)}"


def generate_widget_html(
    view: WeekView,
    show_weeks: int = 4,
    theme: str = "default",
    base_url: str = "",
) -> str:
    """Render the widget container for one week.

    Every control is a plain link back to ``base_url`` carrying the displayed
    week and the action to apply.
    """
    prev_url = _action_url(base_url, view, Action.PREV_WEEK)
    next_url = _action_url(base_url, view, Action.NEXT_WEEK)

    return f"""<div id="kbbco-games-container" class="kbbco-games-widget" data-theme="{escape(theme)}" data-show-weeks="{show_weeks}">
    <div class="kbbco-games-header">
        <div class="week-navigation">
            <a class="nav-btn prev-btn" href="{escape(prev_url)}" aria-label="Vorige week">
                <svg width="40" height="40" viewBox="0 0 24 24" fill="currentColor">{PREV_ICON}</svg>
            </a>
            <a class="nav-btn next-btn" href="{escape(next_url)}" aria-label="Volgende week">
                <svg width="40" height="40" viewBox="0 0 24 24" fill="currentColor">{NEXT_ICON}</svg>
            </a>
        </div>
        <h3 id="week-title" class="week-title">{escape(view.title)}</h3>
    </div>
{_render_filter(view, base_url)}
    <div id="games-content" class="games-content">
{_render_content(view, base_url)}
    </div>
</div>"""


def _render_filter(view: WeekView, base_url: str) -> str:
    if not view.teams:
        return ""

    toggle_url = _action_url(base_url, view, Action.TOGGLE_FILTER)
    bulk = "".join(
        f'<a class="filter-action" href="{escape(_action_url(base_url, view, action))}">{label}</a>'
        for action, label in (
            (Action.SELECT_ALL, "Alle"),
            (Action.SELECT_SENIORS, "Seniors"),
            (Action.SELECT_YOUTH, "Jeugd"),
            (Action.CLEAR_ALL, "Geen"),
        )
    )

    checkboxes = ""
    if view.filter_expanded:
        for team in view.teams:
            checked = " checked" if team in view.selected_teams else ""
            url = _action_url(base_url, view, Action.TOGGLE_TEAM, team=team)
            checkboxes += (
                f'<a class="team-checkbox {team_level_class(team)}{checked}" href="{escape(url)}">'
                f'<span class="checkbox-custom"></span>'
                f'<span class="team-label">{escape(team)}</span></a>'
            )

    content_style = "" if view.filter_expanded else ' style="display: none;"'
    return f"""    <div class="team-filter">
        <a class="filter-toggle" href="{escape(toggle_url)}">Teams <span class="filter-count">{escape(view.filter_label)}</span></a>
        <div id="team-filter-content"{content_style}>
            <div class="filter-actions">{bulk}</div>
            <div id="team-checkboxes">{checkboxes}</div>
        </div>
    </div>"""


def _render_content(view: WeekView, base_url: str) -> str:
    if view.error is not None:
        retry_url = _action_url(base_url, view, Action.RELOAD)
        return f"""        <div id="error-message" class="error-message">
            <p>{escape(view.error)}</p>
            <a href="{escape(retry_url)}" class="retry-btn">Opnieuw proberen</a>
        </div>"""

    if view.loading:
        return """        <div class="loading-spinner">
            <div class="spinner"></div>
            <p>Wedstrijden laden...</p>
        </div>"""

    if view.message is not None:
        heading, text = view.message
        return f"""        <div class="no-games-message">
            <h3>{escape(heading)}</h3>
            <p>{escape(text)}</p>
        </div>"""

    cards = "\n".join(_render_day(group) for group in view.groups)
    return f'        <div id="week-{view.week}" class="week-games active">\n{cards}\n        </div>'


def _render_day(group: DayGroup) -> str:
    badge = (
        f'<span class="competition-badge">{escape(group.cup_competition)}</span>'
        if group.cup_competition
        else ""
    )
    matchups = '<hr class="game-divider">'.join(_render_matchup(m) for m in group.matchups)
    return f"""            <div class="game-card">
                <div class="game-date-header"><span>{escape(group.label)}</span>{badge}</div>
                <div class="game-content">{matchups}</div>
            </div>"""


def _render_team(matchup: MatchupView, home: bool) -> str:
    game = matchup.match
    is_club = game.is_home == home
    score = matchup.home_score if home else matchup.away_score
    classes = ["team-section", "home" if home else "away"]
    if is_club:
        classes.append("kbbc-team")
        if matchup.club_won:
            classes.append("kbbc-winner")

    if is_club:
        team_url = f"{SITE_URL}/{game.team_info.link}/"
        name = (
            f'<a href="{escape(team_url)}">{escape(matchup.home_name if home else matchup.away_name)}</a>'
            f'<span class="team-level-inline {matchup.level_class}">'
            f'<a href="{escape(team_url)}">{escape(game.team_info.display)}</a></span>'
        )
    else:
        name = (
            f'<a href="{escape(OPPONENT_URL + game.opponent_guid)}" target="_blank" rel="noopener">'
            f"{escape(game.opponent)}</a>"
        )

    score_html = f'<div class="team-score">{escape(score)}</div>' if score else ""
    return f'<div class="{" ".join(classes)}"><div class="team-name">{name}</div>{score_html}</div>'


def _render_matchup(matchup: MatchupView) -> str:
    links = matchup.calendar
    if links is not None:
        vs = (
            '<div class="vs-divider clickable" title="Voeg toe aan kalender">VS</div>'
            '<div class="calendar-dropdown">'
            f'<a href="{escape(links.google)}" target="_blank" rel="noopener">Google Calendar</a>'
            f'<a href="{escape(links.outlook)}" target="_blank" rel="noopener">Outlook</a>'
            f'<a href="{escape(links.ical)}" download="kbbco-game.ics">Apple Calendar</a>'
            "</div>"
        )
    else:
        vs = '<div class="vs-divider">VS</div>'

    return (
        '<div class="team-matchup">'
        f"{_render_team(matchup, home=True)}"
        f'<div class="vs-section">{vs}<div class="game-status">{matchup.status}</div></div>'
        f"{_render_team(matchup, home=False)}"
        "</div>"
    )


def generate_index_html(widget_html: str, generated_utc: str) -> str:
    """Standalone page around a widget snapshot."""
    return f"""<!DOCTYPE html>
<html lang="nl">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>KBBC Oostkamp wedstrijden</title>
</head>
<body>
{widget_html}
    <p class="footer">Laatst bijgewerkt: {escape(generated_utc)}</p>
</body>
</html>"""
