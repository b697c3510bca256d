"""FastAPI application serving the games data, widget and calendar feed."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import asynccontextmanager
from functools import lru_cache
from urllib.parse import quote, unquote

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response

from kbbco_games.cache import FileCache, MemoryCache
from kbbco_games.calendar_gen import create_schedule_calendar
from kbbco_games.config import Settings
from kbbco_games.fetcher import FetchError
from kbbco_games.html_gen import generate_widget_html
from kbbco_games.logging_config import get_logger
from kbbco_games.security import create_nonce
from kbbco_games.service import ScheduleService
from kbbco_games.widget import Action, Command, ScheduleWidget

PREFERENCE_MAX_AGE = 365 * 24 * 60 * 60

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_service() -> ScheduleService:
    settings = get_settings()
    cache = FileCache(settings.cache_dir) if settings.cache_dir else MemoryCache()
    return ScheduleService(settings, cache)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A fresh start or a shutdown always drops the cached schedule.
    get_service().invalidate()
    yield
    get_service().invalidate()


app = FastAPI(title="KBBCO Games", lifespan=lifespan)


class CookiePreferences:
    """Visitor preferences kept in cookies; writes are collected for the response."""

    def __init__(self, cookies: Mapping[str, str]) -> None:
        self.cookies = dict(cookies)
        self.changed: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        if key in self.changed:
            return self.changed[key]
        value = self.cookies.get(key)
        return unquote(value) if value is not None else None

    def set(self, key: str, value: str) -> None:
        self.changed[key] = value


@app.post("/games")
def get_games_data(
    nonce: str = Query("", description="Anti-forgery token issued with the page."),
    service: ScheduleService = Depends(get_service),
) -> dict:
    """Return the weekly schedule wrapped in a success/error envelope."""

    return service.handle_games_request(nonce)


@app.get("/widget", response_class=HTMLResponse)
def get_widget(
    request: Request,
    show_weeks: int = Query(4, ge=1, le=10, description="Aantal weken (niet gebruikt bij weergave)."),
    theme: str = Query("default", description="Stijl van de widget, bv. default of compact."),
    week: int | None = Query(None, description="Week die momenteel getoond wordt."),
    action: str | None = Query(None, description="Navigatie- of filteractie."),
    team: str | None = Query(None, description="Team voor toggle_team."),
    expanded: bool = Query(False, description="Of het teamfilter opengeklapt is."),
    service: ScheduleService = Depends(get_service),
) -> HTMLResponse:
    """Render the widget for one week, applying an optional action first."""

    command: Command | None = None
    if action:
        try:
            command = Command(Action(action), team)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Onbekende actie '{action}'.")
        if command.action is Action.TOGGLE_TEAM and not team:
            raise HTTPException(status_code=400, detail="Parameter 'team' ontbreekt.")

    store = CookiePreferences(request.cookies)
    nonce = create_nonce(service.settings.secret_key)
    widget = ScheduleWidget(
        lambda: service.handle_games_request(nonce),
        store,
        club_name=service.settings.club_display_name,
    )
    widget.load()
    widget.filter_expanded = expanded
    if week is not None:
        widget.navigator.show(week)

    view = widget.dispatch(command) if command else widget.render()
    html = generate_widget_html(view, show_weeks=show_weeks, theme=theme, base_url=request.url.path)

    response = HTMLResponse(html)
    for key, value in store.changed.items():
        response.set_cookie(key, quote(value, safe=""), max_age=PREFERENCE_MAX_AGE, samesite="lax")
    return response


@app.get("/calendar.ics")
def get_calendar(service: ScheduleService = Depends(get_service)) -> Response:
    """ICS feed with the club's upcoming games."""

    try:
        schedule = service.get_weekly_schedule()
    except FetchError:
        raise HTTPException(status_code=502, detail="Wedstrijden konden niet opgehaald worden.")

    cal = create_schedule_calendar(schedule, service.settings.club_display_name)
    return Response(content=cal.to_ical(), media_type="text/calendar; charset=utf-8")
