"""Add-to-calendar links and ICS export for upcoming games."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from urllib.parse import quote
from zoneinfo import ZoneInfo

from icalendar import Alarm, Calendar, Event

from kbbco_games import DisplayMatch, WeeklySchedule
from kbbco_games.cache import validate_ics
from kbbco_games.weeks import DUTCH_MONTHS

LOCAL_TZ = ZoneInfo("Europe/Brussels")
GAME_DURATION = timedelta(hours=2)
HOME_VENUE = "Sporthal KBBCO, Oostkamp"
PRODID = "KBBCO Games"

_DATE_RE = re.compile(r"(\d{1,2}) (\w+)")
_TIME_RE = re.compile(r"(\d{1,2})\.(\d{2})")


@dataclass(frozen=True)
class CalendarLinks:
    google: str
    outlook: str
    ical: str


def parse_match_start(date_text: str, time_text: str, year: int) -> datetime | None:
    """Local start of a game from ``"Zaterdag 14 september"`` and ``"20.30"``."""
    date_parts = _DATE_RE.search(date_text)
    time_parts = _TIME_RE.search(time_text)
    if not date_parts or not time_parts:
        return None

    month_name = date_parts.group(2).lower()
    if month_name not in DUTCH_MONTHS:
        return None

    try:
        return datetime(
            year,
            DUTCH_MONTHS.index(month_name) + 1,
            int(date_parts.group(1)),
            int(time_parts.group(1)),
            int(time_parts.group(2)),
            tzinfo=LOCAL_TZ,
        )
    except ValueError:
        return None


def _format_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _encode(text: str) -> str:
    return quote(text, safe="-_.!~*'()")


def _event_details(match: DisplayMatch, club_name: str) -> tuple[str, str, str]:
    home = club_name if match.is_home else match.opponent
    away = match.opponent if match.is_home else club_name
    title = f"{home} vs {away}"
    details = f"KBBCO {match.team_info.display} team"
    location = HOME_VENUE if match.is_home else ""
    return title, details, location


def generate_calendar_links(
    match: DisplayMatch,
    club_name: str = "KBBCO Oostkamp",
    now: datetime | None = None,
) -> CalendarLinks | None:
    """Google, Outlook and ICS links for an unplayed game.

    Played games and games whose date or time cannot be read get None. The
    year is assumed to be the current one.
    """
    if match.has_result or not match.date or not match.time:
        return None

    now = now or datetime.now(timezone.utc)
    start = parse_match_start(match.date, match.time, now.year)
    if start is None:
        return None
    end = start + GAME_DURATION

    start_utc, end_utc = _format_utc(start), _format_utc(end)
    title, details, location = _event_details(match, club_name)

    google = (
        "https://calendar.google.com/calendar/render?action=TEMPLATE"
        f"&text={_encode(title)}&dates={start_utc}/{end_utc}"
        f"&details={_encode(details)}&location={_encode(location)}"
    )
    outlook = (
        "https://outlook.live.com/calendar/0/deeplink/compose"
        f"?subject={_encode(title)}&startdt={start_utc}&enddt={end_utc}"
        f"&body={_encode(details)}&location={_encode(location)}"
    )

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    event = Event()
    compact_date = "".join(match.date.split())
    uid = f"kbbco-{compact_date}-{match.time.replace('.', '')}-{int(now.timestamp() * 1000)}"
    event.add("uid", uid)
    event.add("dtstart", start.astimezone(timezone.utc))
    event.add("dtend", end.astimezone(timezone.utc))
    event.add("summary", title)
    event.add("description", details)
    event.add("location", location)
    cal.add_component(event)

    ics_bytes = cal.to_ical()
    if not validate_ics(ics_bytes):
        return None
    ical = "data:text/calendar;charset=utf8," + _encode(ics_bytes.decode("utf-8"))

    return CalendarLinks(google=google, outlook=outlook, ical=ical)


def create_schedule_calendar(
    schedule: WeeklySchedule,
    club_name: str = "KBBCO Oostkamp",
    now: datetime | None = None,
) -> Calendar:
    """ICS feed with every unplayed game of the schedule."""
    now = now or datetime.now(timezone.utc)

    cal = Calendar()
    cal.add("prodid", "-//KBBCO Games//kbbco.be//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"{club_name} wedstrijden")
    cal.add("x-wr-timezone", "Europe/Brussels")
    # Refresh interval hint for calendar clients (4 hours)
    cal.add("x-published-ttl", "PT4H")

    for week in sorted(schedule):
        for match in schedule[week]:
            if match.has_result:
                continue
            start = parse_match_start(match.date, match.time, now.year)
            if start is None:
                continue
            cal.add_component(_create_event(match, start, club_name))

    return cal


def _create_event(match: DisplayMatch, start: datetime, club_name: str) -> Event:
    title, details, location = _event_details(match, club_name)

    event = Event()
    event.add("summary", title)
    event.add("dtstart", start.astimezone(timezone.utc))
    event.add("dtend", (start + GAME_DURATION).astimezone(timezone.utc))
    description = details
    if match.competition:
        description += f"\n\nCompetitie: {match.competition}"
    event.add("description", description)
    if location:
        event.add("location", location)

    # Stable UID: start time + team level + opponent
    uid = (
        f"kbbco-{start.strftime('%Y%m%d%H%M')}-"
        f"{match.team_info.display.replace(' ', '-').lower()}-"
        f"{(match.opponent_guid or match.opponent).replace(' ', '-').lower()}"
        f"@kbbco.be"
    )
    event.add("uid", uid)

    alarm = Alarm()
    alarm.add("action", "DISPLAY")
    alarm.add("description", f"{title} begint binnen 30 minuten!")
    alarm.add("trigger", timedelta(minutes=-30))
    event.add_component(alarm)

    event.add("status", "CONFIRMED")
    return event
