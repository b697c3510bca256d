"""ISO week arithmetic and Dutch date labels.

Week numbers follow ISO 8601 everywhere: weeks start on Monday and week 1 is
the week holding the year's first Thursday (equivalently, January 4th). The
current week and the Monday of a week are both derived from that rule so the
navigator and the title never disagree around New Year.
"""

from __future__ import annotations

from datetime import date, timedelta

DUTCH_MONTHS = (
    "januari", "februari", "maart", "april", "mei", "juni",
    "juli", "augustus", "september", "oktober", "november", "december",
)

DUTCH_DAYS = (
    "Maandag", "Dinsdag", "Woensdag", "Donderdag", "Vrijdag", "Zaterdag", "Zondag",
)

THIS_WEEK_TITLE = "Wedstrijden voor deze week"


def iso_week_of(day: date) -> int:
    """ISO 8601 week number of ``day``."""
    thursday = day + timedelta(days=3 - day.weekday())
    first_thursday = _first_thursday(thursday.year)
    return (thursday - first_thursday).days // 7 + 1


def monday_of_iso_week(week: int, year: int) -> date:
    """Monday of ISO week ``week`` in ``year``."""
    monday_of_week1 = _first_thursday(year) - timedelta(days=3)
    return monday_of_week1 + timedelta(weeks=week - 1)


def _first_thursday(year: int) -> date:
    jan4 = date(year, 1, 4)
    return jan4 + timedelta(days=3 - jan4.weekday())


def current_week(today: date | None = None) -> int:
    return iso_week_of(today or date.today())


def year_for_week(week: int, today: date) -> int:
    """Pick the ISO year in which ``week`` lies closest to ``today``.

    A season runs from September to May, so week 10 seen in October is next
    year's week 10 and week 40 seen in February is last year's.
    """
    iso_year, this_week, _ = today.isocalendar()
    if week - this_week > 26:
        return iso_year - 1
    if this_week - week > 26:
        return iso_year + 1
    return iso_year


def format_dutch_date(day: date) -> str:
    """``Zaterdag 14 september``"""
    return f"{DUTCH_DAYS[day.weekday()]} {day.day} {DUTCH_MONTHS[day.month - 1]}"


def format_week_span(monday: date) -> str:
    sunday = monday + timedelta(days=6)
    start_month = DUTCH_MONTHS[monday.month - 1]
    end_month = DUTCH_MONTHS[sunday.month - 1]

    if monday.year != sunday.year:
        return (
            f"Van maandag {monday.day} {start_month} {monday.year} "
            f"tem zondag {sunday.day} {end_month} {sunday.year}"
        )
    if monday.month != sunday.month:
        return f"Van maandag {monday.day} {start_month} tem zondag {sunday.day} {end_month}"
    return f"Van maandag {monday.day} tem zondag {sunday.day} {end_month}"


def format_week_title(display_week: int, this_week: int, today: date | None = None) -> str:
    """Title above the games of ``display_week``.

    Falls back to a bare ``Week N`` label when the week cannot be turned into
    dates.
    """
    if display_week == this_week:
        return THIS_WEEK_TITLE
    today = today or date.today()
    try:
        monday = monday_of_iso_week(display_week, year_for_week(display_week, today))
        return format_week_span(monday)
    except (ValueError, OverflowError):
        return f"Week {display_week}"
