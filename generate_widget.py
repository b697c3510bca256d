#!/usr/bin/env python3
"""
KBBCO Games static generator

Fetches the club's match list from the VBL web service and writes the
normalized weekly schedule (JSON), an ICS feed of upcoming games and an HTML
snapshot of this week's widget. Suitable for static hosting.
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from kbbco_games.cache import FileCache, validate_ics
from kbbco_games.calendar_gen import create_schedule_calendar
from kbbco_games.config import Settings
from kbbco_games.fetcher import FetchError
from kbbco_games.html_gen import generate_index_html, generate_widget_html
from kbbco_games.logging_config import setup_logging
from kbbco_games.security import create_nonce
from kbbco_games.service import ScheduleService
from kbbco_games.team_filter import MemoryPreferences
from kbbco_games.widget import ScheduleWidget


def main(output_dir: Path = Path("public")) -> int:
    setup_logging()
    settings = Settings.from_env()
    output_dir.mkdir(parents=True, exist_ok=True)
    cache = FileCache(settings.cache_dir or Path("cache"))
    service = ScheduleService(settings, cache)

    print(f"\nFetching games for {settings.club_display_name}...")
    try:
        data = service.get_schedule_data()
    except FetchError as e:
        print(f"  ERROR: Failed to fetch games: {e}")
        return 1

    game_count = sum(len(games) for games in data.values())
    print(f"  Found {game_count} games in {len(data)} weeks")

    generated_utc = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    # Weekly schedule JSON
    json_path = output_dir / "games.json"
    json_path.write_text(
        json.dumps({"data": data, "generated_utc": generated_utc}, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    print(f"  Saved {json_path}")

    # ICS feed of upcoming games
    cal = create_schedule_calendar(service.get_weekly_schedule(), settings.club_display_name)
    ics_bytes = cal.to_ical()
    if not validate_ics(ics_bytes):
        print("  ERROR: Generated ICS failed validation")
        return 1
    ics_path = output_dir / "kbbco.ics"
    ics_path.write_bytes(ics_bytes)
    print(f"  Saved {ics_path}")

    # Widget snapshot for this week
    nonce = create_nonce(settings.secret_key)
    widget = ScheduleWidget(
        lambda: service.handle_games_request(nonce),
        MemoryPreferences(),
        club_name=settings.club_display_name,
    )
    widget.load()
    html = generate_index_html(generate_widget_html(widget.render()), generated_utc)
    html_path = output_dir / "index.html"
    html_path.write_text(html, encoding="utf-8")
    print(f"  Saved {html_path}")

    print("\nDone, all files generated successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
