"""Cached access to the weekly schedule and the JSON data endpoint."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from kbbco_games import WeeklySchedule, schedule_from_dict, schedule_to_dict
from kbbco_games.config import CACHE_KEY, Settings
from kbbco_games.fetcher import FetchError, fetch_games_data
from kbbco_games.logging_config import get_logger
from kbbco_games.normalizer import build_weekly_schedule
from kbbco_games.security import verify_nonce

logger = get_logger(__name__)


class Cache(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...


class ScheduleService:
    """Fetch, normalize and cache the club's schedule.

    Concurrent cache misses each fetch on their own; the last one to finish
    overwrites the cached schedule.
    """

    def __init__(
        self,
        settings: Settings,
        cache: Cache,
        fetch: Callable[..., list[dict]] = fetch_games_data,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self._fetch = fetch

    def get_schedule_data(self) -> dict[str, list[dict]]:
        """The schedule in its JSON form, from cache when possible."""
        cached = self.cache.get(CACHE_KEY)
        if cached is not None:
            logger.debug("Serving schedule from cache")
            return cached

        raw_matches = self._fetch(self.settings.api_url, timeout=self.settings.fetch_timeout)
        schedule = build_weekly_schedule(
            raw_matches, self.settings.team_mapping, self.settings.club_name
        )
        data = schedule_to_dict(schedule)
        self.cache.set(CACHE_KEY, data, self.settings.cache_ttl)
        logger.info(
            "Fetched %d match(es) across %d week(s)",
            sum(len(games) for games in schedule.values()),
            len(schedule),
        )
        return data

    def get_weekly_schedule(self) -> WeeklySchedule:
        return schedule_from_dict(self.get_schedule_data())

    def handle_games_request(self, nonce: str) -> dict:
        """Response body for the games data action."""
        if not verify_nonce(nonce, self.settings.secret_key):
            logger.warning("Rejected games request with an invalid nonce")
            return {"success": False, "error": "Invalid security token"}
        try:
            data = self.get_schedule_data()
        except FetchError:
            return {"success": False, "error": "Unable to fetch games data"}
        except (OSError, ValueError, TypeError):
            logger.exception("Failed to load games data")
            return {"success": False, "error": "Unable to load games data"}
        return {"success": True, "data": data}

    def invalidate(self) -> None:
        """Drop the cached schedule so the next request refetches."""
        self.cache.delete(CACHE_KEY)
