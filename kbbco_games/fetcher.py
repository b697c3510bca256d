"""VBL web service client for the club's match list."""

from __future__ import annotations

import requests

from kbbco_games.logging_config import get_logger

USER_AGENT = "KBBCO-Games/1.0 (+https://kbbco.be)"

logger = get_logger(__name__)


class FetchError(Exception):
    """The match list could not be retrieved."""


def fetch_games_data(
    url: str,
    timeout: float = 15,
    session: requests.Session | None = None,
) -> list[dict]:
    """Fetch the raw match records for the club.

    Raises FetchError on network errors, timeouts, non-200 responses and
    bodies that are not a non-empty JSON list.
    """
    http = session or requests
    headers = {"User-Agent": USER_AGENT}

    try:
        response = http.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Games API error: %s", e)
        raise FetchError(f"Request failed: {e}") from e

    if response.status_code != 200:
        logger.error("Games API HTTP error: %s", response.status_code)
        raise FetchError(f"Unexpected HTTP status {response.status_code}")

    try:
        games = response.json()
    except ValueError as e:
        logger.error("Games API returned invalid JSON: %s", e)
        raise FetchError("Invalid JSON in response") from e

    if not games or not isinstance(games, list):
        logger.error("Games API returned an empty or invalid response")
        raise FetchError("Empty or invalid response")

    return [g for g in games if isinstance(g, dict)]
