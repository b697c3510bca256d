"""Runtime settings, read from the environment."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from kbbco_games import TeamInfo
from kbbco_games.teams import TEAM_MAPPING

DEFAULT_API_URL = (
    "https://vblcb.wisseq.eu/VBLCB_WebService/data/OrgMatchesByGuid?issguid=BVBL1075"
)
DEFAULT_CLUB_NAME = "Oostkamp"
CACHE_KEY = "kbbco_games_data"
CACHE_TTL_SECONDS = 15 * 60


@dataclass(slots=True)
class Settings:
    """Everything the service and the widget need to know about the club."""

    api_url: str = DEFAULT_API_URL
    club_name: str = DEFAULT_CLUB_NAME
    club_display_name: str = "KBBC Oostkamp"
    secret_key: str = "change-me"
    cache_dir: Path | None = None
    fetch_timeout: float = 15.0
    cache_ttl: int = CACHE_TTL_SECONDS
    site_url: str = "https://kbbco.be"
    team_mapping: Mapping[str, TeamInfo] = field(default_factory=lambda: dict(TEAM_MAPPING))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        settings = cls()

        settings.api_url = env.get("KBBCO_API_URL", "").strip() or settings.api_url
        settings.club_name = env.get("KBBCO_CLUB_NAME", "").strip() or settings.club_name
        settings.secret_key = env.get("KBBCO_SECRET_KEY", "").strip() or settings.secret_key

        cache_dir = env.get("KBBCO_CACHE_DIR", "").strip()
        if cache_dir:
            settings.cache_dir = Path(cache_dir)

        timeout = env.get("KBBCO_FETCH_TIMEOUT", "").strip()
        if timeout:
            try:
                settings.fetch_timeout = float(timeout)
            except ValueError:
                raise ValueError(f"KBBCO_FETCH_TIMEOUT must be a number, got {timeout!r}") from None

        teams_file = env.get("KBBCO_TEAMS_FILE", "").strip()
        if teams_file:
            settings.team_mapping = load_team_mapping(Path(teams_file))

        return settings


def load_team_mapping(path: Path) -> dict[str, TeamInfo]:
    """Load a team mapping from JSON.

    The file holds ``{"teams": {"HSE A": {"display": ..., "link": ..., "color": ...}}}``;
    keys keep their file order, which decides which level wins.
    """
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    teams = data.get("teams") if isinstance(data, Mapping) else None
    if not isinstance(teams, Mapping):
        raise ValueError(f"{path}: expected a 'teams' mapping at the root")
    return {
        level: TeamInfo(
            display=str(info["display"]),
            link=str(info.get("link", "#")),
            color=str(info.get("color", "#95a5a6")),
        )
        for level, info in teams.items()
    }
