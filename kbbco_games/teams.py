"""Team levels of KBBC Oostkamp and how raw team names map onto them."""

from __future__ import annotations

from collections.abc import Mapping

from kbbco_games import UNKNOWN_TEAM, TeamInfo

# Keyed by the level token found in the federation's team name. Order matters:
# the first key contained in a name wins.
TEAM_MAPPING: dict[str, TeamInfo] = {
    "J18 B": TeamInfo("U18 B", "ploegen/u18-kadetten/b", "#e74c3c"),
    "J18 A": TeamInfo("U18 A", "ploegen/u18-kadetten/a", "#e74c3c"),
    "G12 A": TeamInfo("U12 A", "ploegen/u12-benjamins/a", "#3498db"),
    "G12 B": TeamInfo("U12 B", "ploegen/u12-benjamins/b", "#3498db"),
    "G12 C": TeamInfo("U12 C", "ploegen/u12-benjamins/c", "#3498db"),
    "J16 A": TeamInfo("U16 A", "ploegen/u16-miniemen/a", "#f39c12"),
    "J16 B": TeamInfo("U16 B", "ploegen/u16-miniemen/b", "#f39c12"),
    "J21 A": TeamInfo("U21 A", "ploegen/u21-junioren/a", "#9b59b6"),
    "J21 B": TeamInfo("U21 B", "ploegen/u21-junioren/b", "#9b59b6"),
    "G14 A": TeamInfo("G14 A", "ploegen/u14-pupillen/a", "#2ecc71"),
    "G14 B": TeamInfo("G14 B", "ploegen/u14-pupillen/b", "#2ecc71"),
    "G10 A": TeamInfo("U10 A", "ploegen/u10-microben/a", "#1abc9c"),
    "G10 B": TeamInfo("U10 B", "ploegen/u10-microben/b", "#1abc9c"),
    "G10 C": TeamInfo("U10 C", "ploegen/u10-microben/c", "#1abc9c"),
    "G10 D": TeamInfo("U10 D", "ploegen/u10-microben/d", "#1abc9c"),
    "G08 A": TeamInfo("G08 A", "ploegen/u8-premicroben/a", "#34495e"),
    "G08 B": TeamInfo("G08 B", "ploegen/u8-premicroben/b", "#34495e"),
    "HSE A": TeamInfo("ONE", "ploegen/seniors/one", "#c0392b"),
    "HSE B": TeamInfo("TWO", "ploegen/seniors/two", "#c0392b"),
    "HSE C": TeamInfo("THREE", "ploegen/seniors/three", "#c0392b"),
}

SENIOR_TOKENS = ("ONE", "TWO", "THREE")


def resolve_team_info(team_name: str, mapping: Mapping[str, TeamInfo] = TEAM_MAPPING) -> TeamInfo:
    """Find the TeamInfo whose level token appears in ``team_name``."""
    for level, info in mapping.items():
        if level in team_name:
            return TeamInfo(info.display, info.link, info.color, original_level=level)
    return UNKNOWN_TEAM


def is_senior(display: str) -> bool:
    return any(token in display for token in SENIOR_TOKENS)


def team_level_class(display: str) -> str:
    """CSS class for a team's age group, e.g. ``u18`` or ``seniors``."""
    if not display:
        return "seniors"
    name = display.lower()
    if any(token.lower() in name for token in SENIOR_TOKENS):
        return "seniors"
    for age in ("21", "18", "16", "14", "12", "10", "8"):
        if age in name:
            return f"u{age}"
    return "seniors"
