"""Short-lived caches for the normalized schedule."""

from __future__ import annotations

import json
import re
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from kbbco_games.logging_config import get_logger

logger = get_logger(__name__)


class MemoryCache:
    """Process-local key/value cache with per-entry expiry."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = (self._clock() + ttl_seconds, value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)


class FileCache:
    """JSON file per key in ``cache_dir``, shared between worker processes."""

    def __init__(self, cache_dir: Path, clock: Callable[[], float] = time.time) -> None:
        self.cache_dir = cache_dir
        self._clock = clock

    def _path(self, key: str) -> Path:
        safe_key = re.sub(r"[^a-z0-9_-]", "_", key.lower())
        return self.cache_dir / f"{safe_key}.json"

    def get(self, key: str) -> Any | None:
        cache_file = self._path(key)
        if not cache_file.exists():
            return None
        try:
            entry = json.loads(cache_file.read_text(encoding="utf-8"))
            expires_at = float(entry["expires_at"])
            value = entry["value"]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", cache_file, e)
            return None
        if self._clock() >= expires_at:
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        entry = {"expires_at": self._clock() + ttl_seconds, "value": value}
        cache_file = self._path(key)
        tmp_file = cache_file.with_suffix(".tmp")
        tmp_file.write_text(json.dumps(entry, ensure_ascii=False), encoding="utf-8")
        tmp_file.replace(cache_file)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def validate_ics(data: bytes) -> bool:
    """Basic validation that ICS data is well-formed."""
    text = data.decode("utf-8", errors="replace")
    return text.startswith("BEGIN:VCALENDAR") and "END:VCALENDAR" in text
