"""Anti-forgery tokens for the games data endpoint.

A nonce is an HMAC over the action name and a 12-hour tick. It is accepted
during the tick it was issued in and the one after, so a page stays usable for
12 to 24 hours.
"""

from __future__ import annotations

import hashlib
import hmac
import time

NONCE_ACTION = "kbbco_games_nonce"
NONCE_LIFETIME = 24 * 60 * 60


def _tick(now: float) -> int:
    return int(now // (NONCE_LIFETIME / 2))


def _sign(secret: str, action: str, tick: int) -> str:
    message = f"{action}|{tick}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()[:20]


def create_nonce(secret: str, action: str = NONCE_ACTION, now: float | None = None) -> str:
    return _sign(secret, action, _tick(time.time() if now is None else now))


def verify_nonce(
    nonce: str,
    secret: str,
    action: str = NONCE_ACTION,
    now: float | None = None,
) -> bool:
    if not nonce:
        return False
    tick = _tick(time.time() if now is None else now)
    return any(
        hmac.compare_digest(nonce, _sign(secret, action, t))
        for t in (tick, tick - 1)
    )
