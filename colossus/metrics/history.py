"""
Session-history helpers shared by the metrics.

Every metric receives the raw history the logging layer hands over: an
unordered iterable of :class:`~colossus.schemas.climb.Session` records
(or plain dicts in the logging layer's shape).  The helpers here
validate that input once, order it, and select time windows relative to
an explicit reference time, so that the metric modules stay pure
functions of ``(sessions, as_of)``.

The input collection is never mutated; every helper returns a new list.
"""

from __future__ import annotations

import datetime
import math
from typing import Any, Iterable, Optional

from colossus.schemas.climb import Session, UserProfile

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


# ======================================================================
# Input coercion
# ======================================================================


def coerce_sessions(sessions: Optional[Iterable[Any]]) -> list[Session]:
    """Validate *sessions* into a list of :class:`Session`.

    Accepts ``Session`` instances and dicts (``climbList`` /
    ``timestamp`` / ``endTime`` keys or their snake_case names).
    ``None`` entries are skipped.
    """
    if sessions is None:
        return []
    result: list[Session] = []
    for item in sessions:
        if item is None:
            continue
        result.append(item if isinstance(item, Session) else Session.model_validate(item))
    return result


def coerce_profile(profile: Any) -> Optional[UserProfile]:
    if profile is None or isinstance(profile, UserProfile):
        return profile
    return UserProfile.model_validate(profile)


def as_of_millis(as_of: Optional[datetime.datetime] = None) -> int:
    """Reference time in epoch millis (now, UTC, when *as_of* is ``None``).

    Naive datetimes are read as UTC, like session timestamps.
    """
    if as_of is None:
        as_of = datetime.datetime.now(datetime.timezone.utc)
    elif as_of.tzinfo is None:
        as_of = as_of.replace(tzinfo=datetime.timezone.utc)
    return int(as_of.timestamp() * 1000)


# ======================================================================
# Ordering and windows
# ======================================================================


def timed_sessions(sessions: list[Session], now_ms: int) -> list[Session]:
    """Sessions with a timestamp not after *now_ms*, oldest first."""
    timed = [s for s in sessions if s.timestamp is not None and s.timestamp <= now_ms]
    return sorted(timed, key=lambda s: s.timestamp)


def sessions_in_window(timed: list[Session], now_ms: int, days: int) -> list[Session]:
    """Sessions from *timed* strictly newer than ``now - days``."""
    start = now_ms - days * MS_PER_DAY
    return [s for s in timed if s.timestamp > start]


def most_recent_orderable(sessions: list[Session]) -> list[Session]:
    """Sessions that can be ordered at all, most recent first.

    Ordering uses ``timestamp`` and falls back to ``end_time``; sessions
    with neither are dropped.
    """
    orderable = [s for s in sessions if s.order_key is not None]
    return sorted(orderable, key=lambda s: s.order_key, reverse=True)


# ======================================================================
# Numeric helpers
# ======================================================================


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's :func:`round` rounds halves to even (``round(2.5) == 2``);
    scores and volume caps round ``.5`` up.
    """
    return int(math.floor(value + 0.5))
