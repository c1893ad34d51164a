"""
Personal baseline estimation.

The baseline answers "what does a normal session look like for this
climber?".  Three sources are tried in strict priority order, and the
first one that applies wins:

1. **History** — at least 3 logged sessions containing climbs.  The 10
   most recent such sessions are averaged.
2. **Profile** — the onboarding flash grade and typical volume.  Stated
   volume is discounted and effort is pinned to a
   flat RPE 7 regardless of grade.
3. **Defaults** — a conservative recreational session.

Profile-based load scales with grade more gently than real session load
(``1 + ordinal × 0.08`` instead of ``ordinal + 1``).
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from colossus.metrics.history import clamp, coerce_profile, coerce_sessions, most_recent_orderable, round_half_up
from colossus.metrics.session_load import calculate_session_load
from colossus.schemas.baseline import Baseline
from colossus.schemas.climb import Session, UserProfile

logger = logging.getLogger(__name__)

# ======================================================================
# Constants
# ======================================================================

HISTORY_MIN_SESSIONS = 3
HISTORY_HIGH_CONFIDENCE_SESSIONS = 5
HISTORY_MAX_SESSIONS = 10

# (minimum stated volume, multiplier), checked top-down.
PROFILE_VOLUME_TIERS: list[tuple[int, float]] = [(25, 0.90), (20, 0.88), (15, 0.85), (0, 0.80)]
PROFILE_VOLUME_MIN = 6
PROFILE_VOLUME_MAX = 25
PROFILE_RPE = 7.0
PROFILE_GRADE_SCALING = 0.08

DEFAULT_BASELINE = Baseline(avg_session_load=120.0, avg_volume=12.0, avg_rpe=6.5, confidence="none",
                            source="default", session_count=0, )


# ======================================================================
# Sources
# ======================================================================


def _round_to_half(value: float) -> float:
    return round_half_up(value * 2) / 2


def _history_baseline(sessions: list[Session]) -> Optional[Baseline]:
    qualifying = [s for s in most_recent_orderable(sessions) if s.climbs][:HISTORY_MAX_SESSIONS]
    if len(qualifying) < HISTORY_MIN_SESSIONS:
        return None

    count = len(qualifying)
    avg_load = sum(calculate_session_load(s) for s in qualifying) / count
    avg_volume = sum(s.climb_count for s in qualifying) / count
    avg_rpe = sum(s.avg_rpe for s in qualifying) / count

    return Baseline(avg_session_load=avg_load, avg_volume=avg_volume, avg_rpe=_round_to_half(avg_rpe),
                    confidence="high" if count >= HISTORY_HIGH_CONFIDENCE_SESSIONS else "medium",
                    source="sessions", session_count=count, )


def profile_volume_multiplier(typical_volume: int) -> float:
    for minimum, multiplier in PROFILE_VOLUME_TIERS:
        if typical_volume >= minimum:
            return multiplier
    return PROFILE_VOLUME_TIERS[-1][1]


def _profile_baseline(profile: Optional[UserProfile]) -> Optional[Baseline]:
    if profile is None or not profile.is_complete:
        return None

    stated = profile.typical_volume
    volume = clamp(round_half_up(stated * profile_volume_multiplier(stated)), PROFILE_VOLUME_MIN,
                   PROFILE_VOLUME_MAX)
    load = volume * PROFILE_RPE * (1 + profile.flash_grade * PROFILE_GRADE_SCALING)

    return Baseline(avg_session_load=load, avg_volume=float(volume), avg_rpe=PROFILE_RPE, confidence="profile-based",
                    source="onboarding", session_count=0, )


# ======================================================================
# Main entry point
# ======================================================================


def calculate_personal_baseline(sessions: Optional[Iterable[Any]], profile: Any = None, ) -> Baseline:
    """Estimate the climber's typical session.

    Args:
        sessions: Session history, any order.
        profile: Optional :class:`UserProfile` (or dict with
            ``flashGrade`` / ``typicalVolume``).

    Returns:
        :class:`Baseline` from history, profile, or defaults — in that
        order of preference.
    """
    history = _history_baseline(coerce_sessions(sessions))
    if history is not None:
        return history

    from_profile = _profile_baseline(coerce_profile(profile))
    if from_profile is not None:
        logger.debug("Baseline from onboarding profile (volume=%s)", from_profile.avg_volume)
        return from_profile

    logger.debug("Baseline falling back to defaults")
    return DEFAULT_BASELINE.model_copy()
