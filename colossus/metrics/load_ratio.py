"""
Load ratio — frequency-normalised Acute:Chronic Workload Ratio (ACWR).

The classic ACWR divides the acute (7-day) load by the chronic (28-day)
*daily* average × 7, which silently assumes the athlete trains every
day.  Climbers typically train two to four times a week, so here the
expected weekly load is built from the **per-session** chronic average
and the climber's actual frequency::

    frequency       = chronic_sessions / 28 × 7          (sessions/week)
    expected_weekly = chronic_load / chronic_sessions × frequency
    ratio           = acute_load / max(expected_weekly, 50)

The floor of 50 keeps very light histories from producing huge ratios
out of near-zero denominators.

Status labels are operational categories, not injury predictions:

- ``low``       — ratio < 0.8
- ``optimal``   — 0.8 <= ratio <= 1.3
- ``elevated``  — 1.3 < ratio <= 1.5
- ``high``      — ratio > 1.5

The ratio is hidden (``None``) until 5 sessions have been logged, and
reported as ``insufficient`` when none of them falls inside the chronic
window.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Iterable, Optional, Self

from pydantic import BaseModel, Field, model_validator

from colossus.metrics.history import as_of_millis, coerce_sessions, sessions_in_window, timed_sessions
from colossus.metrics.session_load import calculate_session_load
from colossus.schemas.load_ratio import LoadRatio

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================


class LoadRatioConfig(BaseModel):
    """Configuration for the load-ratio computation."""

    acute_days: int = Field(7, ge=3, le=14)
    chronic_days: int = Field(28, ge=14, le=56)
    min_sessions: int = Field(5, ge=1)
    high_confidence_sessions: int = Field(7, ge=1)
    expected_load_floor: float = Field(50.0, gt=0)

    @model_validator(mode="after")
    def validate_windows(self) -> Self:
        if self.chronic_days <= self.acute_days:
            raise ValueError(
                f"chronic_days ({self.chronic_days}) must be longer than "
                f"acute_days ({self.acute_days})"
            )
        return self


DEFAULT_LOAD_RATIO_CONFIG = LoadRatioConfig()

# ======================================================================
# Status labelling
# ======================================================================

# (label, upper bound inclusive), checked top-down; "low" is exclusive.
_THRESHOLDS: list[tuple[str, float]] = [("optimal", 1.3), ("elevated", 1.5)]
_LOW_BELOW = 0.8

_MESSAGES: dict[str, str] = {
    "insufficient": "Need more recent training history for load tracking.",
    "low": "Training load is low.",
    "optimal": "Training load is optimal.",
    "elevated": "Training load is elevated.",
    "high": "Training load is high.",
}


def label_load_ratio(ratio: float) -> str:
    """Map a ratio to its status label."""
    if ratio < _LOW_BELOW:
        return "low"
    for label, upper in _THRESHOLDS:
        if ratio <= upper:
            return label
    return "high"


# ======================================================================
# Main entry point
# ======================================================================


def calculate_load_ratio(sessions: Optional[Iterable[Any]], as_of: Optional[datetime.datetime] = None,
                         config: Optional[LoadRatioConfig] = None, ) -> Optional[LoadRatio]:
    """Compute the frequency-normalised ACWR.

    Args:
        sessions: Session history, any order.
        as_of: Reference time (defaults to now, UTC).
        config: Optional :class:`LoadRatioConfig` override.

    Returns:
        :class:`LoadRatio`, or ``None`` while fewer than
        ``config.min_sessions`` sessions exist.
    """
    cfg = config or DEFAULT_LOAD_RATIO_CONFIG
    history = coerce_sessions(sessions)
    total = len(history)

    if total < cfg.min_sessions:
        logger.debug("Load ratio hidden: %d sessions logged", total)
        return None

    confidence = "high" if total >= cfg.high_confidence_sessions else "establishing"
    now_ms = as_of_millis(as_of)
    timed = timed_sessions(history, now_ms)
    chronic = sessions_in_window(timed, now_ms, cfg.chronic_days)

    if not chronic:
        logger.debug("Load ratio insufficient: no session in the last %d days", cfg.chronic_days)
        return LoadRatio(ratio=None, status="insufficient", message=_MESSAGES["insufficient"], frequency=0.0,
                         confidence=confidence, )

    acute_load = sum(calculate_session_load(s) for s in sessions_in_window(timed, now_ms, cfg.acute_days))
    chronic_load = sum(calculate_session_load(s) for s in chronic)

    frequency = len(chronic) / cfg.chronic_days * cfg.acute_days
    expected_weekly = chronic_load / len(chronic) * frequency
    adjusted_expected = max(expected_weekly, cfg.expected_load_floor)

    ratio = round(acute_load / adjusted_expected, 2)
    status = label_load_ratio(ratio)

    return LoadRatio(ratio=ratio, status=status, message=_MESSAGES[status], frequency=round(frequency, 2),
                     confidence=confidence, acute_load=round(acute_load, 4), chronic_load=round(chronic_load, 4),
                     expected_weekly_load=round(adjusted_expected, 4), chronic_session_count=len(chronic), )
