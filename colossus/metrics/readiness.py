"""
Climb Readiness Score (CRS) — phased readiness model.

The CRS estimates, on a 0-100 scale, how much training capacity is
available right now.  How it is computed depends on how much history
exists (``N`` = total logged sessions):

=========  ===============  ==================================================
N          Phase            Model
=========  ===============  ==================================================
< 3        insufficient     no score (``None``)
3-4        ``building``     recovery time + effort of the last session
5-6        ``calibrating``  full four-component model, medium confidence
>= 7       ``calibrated``   full four-component model, high confidence
=========  ===============  ==================================================

Full model
----------
Four components, each 0-100, combined with fixed weights::

    score = 0.35 × load_recovery
          + 0.25 × load_trend
          + 0.20 × cumulative_fatigue
          + 0.20 × volume_pattern

1. **Load recovery** — rises linearly to 100 at 48 h after the last
   session, then decays by 15 points per week of inactivity
   (detraining), never below 50.
2. **Load trend** — 7-day load against the 28-day per-session average
   × 7.  Not monotonic: both under- and over-training are penalised,
   with an optimal plateau between 0.7 and 1.3.
3. **Cumulative fatigue** — exponentially weighted average RPE of the
   last 7 sessions (weight 0.75 per session back), inverted.
4. **Volume pattern** — consistency of climb counts over the last 7
   sessions: ``100 - 2 × variance``.

Time-windowed components only see sessions with a timestamp at or
before ``as_of``.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Iterable, Optional, Self

from pydantic import BaseModel, Field, model_validator

from colossus.metrics.history import (MS_PER_HOUR, as_of_millis, clamp, coerce_sessions,
                                      round_half_up, sessions_in_window, timed_sessions, )
from colossus.metrics.session_load import calculate_session_load
from colossus.schemas.climb import Session
from colossus.schemas.readiness import ReadinessComponents, ReadinessScore

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_WEIGHTS: dict[str, float] = {
    "load_recovery": 0.35,
    "load_trend": 0.25,
    "cumulative_fatigue": 0.20,
    "volume_pattern": 0.20,
}

# (upper bound, score, upper bound inclusive), checked top-down.
_TREND_CURVE: list[tuple[float, float, bool]] = [
    (0.4, 60.0, False),
    (0.7, 85.0, False),
    (1.3, 100.0, True),  # optimal plateau
    (1.5, 70.0, True),
    (1.8, 45.0, True),
]
_TREND_OVERLOAD_SCORE = 25.0

# (minimum score, label), checked top-down.
_MESSAGE_BANDS: list[tuple[int, str]] = [
    (88, "Optimal"),
    (75, "Good"),
    (60, "Moderate"),
    (45, "Caution"),
    (30, "Limited"),
]
_LOWEST_MESSAGE = "Poor"

_NEUTRAL_RPE = 5.0


class ReadinessConfig(BaseModel):
    """Tunable parameters of the readiness model."""

    min_sessions: int = Field(3, ge=1)
    full_model_sessions: int = Field(5, ge=1)
    calibrated_sessions: int = Field(7, ge=1)

    optimal_recovery_hours: float = Field(48.0, gt=0)
    detraining_points_per_day: float = Field(15.0 / 7.0, ge=0)
    detraining_floor: float = Field(50.0, ge=0, le=100)

    acute_days: int = Field(7, ge=1, le=14)
    chronic_days: int = Field(28, ge=7, le=56)

    fatigue_window: int = Field(7, ge=1)
    fatigue_decay: float = Field(0.75, gt=0, le=1)
    pattern_window: int = Field(7, ge=3)
    pattern_min_sessions: int = Field(3, ge=2)

    weights: dict[str, float] = Field(default_factory=lambda: dict(_DEFAULT_WEIGHTS))

    @model_validator(mode="after")
    def validate_weights(self) -> Self:
        unknown = sorted(set(self.weights) - set(_DEFAULT_WEIGHTS))
        if unknown:
            raise ValueError(
                f"unknown readiness weights {unknown}; expected keys from {sorted(_DEFAULT_WEIGHTS)}"
            )
        return self


DEFAULT_READINESS_CONFIG = ReadinessConfig()


# ======================================================================
# Labelling
# ======================================================================


def readiness_message(score: float) -> str:
    """Map a CRS score to its band label."""
    for minimum, label in _MESSAGE_BANDS:
        if score >= minimum:
            return label
    return _LOWEST_MESSAGE


def _session_rpe(session: Optional[Session]) -> float:
    if session is None or session.avg_rpe is None:
        return _NEUTRAL_RPE
    return session.avg_rpe


# ======================================================================
# Components
# ======================================================================


def _hours_since(session: Session, now_ms: int) -> float:
    return max(0.0, (now_ms - session.timestamp) / MS_PER_HOUR)


def _compute_load_recovery(timed: list[Session], now_ms: int, cfg: ReadinessConfig) -> float:
    """Recovery since the last session: linear rise, then slow detraining decay."""
    if not timed:
        return 50.0

    hours = _hours_since(timed[-1], now_ms)
    if hours <= cfg.optimal_recovery_hours:
        return min(100.0, hours / cfg.optimal_recovery_hours * 100.0)

    days_over = (hours - cfg.optimal_recovery_hours) / 24.0
    return max(cfg.detraining_floor, 100.0 - days_over * cfg.detraining_points_per_day)


def _score_trend_ratio(ratio: float) -> float:
    for upper, score, inclusive in _TREND_CURVE:
        if ratio < upper or (inclusive and ratio == upper):
            return score
    return _TREND_OVERLOAD_SCORE


def _compute_load_trend(timed: list[Session], now_ms: int, cfg: ReadinessConfig) -> float:
    """Acute load against the chronic per-session average (× 7)."""
    chronic = sessions_in_window(timed, now_ms, cfg.chronic_days)
    if not chronic:
        return 75.0

    chronic_avg = sum(calculate_session_load(s) for s in chronic) / len(chronic)
    if chronic_avg <= 0:
        return 75.0

    acute_load = sum(calculate_session_load(s) for s in sessions_in_window(timed, now_ms, cfg.acute_days))
    return _score_trend_ratio(acute_load / (chronic_avg * cfg.acute_days))


def _compute_cumulative_fatigue(timed: list[Session], cfg: ReadinessConfig) -> float:
    """Inverted exponentially weighted RPE; the most recent session weighs most."""
    recent = [s for s in timed if s.climbs][-cfg.fatigue_window:]
    if not recent:
        return 50.0

    weighted_sum = 0.0
    total_weight = 0.0
    for sessions_ago, session in enumerate(reversed(recent)):
        weight = cfg.fatigue_decay ** sessions_ago
        weighted_sum += session.avg_rpe * weight
        total_weight += weight

    return clamp(100.0 - (weighted_sum / total_weight) * 10.0, 0.0, 100.0)


def _compute_volume_pattern(timed: list[Session], cfg: ReadinessConfig) -> float:
    """Consistency of session volume: ``100 - 2 × variance``."""
    volumes = [s.climb_count for s in timed if s.climbs][-cfg.pattern_window:]
    if len(volumes) < cfg.pattern_min_sessions:
        return 75.0

    mean = sum(volumes) / len(volumes)
    variance = sum((v - mean) ** 2 for v in volumes) / len(volumes)
    return max(0.0, 100.0 - variance * 2.0)


def _compute_components(timed: list[Session], now_ms: int, cfg: ReadinessConfig) -> ReadinessComponents:
    return ReadinessComponents(
        load_recovery=_compute_load_recovery(timed, now_ms, cfg),
        load_trend=_compute_load_trend(timed, now_ms, cfg),
        cumulative_fatigue=_compute_cumulative_fatigue(timed, cfg),
        volume_pattern=_compute_volume_pattern(timed, cfg),
    )


def _weighted_score(components: ReadinessComponents, weights: dict[str, float]) -> int:
    raw = sum(getattr(components, name) * weights.get(name, 0.0) for name in _DEFAULT_WEIGHTS)
    return int(clamp(round_half_up(raw), 0, 100))


# ======================================================================
# Phases
# ======================================================================


def _building_score(timed: list[Session], now_ms: int, cfg: ReadinessConfig) -> ReadinessScore:
    """Early estimate from the last session only."""
    last = timed[-1] if timed else None
    hours = _hours_since(last, now_ms) if last is not None else cfg.optimal_recovery_hours

    recovery = min(100.0, hours / cfg.optimal_recovery_hours * 60.0)
    fatigue = (10.0 - _session_rpe(last)) * 4.0
    score = int(clamp(round_half_up(recovery + fatigue), 0, 100))

    return ReadinessScore(score=score, status="building", message=readiness_message(score), confidence="low", )


def _full_score(timed: list[Session], now_ms: int, total: int, cfg: ReadinessConfig) -> ReadinessScore:
    components = _compute_components(timed, now_ms, cfg)
    score = _weighted_score(components, cfg.weights)
    calibrated = total >= cfg.calibrated_sessions

    return ReadinessScore(score=score, status="calibrated" if calibrated else "calibrating",
                          message=readiness_message(score), confidence="high" if calibrated else "medium",
                          components=components, )


# ======================================================================
# Main entry point
# ======================================================================


def calculate_readiness(sessions: Optional[Iterable[Any]], as_of: Optional[datetime.datetime] = None,
                        config: Optional[ReadinessConfig] = None, ) -> Optional[ReadinessScore]:
    """Compute the Climb Readiness Score.

    Args:
        sessions: Session history, any order.
        as_of: Reference time (defaults to now, UTC).
        config: Optional :class:`ReadinessConfig` override.

    Returns:
        :class:`ReadinessScore`, or ``None`` while fewer than
        ``config.min_sessions`` sessions exist.
    """
    cfg = config or DEFAULT_READINESS_CONFIG
    history = coerce_sessions(sessions)
    total = len(history)

    if total < cfg.min_sessions:
        logger.debug("Readiness unavailable: %d sessions logged", total)
        return None

    now_ms = as_of_millis(as_of)
    timed = timed_sessions(history, now_ms)

    if total < cfg.full_model_sessions:
        return _building_score(timed, now_ms, cfg)
    return _full_score(timed, now_ms, total, cfg)
