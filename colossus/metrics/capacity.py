"""
Capacity recommendations — readiness + load ratio + baseline → caps.

The engine does NOT prescribe specific problems.  It answers:

- How many climbs?   (``volume_cap``)
- How hard?          (``rpe_cap``)
- What kind of work? (``focus`` / ``style``)

Decision order
--------------
1. **No readiness, no profile** — generic safe defaults.
2. **No readiness, profile-based baseline** — 86-94 % of the discounted
   stated volume.  The effort cap is a flat ``≤7`` for every grade tier;
   only the wording varies with the flash grade.
3. **Readiness available** — the score band sets a capacity multiplier
   and an effort ceiling::

       score   multiplier   rpe ceiling
       >= 88   1.30         9
       >= 75   1.15         8
       >= 60   1.00         7
       >= 45   0.80         6
       <  45   0.60         5

   A load ratio above 1.3 (overreaching) multiplies capacity by a
   further 0.8.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

from colossus.metrics.history import coerce_profile, round_half_up
from colossus.schemas.baseline import Baseline
from colossus.schemas.load_ratio import LoadRatio
from colossus.schemas.readiness import ReadinessScore
from colossus.schemas.recommendation import Recommendation

logger = logging.getLogger(__name__)

# ======================================================================
# Bands
# ======================================================================


class CapacityBand(NamedTuple):
    min_score: int
    multiplier: float
    rpe_ceiling: int
    focus: str
    style: str


_CAPACITY_BANDS: list[CapacityBand] = [
    CapacityBand(88, 1.30, 9, "Maximum intensity projects", "power"),
    CapacityBand(75, 1.15, 8, "High intensity training", "power"),
    CapacityBand(60, 1.00, 7, "Balanced volume and intensity", "endurance"),
    CapacityBand(45, 0.80, 6, "Technique with light volume", "technical"),
    CapacityBand(0, 0.60, 5, "Recovery and movement quality", "technical"),
]

OVERREACHING_RATIO = 1.3
OVERREACHING_FACTOR = 0.8

PROFILE_VOLUME_RANGE = (0.86, 0.94)
SAFE_RPE_CAP = "≤7"

# (max flash ordinal, tier, focus, style), checked top-down.
_GRADE_TIERS: list[tuple[int, str, str, str]] = [
    (3, "beginner", "Movement fundamentals and technique", "technical"),
    (6, "intermediate", "Mixed volume at moderate intensity", "mixed"),
    (15, "advanced", "Controlled intensity while your baseline calibrates", "power"),
]


def capacity_band(score: int) -> CapacityBand:
    for band in _CAPACITY_BANDS:
        if score >= band.min_score:
            return band
    return _CAPACITY_BANDS[-1]


def grade_tier(flash_grade: Optional[int]) -> tuple[str, str, str]:
    """``(tier, focus, style)`` for a flash grade ordinal."""
    grade = flash_grade or 0
    for max_grade, tier, focus, style in _GRADE_TIERS:
        if grade <= max_grade:
            return tier, focus, style
    _, tier, focus, style = _GRADE_TIERS[-1]
    return tier, focus, style


# ======================================================================
# Rendering
# ======================================================================


def format_volume_range(low: int, high: int) -> str:
    return f"{low}" if low == high else f"{low}-{high}"


def format_rpe_cap(ceiling: int) -> str:
    """``≤n`` for easy ceilings, a tight ``n-1-n`` range above 6."""
    return f"≤{ceiling}" if ceiling <= 6 else f"{ceiling - 1}-{ceiling}"


# ======================================================================
# Branches
# ======================================================================


def _default_recommendation() -> Recommendation:
    return Recommendation(type="Start Easy", volume_cap="8-12", rpe_cap=SAFE_RPE_CAP,
                          focus="Build your baseline safely", style="mixed", )


def _profile_recommendation(baseline: Baseline, profile: Any) -> Recommendation:
    low = round_half_up(baseline.avg_volume * PROFILE_VOLUME_RANGE[0])
    high = round_half_up(baseline.avg_volume * PROFILE_VOLUME_RANGE[1])
    user_profile = coerce_profile(profile)
    tier, focus, style = grade_tier(user_profile.flash_grade if user_profile else None)
    logger.debug("Profile-based recommendation for %s tier", tier)

    return Recommendation(type="Calibration Session", volume_cap=format_volume_range(low, high), rpe_cap=SAFE_RPE_CAP,
                          focus=focus, style=style, note="Based on your profile until sessions are logged",
                          baseline_load=round(baseline.avg_session_load, 1), )


def _readiness_recommendation(readiness: ReadinessScore, load_ratio: Optional[LoadRatio],
                              baseline: Baseline, ) -> Recommendation:
    band = capacity_band(readiness.score)
    multiplier = band.multiplier
    note = None

    if load_ratio is not None and load_ratio.ratio is not None and load_ratio.ratio > OVERREACHING_RATIO:
        multiplier *= OVERREACHING_FACTOR
        note = "Load elevated - reduced volume recommended"

    volume_cap = max(1, round_half_up(baseline.avg_volume * multiplier))
    max_volume = min(volume_cap + 3, round_half_up(volume_cap * 1.2))

    return Recommendation(type=band.focus, volume_cap=format_volume_range(volume_cap, max_volume),
                          rpe_cap=format_rpe_cap(band.rpe_ceiling), focus=band.focus, style=band.style, note=note,
                          baseline_load=round(baseline.avg_session_load, 1),
                          target_load=round(baseline.avg_session_load * multiplier, 1), )


# ======================================================================
# Main entry point
# ======================================================================


def get_capacity_recommendation(readiness: Optional[ReadinessScore], load_ratio: Optional[LoadRatio],
                                baseline: Baseline, profile: Any = None, ) -> Recommendation:
    """Turn the current state into volume / effort caps.

    Args:
        readiness: CRS result (``None`` while insufficient).
        load_ratio: ACWR result (``None`` while hidden).
        baseline: Personal baseline the caps are scaled from.
        profile: Optional onboarding profile, used only for the wording
            of profile-based recommendations.

    Returns:
        :class:`Recommendation`.
    """
    if readiness is None:
        if baseline.source == "onboarding":
            return _profile_recommendation(baseline, profile)
        return _default_recommendation()
    return _readiness_recommendation(readiness, load_ratio, baseline)
