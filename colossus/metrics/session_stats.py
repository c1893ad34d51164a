"""
Per-session summary statistics.

Grade, angle, style and effort summaries shown next to each logged
session.  XP rewards harder grades linearly and flashes with a 20 % bonus::

    xp = 10 × grade_points × (1.2 if flashed else 1.0)
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from colossus.core.grades import grade_label, grade_points
from colossus.metrics.history import coerce_sessions, round_half_up
from colossus.metrics.session_load import calculate_session_load
from colossus.schemas.climb import Climb, ClimbStyle, ClimbType
from colossus.schemas.session_stats import SessionStats

BASE_XP = 10
FLASH_XP_BONUS = 1.2


def _grade_counts(climbs: tuple[Climb, ...]) -> dict[str, int]:
    counts = Counter(c.grade for c in climbs)
    return {grade_label(ordinal): counts[ordinal] for ordinal in sorted(counts)}


def _angle_counts(climbs: tuple[Climb, ...]) -> dict[str, int]:
    """Board climbs with a known angle, shallowest first."""
    counts = Counter(c.wall_angle_degrees for c in climbs
                     if c.type is ClimbType.BOARD and c.wall_angle_degrees is not None)
    return {f"{angle}°": counts[angle] for angle in sorted(counts)}


def calculate_session_stats(session: Any) -> SessionStats:
    """Summarise one session (a :class:`Session` or its dict form)."""
    (validated,) = coerce_sessions([session])
    climbs = validated.climbs

    style_counts = {style.value: 0 for style in ClimbStyle}
    type_counts = {climb_type.value: 0 for climb_type in ClimbType}

    if not climbs:
        return SessionStats(climb_count=0, load=0.0, avg_rpe=0.0, median_grade=grade_label(0),
                            peak_grade=grade_label(0), flash_rate=0, total_xp=0, grade_counts={},
                            grade_percentages={}, angle_counts={}, style_counts=style_counts,
                            type_counts=type_counts, dominant_style="--", )

    for climb in climbs:
        style_counts[climb.style.value] += 1
        type_counts[climb.type.value] += 1

    total = len(climbs)
    grades = sorted(c.grade for c in climbs)
    grade_counts = _grade_counts(climbs)
    flashes = sum(1 for c in climbs if c.attempts == 1)
    total_xp = sum(BASE_XP * grade_points(c.grade) * (FLASH_XP_BONUS if c.attempts == 1 else 1.0) for c in climbs)
    # max() keeps the first of equal counts: power, technical, simple.
    dominant = max(style_counts, key=style_counts.get)

    return SessionStats(climb_count=total, load=calculate_session_load(validated), avg_rpe=validated.avg_rpe,
                        median_grade=grade_label(grades[total // 2]), peak_grade=grade_label(grades[-1]),
                        flash_rate=round_half_up(flashes / total * 100), total_xp=round_half_up(total_xp),
                        grade_counts=grade_counts,
                        grade_percentages={label: round_half_up(count / total * 100)
                                           for label, count in grade_counts.items()},
                        angle_counts=_angle_counts(climbs), style_counts=style_counts, type_counts=type_counts,
                        dominant_style=dominant, )
