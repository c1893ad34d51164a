"""
Session load — one scalar training load per session.

Each climb contributes::

    climb_load = grade_points × rpe × style × attempt_factor × type × angle

    grade_points   = ordinal + 1                (V0 → 1, V5 → 6)
    style          = power 1.2 | technical 1.0 | simple 0.8
    attempt_factor = 1.15 ** (attempts - 1)     (a flash is the 1.0 floor)
    type           = board 1.1 | boulder 1.0
    angle          = board only: ≤15° 0.95 | ≤35° 1.0 | >35° 1.15

The attempt factor is exponential: every extra attempt compounds the
fatigue cost of the previous ones.

The session load is the plain sum over its climbs; an empty session
has load ``0``.
"""

from __future__ import annotations

from typing import Iterable, Union

from colossus.core.grades import grade_points
from colossus.schemas.climb import Climb, ClimbStyle, ClimbType, Session

# ======================================================================
# Multipliers
# ======================================================================

STYLE_MULTIPLIERS: dict[ClimbStyle, float] = {
    ClimbStyle.POWER: 1.2,
    ClimbStyle.TECHNICAL: 1.0,
    ClimbStyle.SIMPLE: 0.8,
}

TYPE_MULTIPLIERS: dict[ClimbType, float] = {
    ClimbType.BOARD: 1.1,
    ClimbType.BOULDER: 1.0,
}

ATTEMPT_GROWTH = 1.15

# (upper bound in degrees, multiplier); above the last bound → steep.
_ANGLE_TIERS: list[tuple[float, float]] = [(15.0, 0.95), (35.0, 1.0)]
_STEEP_ANGLE_MULTIPLIER = 1.15


def attempt_factor(attempts: int) -> float:
    return ATTEMPT_GROWTH ** (max(1, attempts) - 1)


def angle_multiplier(climb: Climb) -> float:
    """Board-angle multiplier; ``1.0`` for boulders or unknown angles."""
    if climb.type is not ClimbType.BOARD or climb.wall_angle_degrees is None:
        return 1.0
    for upper, multiplier in _ANGLE_TIERS:
        if climb.wall_angle_degrees <= upper:
            return multiplier
    return _STEEP_ANGLE_MULTIPLIER


def calculate_climb_load(climb: Climb) -> float:
    """Training load of a single climb."""
    return (grade_points(climb.grade) * climb.rpe * STYLE_MULTIPLIERS[climb.style] * attempt_factor(climb.attempts)
            * TYPE_MULTIPLIERS[climb.type] * angle_multiplier(climb))


def calculate_session_load(session: Union[Session, Iterable[Climb]]) -> float:
    """Total load of a session (or of a bare list of climbs)."""
    climbs = session.climbs if isinstance(session, Session) else session
    return sum((calculate_climb_load(c) for c in climbs), 0.0)
