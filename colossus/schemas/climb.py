"""
Climb, session and profile input schemas.

These are the records handed over by the (external) logging and
onboarding layers.  Logged data is messy — grades arrive as ``"V5"`` or
``"6c"``, styles as ``"POWERFUL"`` or ``"Power"``, board angles as
``"35°"`` — so every field is normalised here, in ``mode="before"``
validators, and the metrics never have to guard against malformed
strings.

Normalisation never raises: unparsable values fall back to the most
conservative default (grade ``V0``, one attempt, no board angle, no
timestamp).

All models are frozen: a logged climb is immutable.
"""

from __future__ import annotations

import datetime
import math
import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from colossus.core.grades import parse_grade

_DEFAULT_RPE = 5
_ANGLE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*°?\s*$")


# ======================================================================
# Enums
# ======================================================================


class ClimbStyle(str, Enum):
    """Dominant movement style of a climb."""
    POWER = "power"
    TECHNICAL = "technical"
    SIMPLE = "simple"  # also covers endurance / "simple" mileage


class ClimbType(str, Enum):
    """Where the climb was done."""
    BOULDER = "boulder"
    BOARD = "board"


# ======================================================================
# Normalisers
# ======================================================================


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    return None


def _to_epoch_millis(value: Any) -> Optional[int]:
    """Epoch millis from an int/float, numeric string or ``datetime``."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return int(value.timestamp() * 1000)
    millis = _to_int(value)
    if millis is None or millis < 0:
        return None
    return millis


def normalise_style(value: Any) -> ClimbStyle:
    if isinstance(value, ClimbStyle):
        return value
    text = str(value).lower() if value is not None else ""
    if "power" in text:
        return ClimbStyle.POWER
    if "technical" in text:
        return ClimbStyle.TECHNICAL
    return ClimbStyle.SIMPLE


def normalise_type(value: Any) -> ClimbType:
    if isinstance(value, ClimbType):
        return value
    if isinstance(value, str) and value.strip().lower() == "board":
        return ClimbType.BOARD
    return ClimbType.BOULDER


def normalise_angle(value: Any) -> Optional[int]:
    """``35``, ``"35"`` and ``"35°"`` → ``35``; anything else → ``None``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) and value >= 0 else None
    if isinstance(value, str):
        match = _ANGLE_RE.match(value)
        if match:
            return _to_int(match.group(1))
    return None


# ======================================================================
# Schemas
# ======================================================================


class Climb(BaseModel):
    """A single logged climb."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    grade: int = Field(0, ge=0, le=15, description="V-scale ordinal (V0 → 0 … V15 → 15)")
    style: ClimbStyle = ClimbStyle.SIMPLE
    attempts: int = Field(1, ge=1, description="Attempts until send (1 = flash)")
    rpe: int = Field(_DEFAULT_RPE, ge=1, le=10, description="Rate of perceived effort (1-10)")
    type: ClimbType = ClimbType.BOULDER
    wall_angle_degrees: Optional[int] = Field(None, alias="wallAngleDegrees",
                                              description="Board angle in degrees (board climbs only)", )

    @field_validator("grade", mode="before")
    @classmethod
    def _parse_grade(cls, value: Any) -> int:
        return parse_grade(value)

    @field_validator("style", mode="before")
    @classmethod
    def _parse_style(cls, value: Any) -> ClimbStyle:
        return normalise_style(value)

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> ClimbType:
        return normalise_type(value)

    @field_validator("attempts", mode="before")
    @classmethod
    def _parse_attempts(cls, value: Any) -> int:
        attempts = _to_int(value)
        return attempts if attempts is not None and attempts >= 1 else 1

    @field_validator("rpe", mode="before")
    @classmethod
    def _parse_rpe(cls, value: Any) -> int:
        rpe = _to_int(value)
        if rpe is None:
            return _DEFAULT_RPE
        return max(1, min(10, rpe))

    @field_validator("wall_angle_degrees", mode="before")
    @classmethod
    def _parse_angle(cls, value: Any) -> Optional[int]:
        return normalise_angle(value)


class Session(BaseModel):
    """A climbing session: its climbs plus when it happened.

    ``timestamp`` (epoch millis) is required for any time-windowed
    metric; sessions without it are only used where ordering by
    ``end_time`` is enough.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    climbs: tuple[Climb, ...] = Field(default=(), alias="climbList")
    timestamp: Optional[int] = Field(None, description="Session start, epoch millis")
    end_time: Optional[int] = Field(None, alias="endTime", description="Session end, epoch millis")

    @field_validator("climbs", mode="before")
    @classmethod
    def _parse_climbs(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("timestamp", "end_time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> Optional[int]:
        return _to_epoch_millis(value)

    @property
    def climb_count(self) -> int:
        return len(self.climbs)

    @property
    def avg_rpe(self) -> Optional[float]:
        """Mean RPE across climbs, ``None`` for an empty session."""
        if not self.climbs:
            return None
        return sum(c.rpe for c in self.climbs) / len(self.climbs)

    @property
    def order_key(self) -> Optional[int]:
        """Best available ordering time: ``timestamp``, else ``end_time``."""
        return self.timestamp if self.timestamp is not None else self.end_time


class UserProfile(BaseModel):
    """Self-reported onboarding data."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flash_grade: Optional[int] = Field(None, alias="flashGrade", description="V-scale ordinal the user can flash")
    typical_volume: Optional[int] = Field(None, alias="typicalVolume", description="Climbs per typical session")

    @field_validator("flash_grade", mode="before")
    @classmethod
    def _parse_flash_grade(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        return parse_grade(value)

    @field_validator("typical_volume", mode="before")
    @classmethod
    def _parse_volume(cls, value: Any) -> Optional[int]:
        volume = _to_int(value)
        return volume if volume is not None and volume > 0 else None

    @property
    def is_complete(self) -> bool:
        return self.flash_grade is not None and self.typical_volume is not None
