"""
Load ratio (ACWR) schema.

Status labels:

- ``low``          — ratio < 0.8
- ``optimal``      — 0.8 <= ratio <= 1.3
- ``elevated``     — 1.3 < ratio <= 1.5
- ``high``         — ratio > 1.5
- ``insufficient`` — no session inside the chronic window
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

LoadRatioStatus = Literal["insufficient", "low", "optimal", "elevated", "high"]


class LoadRatio(BaseModel):
    """Acute:chronic workload ratio, frequency-normalised."""

    ratio: Optional[float] = Field(None, ge=0.0, description="Acute load / expected weekly load (None if insufficient)")
    status: LoadRatioStatus
    message: str
    frequency: float = Field(0.0, ge=0.0, description="Average sessions per week over the chronic window")
    confidence: Literal["establishing", "high"]
    acute_load: float = Field(0.0, ge=0.0, description="Sum of session loads in the acute window")
    chronic_load: float = Field(0.0, ge=0.0, description="Sum of session loads in the chronic window")
    expected_weekly_load: float = Field(0.0, ge=0.0, description="Floored expected weekly load (ratio denominator)")
    chronic_session_count: int = Field(0, ge=0)
