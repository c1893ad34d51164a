"""
Climb Readiness Score (CRS) schemas.

The CRS is a 0-100 estimate of how much training capacity is available
today.  It is disclosed progressively as history accumulates:

- ``building``    — 3-4 sessions, recovery time + last-session effort only
- ``calibrating`` — 5-6 sessions, full four-component model
- ``calibrated``  — 7+ sessions, full model with high confidence

With fewer than 3 sessions no score exists at all (the scorer returns
``None``).
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

ReadinessStatus = Literal["building", "calibrating", "calibrated"]


class ReadinessComponents(BaseModel):
    """Per-component breakdown of the full CRS model (0-100 each)."""

    load_recovery: float = Field(..., ge=0.0, le=100.0, description="Time since the last session")
    load_trend: float = Field(..., ge=0.0, le=100.0, description="7-day load against the 28-day average")
    cumulative_fatigue: float = Field(..., ge=0.0, le=100.0,
                                      description="Exponentially weighted recent RPE, inverted")
    volume_pattern: float = Field(..., ge=0.0, le=100.0, description="Consistency of recent session volume")


class ReadinessScore(BaseModel):
    """Climb Readiness Score."""

    score: int = Field(..., ge=0, le=100)
    status: ReadinessStatus
    message: str = Field(..., description="Band label: Optimal, Good, Moderate, Caution, Limited or Poor")
    confidence: Literal["low", "medium", "high"]
    components: Optional[ReadinessComponents] = Field(
        None,
        description="Component breakdown (full model only)",
    )
