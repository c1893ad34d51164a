"""
Personal baseline schema.

The baseline is a climber's "typical" session — load, volume and
effort — used as the reference point for relative scoring and for
scaling recommendations.  It is derived on demand and never persisted.

Estimation sources, in strict priority order:

- ``sessions``   — logged history (confidence ``medium`` / ``high``)
- ``onboarding`` — self-reported profile (confidence ``profile-based``)
- ``default``    — conservative constants (confidence ``none``)
"""

from typing import Literal

from pydantic import BaseModel, Field

BaselineConfidence = Literal["none", "low", "medium", "high", "profile-based"]
BaselineSource = Literal["sessions", "onboarding", "default"]


class Baseline(BaseModel):
    """A climber's typical session."""

    avg_session_load: float = Field(..., ge=0.0, description="Mean session load")
    avg_volume: float = Field(..., ge=0.0, description="Mean climbs per session")
    avg_rpe: float = Field(..., ge=0.0, le=10.0, description="Mean session RPE, rounded to the nearest 0.5")
    confidence: BaselineConfidence
    source: BaselineSource
    session_count: int = Field(0, ge=0, description="Number of logged sessions the estimate is built from")
