"""
Capacity recommendation schema.

Recommendations are **caps, not targets**: ``volume_cap`` is the range of
climbs the session should stay within and ``rpe_cap`` the effort ceiling.
Both are pre-rendered range strings (``"10-12"``, ``"7-8"``, ``"≤6"``).
"""

from typing import Optional

from pydantic import BaseModel, Field


class Recommendation(BaseModel):
    """Bounded training recommendation for the next session."""

    type: str = Field(..., description="Short label for the session type")
    volume_cap: str = Field(..., description="Climb count range, e.g. '10-12'")
    rpe_cap: str = Field(..., description="Effort ceiling, e.g. '≤7' or '7-8'")
    focus: str
    style: str = Field(..., description="One of: power, technical, endurance, mixed")
    note: Optional[str] = None
    baseline_load: Optional[float] = Field(None, description="Baseline session load the caps are scaled from")
    target_load: Optional[float] = Field(None, description="Baseline load scaled by the capacity multiplier")
