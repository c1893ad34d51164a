"""Per-session summary statistics."""

from pydantic import BaseModel, Field


class SessionStats(BaseModel):
    """Summary of a single session's climbs."""

    climb_count: int = Field(..., ge=0)
    load: float = Field(..., ge=0.0)
    avg_rpe: float = Field(..., ge=0.0, le=10.0, description="0 for an empty session")
    median_grade: str
    peak_grade: str
    flash_rate: int = Field(..., ge=0, le=100, description="Percentage of climbs sent first try")
    total_xp: int = Field(..., ge=0)
    grade_counts: dict[str, int] = Field(..., description="Climbs per grade label, easiest first")
    grade_percentages: dict[str, int] = Field(..., description="Share of climbs per grade label, in percent")
    angle_counts: dict[str, int] = Field(..., description="Board climbs per wall angle, e.g. '40°'")
    style_counts: dict[str, int]
    type_counts: dict[str, int]
    dominant_style: str = Field(..., description="Most frequent style, '--' for an empty session")
