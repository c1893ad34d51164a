"""
Training overview schemas.

Bundle every output of the metrics pipeline so that the presentation
layer can render a dashboard from a single call.
"""

from typing import Literal, Optional

from pydantic import BaseModel

from colossus.schemas.baseline import Baseline
from colossus.schemas.load_ratio import LoadRatio
from colossus.schemas.readiness import ReadinessScore
from colossus.schemas.recommendation import Recommendation

ConfidenceLevel = Literal["low", "medium", "high"]


class AvailabilityConfidence(BaseModel):
    overall: ConfidenceLevel
    readiness: ConfidenceLevel
    load: Literal["establishing", "high"]


class MetricAvailability(BaseModel):
    """Which metrics have enough history to be shown, and how reliable they are."""

    readiness: bool
    readiness_accurate: bool
    load_ratio: bool
    load_ratio_accurate: bool
    weekly_trends: bool
    grade_progression: bool
    all_metrics: bool
    recommendations: bool
    personalized_recommendations: bool
    confidence: AvailabilityConfidence


class TrainingOverview(BaseModel):
    """Complete output of the metrics pipeline."""

    readiness: Optional[ReadinessScore]
    load_ratio: Optional[LoadRatio]
    baseline: Baseline
    recommendation: Recommendation
    availability: MetricAvailability
