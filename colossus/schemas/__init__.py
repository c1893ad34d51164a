"""Pydantic schemas for metric inputs and outputs."""

from colossus.schemas.climb import Climb, ClimbStyle, ClimbType, Session, UserProfile
from colossus.schemas.baseline import Baseline
from colossus.schemas.readiness import ReadinessComponents, ReadinessScore
from colossus.schemas.load_ratio import LoadRatio
from colossus.schemas.recommendation import Recommendation
from colossus.schemas.session_stats import SessionStats
from colossus.schemas.overview import AvailabilityConfidence, MetricAvailability, TrainingOverview

__all__ = [
    "Climb",
    "ClimbStyle",
    "ClimbType",
    "Session",
    "UserProfile",
    "Baseline",
    "ReadinessComponents",
    "ReadinessScore",
    "LoadRatio",
    "Recommendation",
    "SessionStats",
    "AvailabilityConfidence",
    "MetricAvailability",
    "TrainingOverview",
]
