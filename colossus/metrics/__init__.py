"""Colossus metrics — session load, baseline, readiness (CRS), load ratio (ACWR), recommendations."""

from colossus.metrics.baseline import calculate_personal_baseline
from colossus.metrics.capacity import get_capacity_recommendation
from colossus.metrics.load_ratio import LoadRatioConfig, calculate_load_ratio
from colossus.metrics.overview import compute_training_overview
from colossus.metrics.readiness import ReadinessConfig, calculate_readiness
from colossus.metrics.session_load import calculate_climb_load, calculate_session_load

__all__ = [
    "LoadRatioConfig",
    "ReadinessConfig",
    "calculate_climb_load",
    "calculate_load_ratio",
    "calculate_personal_baseline",
    "calculate_readiness",
    "calculate_session_load",
    "compute_training_overview",
    "get_capacity_recommendation",
]
