"""
Colossus — training readiness and load-management metrics for climbers.

A pure computation library: session history in, readiness score, load
ratio, personal baseline and bounded training recommendation out.
"""

from colossus.metrics import (
    calculate_climb_load,
    calculate_load_ratio,
    calculate_personal_baseline,
    calculate_readiness,
    calculate_session_load,
    compute_training_overview,
    get_capacity_recommendation,
)

__version__ = "0.1.0"

__all__ = [
    "calculate_climb_load",
    "calculate_load_ratio",
    "calculate_personal_baseline",
    "calculate_readiness",
    "calculate_session_load",
    "compute_training_overview",
    "get_capacity_recommendation",
]
