"""
Training overview — the whole pipeline in one call.

Architecture (three layers, leaf-first):
    1. **Session load** — every session reduced to a scalar load
    2. **State** — baseline, readiness (CRS) and load ratio (ACWR)
    3. **Recommendation** — caps derived from the state

The history is validated once and the same reference time is used for
every time-windowed metric, so all outputs describe the same instant.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Iterable, Optional

from colossus.metrics.availability import get_metric_availability
from colossus.metrics.baseline import calculate_personal_baseline
from colossus.metrics.capacity import get_capacity_recommendation
from colossus.metrics.history import coerce_profile, coerce_sessions
from colossus.metrics.load_ratio import LoadRatioConfig, calculate_load_ratio
from colossus.metrics.readiness import ReadinessConfig, calculate_readiness
from colossus.schemas.overview import TrainingOverview

logger = logging.getLogger(__name__)


def compute_training_overview(sessions: Optional[Iterable[Any]], profile: Any = None,
                              as_of: Optional[datetime.datetime] = None,
                              readiness_config: Optional[ReadinessConfig] = None,
                              load_ratio_config: Optional[LoadRatioConfig] = None, ) -> TrainingOverview:
    """Compute every metric for a climber's history.

    Args:
        sessions: Session history, any order.
        profile: Optional onboarding profile.
        as_of: Reference time (defaults to now, UTC).
        readiness_config: Optional readiness config override.
        load_ratio_config: Optional load-ratio config override.

    Returns:
        :class:`TrainingOverview` with readiness, load ratio, baseline,
        recommendation and metric availability.
    """
    if as_of is None:
        as_of = datetime.datetime.now(datetime.timezone.utc)
    history = coerce_sessions(sessions)
    user_profile = coerce_profile(profile)

    # Layer 2: state.
    baseline = calculate_personal_baseline(history, user_profile)
    readiness = calculate_readiness(history, as_of, readiness_config)
    load_ratio = calculate_load_ratio(history, as_of, load_ratio_config)

    # Layer 3: recommendation.
    recommendation = get_capacity_recommendation(readiness, load_ratio, baseline, user_profile)

    logger.debug("Overview computed", extra={
        "ctx_sessions": len(history),
        "ctx_readiness": readiness.score if readiness else None,
        "ctx_load_ratio": load_ratio.status if load_ratio else None,
        "ctx_baseline": baseline.source,
    })

    return TrainingOverview(readiness=readiness, load_ratio=load_ratio, baseline=baseline,
                            recommendation=recommendation, availability=get_metric_availability(history, as_of), )
