"""
Metric availability — progressive disclosure.

Metrics appear as history accumulates, and become "accurate" only once
there is both enough history and recent data:

- readiness: 3+ sessions (accurate: 7+ and a session in the last 14 days)
- load ratio: 5+ sessions (accurate: same rule as readiness)
- weekly trends: 3+ sessions
- grade progression: 30+ climbs
- recommendations: 1+ session (personalised from 5)
"""

from __future__ import annotations

import datetime
from typing import Any, Iterable, Optional

from colossus.metrics.history import as_of_millis, coerce_sessions, sessions_in_window, timed_sessions
from colossus.schemas.overview import AvailabilityConfidence, MetricAvailability

READINESS_MIN_SESSIONS = 3
LOAD_RATIO_MIN_SESSIONS = 5
ACCURATE_MIN_SESSIONS = 7
RECENT_DAYS = 14
GRADE_PROGRESSION_MIN_CLIMBS = 30


def get_metric_availability(sessions: Optional[Iterable[Any]],
                            as_of: Optional[datetime.datetime] = None, ) -> MetricAvailability:
    """Availability flags and confidence levels for the dashboard metrics."""
    history = coerce_sessions(sessions)
    count = len(history)
    climbs = sum(s.climb_count for s in history)

    now_ms = as_of_millis(as_of)
    has_recent = bool(sessions_in_window(timed_sessions(history, now_ms), now_ms, RECENT_DAYS))
    accurate = count >= ACCURATE_MIN_SESSIONS and has_recent

    if accurate:
        overall = "high"
    elif count >= LOAD_RATIO_MIN_SESSIONS:
        overall = "medium"
    else:
        overall = "low"

    if count >= ACCURATE_MIN_SESSIONS:
        readiness_confidence = "high"
    elif count >= LOAD_RATIO_MIN_SESSIONS:
        readiness_confidence = "medium"
    else:
        readiness_confidence = "low"

    return MetricAvailability(
        readiness=count >= READINESS_MIN_SESSIONS,
        readiness_accurate=accurate,
        load_ratio=count >= LOAD_RATIO_MIN_SESSIONS,
        load_ratio_accurate=accurate,
        weekly_trends=count >= READINESS_MIN_SESSIONS,
        grade_progression=climbs >= GRADE_PROGRESSION_MIN_CLIMBS,
        all_metrics=count >= READINESS_MIN_SESSIONS and climbs >= GRADE_PROGRESSION_MIN_CLIMBS,
        recommendations=count >= 1,
        personalized_recommendations=count >= LOAD_RATIO_MIN_SESSIONS,
        confidence=AvailabilityConfidence(overall=overall, readiness=readiness_confidence,
                                          load="high" if accurate else "establishing", ),
    )
