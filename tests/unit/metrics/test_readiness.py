"""
Unit tests for the Climb Readiness Score.

Covers phase gating, the building-phase formula, each component of the
full model, and the weighted combination.
"""

import datetime

import pytest
from pydantic import ValidationError

from colossus.metrics.readiness import (
    DEFAULT_READINESS_CONFIG,
    ReadinessConfig,
    _compute_cumulative_fatigue,
    _compute_load_recovery,
    _compute_load_trend,
    _compute_volume_pattern,
    _score_trend_ratio,
    calculate_readiness,
    readiness_message,
)
from colossus.schemas.climb import Climb, Session

AS_OF = datetime.datetime(2026, 3, 1, 12, 0, tzinfo=datetime.timezone.utc)
NOW_MS = int(AS_OF.timestamp() * 1000)
HOUR_MS = 60 * 60 * 1000


# ======================================================================
# Helpers
# ======================================================================


def _session(hours_ago: float | None, n_climbs: int = 4, rpe: int = 6) -> Session:
    """Session of V5 technical flashes (36 load per climb at RPE 6)."""
    timestamp = None if hours_ago is None else NOW_MS - int(hours_ago * HOUR_MS)
    climbs = [Climb(grade="V5", rpe=rpe, style="technical") for _ in range(n_climbs)]
    return Session(climbs=climbs, timestamp=timestamp)


def _history(*hours_ago: float, **kwargs) -> list[Session]:
    return [_session(h, **kwargs) for h in hours_ago]


# ======================================================================
# Phase gating
# ======================================================================


class TestPhases:
    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_insufficient_returns_none(self, count):
        assert calculate_readiness(_history(*[24 * (i + 1) for i in range(count)]), AS_OF) is None

    def test_none_input(self):
        assert calculate_readiness(None, AS_OF) is None

    @pytest.mark.parametrize("count, status, confidence", [
        (3, "building", "low"),
        (4, "building", "low"),
        (5, "calibrating", "medium"),
        (6, "calibrating", "medium"),
        (7, "calibrated", "high"),
        (12, "calibrated", "high"),
    ])
    def test_status_by_session_count(self, count, status, confidence):
        crs = calculate_readiness(_history(*[24 * (i + 1) for i in range(count)]), AS_OF)
        assert crs.status == status
        assert crs.confidence == confidence

    def test_untimestamped_sessions_count_toward_phase(self):
        sessions = _history(24, 48) + [_session(None)]
        assert calculate_readiness(sessions, AS_OF).status == "building"


# ======================================================================
# Building phase
# ======================================================================


class TestBuildingPhase:
    def test_formula(self):
        """24h → recovery 30; RPE 7 → fatigue 12; score 42."""
        crs = calculate_readiness(_history(72, 48, 24, rpe=7), AS_OF)
        assert crs.score == 42
        assert crs.message == "Limited"
        assert crs.components is None

    def test_uses_most_recent_regardless_of_order(self):
        ordered = _history(72, 48, 24, rpe=7)
        assert calculate_readiness(list(reversed(ordered)), AS_OF).score == 42

    def test_clamped_to_100(self):
        """72h → recovery 90; RPE 5 → fatigue 20; 110 → 100."""
        crs = calculate_readiness(_history(120, 96, 72, rpe=5), AS_OF)
        assert crs.score == 100
        assert crs.message == "Optimal"

    def test_no_timestamps_assumes_48h(self):
        """48h → recovery 60; neutral RPE 5 → fatigue 20."""
        sessions = [_session(None), _session(None), Session(timestamp=None)]
        assert calculate_readiness(sessions, AS_OF).score == 80

    def test_empty_last_session_uses_neutral_rpe(self):
        sessions = _history(72, 48) + [Session(timestamp=NOW_MS - 24 * HOUR_MS)]
        # recovery 30 + (10 - 5) × 4
        assert calculate_readiness(sessions, AS_OF).score == 50


# ======================================================================
# Full model: components
# ======================================================================


class TestLoadRecovery:
    cfg = DEFAULT_READINESS_CONFIG

    @pytest.mark.parametrize("hours, expected", [
        (0, 0.0),
        (12, 25.0),
        (24, 50.0),
        (48, 100.0),
        (48 + 7 * 24, 85.0),       # one week of detraining
        (48 + 14 * 24, 70.0),
        (48 + 60 * 24, 50.0),      # floored
    ])
    def test_curve(self, hours, expected):
        timed = [_session(hours)]
        assert _compute_load_recovery(timed, NOW_MS, self.cfg) == pytest.approx(expected)

    def test_no_sessions(self):
        assert _compute_load_recovery([], NOW_MS, self.cfg) == 50.0


class TestLoadTrend:
    @pytest.mark.parametrize("ratio, expected", [
        (0.0, 60),
        (0.39, 60),
        (0.4, 85),
        (0.69, 85),
        (0.7, 100),
        (1.0, 100),
        (1.3, 100),
        (1.31, 70),
        (1.5, 70),
        (1.51, 45),
        (1.8, 45),
        (1.81, 25),
        (4.0, 25),
    ])
    def test_piecewise_curve(self, ratio, expected):
        assert _score_trend_ratio(ratio) == expected

    def test_empty_chronic_window(self):
        timed = [_session(40 * 24)]
        assert _compute_load_trend(timed, NOW_MS, DEFAULT_READINESS_CONFIG) == 75.0

    def test_zero_load_history(self):
        timed = [Session(timestamp=NOW_MS - 24 * HOUR_MS)]
        assert _compute_load_trend(timed, NOW_MS, DEFAULT_READINESS_CONFIG) == 75.0

    def test_ratio_from_sessions(self):
        """3 of 5 equal sessions in the last week → 3 / 7 ≈ 0.43 → 85."""
        timed = _history(240, 192, 120, 72, 24)
        assert _compute_load_trend(timed, NOW_MS, DEFAULT_READINESS_CONFIG) == 85.0


class TestCumulativeFatigue:
    cfg = DEFAULT_READINESS_CONFIG

    def test_uniform_rpe(self):
        assert _compute_cumulative_fatigue(_history(72, 48, 24, rpe=6), self.cfg) == pytest.approx(40.0)

    def test_recent_session_weighted_highest(self):
        """Older RPE 10 (w 0.75), recent RPE 2 (w 1) → 9.5 / 1.75."""
        timed = [_session(48, rpe=10), _session(24, rpe=2)]
        expected = 100.0 - (2 * 1.0 + 10 * 0.75) / 1.75 * 10
        assert _compute_cumulative_fatigue(timed, self.cfg) == pytest.approx(expected)

    def test_only_last_seven_sessions(self):
        old_hard = [_session(500 + i, rpe=10) for i in range(5)]
        recent_easy = _history(*[24 * (7 - i) for i in range(7)], rpe=2)
        assert _compute_cumulative_fatigue(old_hard + recent_easy, self.cfg) == pytest.approx(80.0)

    def test_no_sessions_with_climbs(self):
        assert _compute_cumulative_fatigue([Session(timestamp=1)], self.cfg) == 50.0


class TestVolumePattern:
    cfg = DEFAULT_READINESS_CONFIG

    def test_fewer_than_three_defaults(self):
        assert _compute_volume_pattern(_history(48, 24), self.cfg) == 75.0

    def test_consistent_volume(self):
        assert _compute_volume_pattern(_history(72, 48, 24), self.cfg) == 100.0

    def test_variance_penalty(self):
        """Volumes 2, 4, 6 → variance 8/3."""
        timed = [_session(72, n_climbs=2), _session(48, n_climbs=4), _session(24, n_climbs=6)]
        assert _compute_volume_pattern(timed, self.cfg) == pytest.approx(100 - 16 / 3)

    def test_floored_at_zero(self):
        timed = [_session(72, n_climbs=1), _session(48, n_climbs=30), _session(24, n_climbs=1)]
        assert _compute_volume_pattern(timed, self.cfg) == 0.0


# ======================================================================
# Full model: combination
# ======================================================================


class TestFullModel:
    def test_weighted_score(self):
        """recovery 50, trend 85, fatigue 40, pattern 100 → 66.75 → 67."""
        crs = calculate_readiness(_history(240, 192, 120, 72, 24), AS_OF)

        assert crs.components.load_recovery == pytest.approx(50.0)
        assert crs.components.load_trend == 85.0
        assert crs.components.cumulative_fatigue == pytest.approx(40.0)
        assert crs.components.volume_pattern == 100.0
        assert crs.score == 67
        assert crs.message == "Moderate"

    def test_future_sessions_ignored_in_windows(self):
        history = _history(240, 192, 120, 72, 24)
        with_future = history + [_session(-48, n_climbs=20, rpe=10)]
        assert calculate_readiness(with_future, AS_OF).components == calculate_readiness(history, AS_OF).components

    @pytest.mark.parametrize("hours", [
        (1, 2, 3, 4, 5),
        (24 * 90, 24 * 91, 24 * 92, 24 * 93, 24 * 94),
        (0, 0, 0, 0, 0, 0, 0, 0),
    ])
    def test_score_in_range(self, hours):
        crs = calculate_readiness(_history(*hours, rpe=10), AS_OF)
        assert 0 <= crs.score <= 100

    def test_idempotent(self):
        history = _history(240, 192, 120, 72, 24, 6)
        assert calculate_readiness(history, AS_OF) == calculate_readiness(history, AS_OF)

    def test_custom_config(self):
        cfg = ReadinessConfig(min_sessions=1, full_model_sessions=1)
        crs = calculate_readiness(_history(24), AS_OF, cfg)
        assert crs.status == "calibrating"

    def test_misspelled_weight_rejected(self):
        with pytest.raises(ValidationError, match="load_recvery"):
            ReadinessConfig(weights={"load_recvery": 0.35, "load_trend": 0.25})

    def test_partial_weights_accepted(self):
        cfg = ReadinessConfig(weights={"load_recovery": 1.0})
        assert cfg.weights == {"load_recovery": 1.0}


class TestReadinessMessage:
    @pytest.mark.parametrize("score, expected", [
        (100, "Optimal"),
        (88, "Optimal"),
        (87, "Good"),
        (75, "Good"),
        (74, "Moderate"),
        (60, "Moderate"),
        (59, "Caution"),
        (45, "Caution"),
        (44, "Limited"),
        (30, "Limited"),
        (29, "Poor"),
        (0, "Poor"),
    ])
    def test_bands(self, score, expected):
        assert readiness_message(score) == expected
