"""Tests for input normalisation of climbs, sessions and profiles."""

import datetime

import pytest
from pydantic import ValidationError

from colossus.schemas.climb import Climb, ClimbStyle, ClimbType, Session, UserProfile


class TestClimb:
    def test_defaults(self):
        climb = Climb()

        assert climb.grade == 0
        assert climb.style is ClimbStyle.SIMPLE
        assert climb.attempts == 1
        assert climb.rpe == 5
        assert climb.type is ClimbType.BOULDER
        assert climb.wall_angle_degrees is None

    @pytest.mark.parametrize("raw, style", [
        ("power", ClimbStyle.POWER),
        ("POWERFUL", ClimbStyle.POWER),
        ("Technical", ClimbStyle.TECHNICAL),
        ("simple", ClimbStyle.SIMPLE),
        ("endurance", ClimbStyle.SIMPLE),
        (None, ClimbStyle.SIMPLE),
    ])
    def test_style_normalised(self, raw, style):
        assert Climb(style=raw).style is style

    @pytest.mark.parametrize("raw, expected", [(3, 3), ("4", 4), (0, 1), (-2, 1), ("many", 1), (None, 1),
                                               ("1e400", 1), ("inf", 1), (float("inf"), 1)])
    def test_attempts(self, raw, expected):
        assert Climb(attempts=raw).attempts == expected

    @pytest.mark.parametrize("raw, expected", [(8, 8), ("7", 7), (0, 1), (14, 10), ("hard", 5), ("inf", 5),
                                               ("-Infinity", 5), (float("nan"), 5)])
    def test_rpe(self, raw, expected):
        assert Climb(rpe=raw).rpe == expected

    @pytest.mark.parametrize("raw, expected", [(40, 40), ("35", 35), ("35°", 35), (" 20 ° ", 20), ("steep", None),
                                               (-5, None), (float("inf"), None), ("9" * 400, None)])
    def test_wall_angle(self, raw, expected):
        assert Climb(type="board", wallAngleDegrees=raw).wall_angle_degrees == expected

    def test_board_type(self):
        assert Climb(type="Board").type is ClimbType.BOARD
        assert Climb(type="gym").type is ClimbType.BOULDER

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Climb().rpe = 9


class TestSession:
    def test_aliases(self):
        session = Session.model_validate({"climbList": [{"grade": "V3"}], "timestamp": 1000, "endTime": 5000})

        assert session.climb_count == 1
        assert session.timestamp == 1000
        assert session.end_time == 5000

    def test_empty(self):
        session = Session(climbList=None)

        assert session.climbs == ()
        assert session.avg_rpe is None
        assert session.order_key is None

    def test_avg_rpe(self):
        session = Session(climbs=[Climb(rpe=6), Climb(rpe=9)])
        assert session.avg_rpe == pytest.approx(7.5)

    def test_datetime_timestamp(self):
        moment = datetime.datetime(2026, 1, 1, tzinfo=datetime.timezone.utc)
        assert Session(timestamp=moment).timestamp == int(moment.timestamp() * 1000)

    def test_naive_datetime_read_as_utc(self):
        naive = datetime.datetime(2026, 1, 1)
        aware = naive.replace(tzinfo=datetime.timezone.utc)
        assert Session(timestamp=naive).timestamp == Session(timestamp=aware).timestamp

    @pytest.mark.parametrize("raw", ["yesterday", -1, None, "Infinity", "1e400", float("inf")])
    def test_invalid_timestamp_dropped(self, raw):
        assert Session(timestamp=raw).timestamp is None

    def test_non_finite_values_normalised(self):
        session = Session.model_validate({
            "climbList": [{"grade": float("inf"), "rpe": "inf", "attempts": "1e400", "wallAngleDegrees": "inf"}],
            "timestamp": "Infinity",
            "endTime": float("-inf"),
        })
        climb = session.climbs[0]

        assert (climb.grade, climb.rpe, climb.attempts, climb.wall_angle_degrees) == (0, 5, 1, None)
        assert session.order_key is None

    def test_order_key_falls_back_to_end_time(self):
        assert Session(end_time=42).order_key == 42
        assert Session(timestamp=7, end_time=42).order_key == 7


class TestUserProfile:
    def test_parses_grade_and_volume(self):
        profile = UserProfile.model_validate({"flashGrade": "6c", "typicalVolume": "15"})

        assert profile.flash_grade == 5
        assert profile.typical_volume == 15
        assert profile.is_complete

    @pytest.mark.parametrize("data", [{}, {"flashGrade": "V4"}, {"typicalVolume": 12},
                                      {"flashGrade": "", "typicalVolume": 12},
                                      {"flashGrade": "V4", "typicalVolume": 0}])
    def test_incomplete(self, data):
        assert not UserProfile.model_validate(data).is_complete
