"""
Unit tests for the endurance, intensity and efficiency dimensions and
the combined training profile.
"""

import datetime
from typing import Optional

import pytest

from app.core.instrumentation import RecordingObserver
from app.engine.training_profile import (
    ProfileConfig,
    assess_data_quality,
    compute_efficiency,
    compute_endurance,
    compute_intensity,
    compute_training_profile,
    efficiency_factor,
)
from app.schemas.activity import ActivityRecord

AS_OF = datetime.date(2024, 6, 30)


def _activity(
    days_ago: int,
    minutes: float = 60.0,
    hr: Optional[float] = None,
    max_hr: Optional[float] = None,
    watts: Optional[float] = None,
    speed: Optional[float] = None,
) -> ActivityRecord:
    day = AS_OF - datetime.timedelta(days=days_ago)
    return ActivityRecord(
        start=datetime.datetime.combine(day, datetime.time(8, 0)),
        moving_time=int(minutes * 60),
        average_heartrate=hr,
        max_heartrate=max_hr,
        average_watts=watts,
        average_speed=speed,
    )


def _baseline_weeks(minutes: float = 100.0, **kwargs) -> list[ActivityRecord]:
    """One session in each of the four weeks before the current one."""
    return [_activity(7 * week + 1, minutes, **kwargs) for week in range(1, 5)]


# ======================================================================
# Endurance
# ======================================================================


class TestEndurance:
    def test_longer_than_baseline(self):
        result = compute_endurance(_baseline_weeks() + [_activity(1, 120.0)], AS_OF)
        assert result.score == 100
        assert result.trend == "improving"

    def test_comfort_zone_names_the_target(self):
        result = compute_endurance(_baseline_weeks() + [_activity(1, 100.0)], AS_OF)
        assert result.score == 80
        assert "> 110 mins" in result.suggestion

    def test_regression(self):
        result = compute_endurance(_baseline_weeks() + [_activity(1, 60.0)], AS_OF)
        assert result.score == 50
        assert result.trend == "declining"
        assert "95 mins" in result.suggestion

    def test_only_longest_session_counts(self):
        current = [_activity(1, 30.0), _activity(2, 115.0), _activity(3, 20.0)]
        result = compute_endurance(_baseline_weeks() + current, AS_OF)
        assert result.metrics["current_longest"] == 115 * 60
        assert result.score == 100

    def test_no_history(self):
        result = compute_endurance([], AS_OF)
        assert result.score == 80
        assert result.is_fallback is True


# ======================================================================
# Intensity
# ======================================================================


class TestIntensity:
    def test_polarised_week(self):
        week = [_activity(1, 60.0, hr=165.0)] + [_activity(d, 60.0, hr=120.0) for d in (2, 3, 4)]
        result = compute_intensity(week, AS_OF)
        assert result.metrics["z4_pct"] == pytest.approx(22.5)
        assert result.metrics["z3_pct"] == pytest.approx(2.5)
        assert result.score == 100

    def test_grey_zone_penalty(self):
        week = [_activity(d, 60.0, hr=145.0) for d in (1, 2, 3)]
        result = compute_intensity(week, AS_OF)
        assert result.metrics["z3_pct"] == pytest.approx(80.0)
        assert result.score == 60
        assert "Junk Mile" in result.suggestion

    def test_some_intensity(self):
        week = [_activity(1, 30.0, hr=165.0), _activity(2, 210.0, hr=120.0)]
        result = compute_intensity(week, AS_OF)
        assert result.metrics["z4_pct"] == pytest.approx(11.25)
        assert result.score == 75

    def test_intervals_behind_low_average(self):
        result = compute_intensity([_activity(1, 60.0, hr=130.0, max_hr=175.0)], AS_OF)
        assert result.metrics["z4_pct"] == pytest.approx(15.0)
        assert result.metrics["z3_pct"] == pytest.approx(25.0)
        assert result.score == 75

    def test_all_easy(self):
        result = compute_intensity([_activity(1, 90.0, hr=120.0)], AS_OF)
        assert result.score == 50

    def test_only_current_week_counts(self):
        result = compute_intensity([_activity(10, 60.0, hr=170.0)], AS_OF)
        assert result.metrics["training_seconds"] == 0.0
        assert result.is_fallback is True


# ======================================================================
# Efficiency
# ======================================================================


class TestEfficiencyFactor:
    def test_power_per_beat(self):
        assert efficiency_factor(_activity(1, hr=100.0, watts=200.0)) == pytest.approx(2.0)

    def test_speed_when_no_power(self):
        assert efficiency_factor(_activity(1, hr=150.0, speed=3.0)) == pytest.approx(2.0)

    def test_implausible_heart_rate_ignored(self):
        assert efficiency_factor(_activity(1, hr=40.0, watts=200.0)) is None

    def test_missing_heart_rate(self):
        assert efficiency_factor(_activity(1, watts=200.0)) is None


class TestEfficiency:
    @pytest.mark.parametrize("current_watts, score, trend", [
        (210.0, 100, "improving"),
        (202.0, 85, "improving"),
        (200.0, 85, "stable"),
        (190.0, 50, "declining"),
    ])
    def test_change_against_baseline(self, current_watts, score, trend):
        activities = _baseline_weeks(hr=100.0, watts=200.0) + [
            _activity(1, hr=100.0, watts=current_watts),
        ]
        result = compute_efficiency(activities, AS_OF)
        assert result.score == score
        assert result.trend == trend

    def test_no_usable_data(self):
        result = compute_efficiency(_baseline_weeks() + [_activity(1)], AS_OF)
        assert result.score == 50
        assert result.is_fallback is True
        assert "No HR/Power" in result.suggestion


# ======================================================================
# Data quality
# ======================================================================


class TestDataQuality:
    def test_empty(self):
        assert assess_data_quality([], AS_OF) == "limited"

    def test_long_history_with_heart_rate(self):
        activities = [_activity(d, hr=140.0) for d in range(0, 50, 5)]
        assert assess_data_quality(activities, AS_OF) == "excellent"

    def test_long_history_without_heart_rate(self):
        activities = [_activity(d) for d in range(0, 50, 5)]
        assert assess_data_quality(activities, AS_OF) == "good"

    def test_four_weeks(self):
        assert assess_data_quality([_activity(0), _activity(30)], AS_OF) == "good"

    def test_short_history(self):
        assert assess_data_quality([_activity(0), _activity(10)], AS_OF) == "limited"

    def test_older_than_eight_weeks_ignored(self):
        assert assess_data_quality([_activity(0), _activity(70)], AS_OF) == "limited"

    @pytest.mark.parametrize("oldest, expected", [
        (56, "excellent"),
        (57, "limited"),
    ])
    def test_window_edge(self, oldest, expected):
        activities = [_activity(0, hr=140.0), _activity(oldest, hr=140.0)]
        assert assess_data_quality(activities, AS_OF) == expected

    def test_old_sessions_do_not_dilute_coverage(self):
        activities = [
            _activity(0, hr=140.0), _activity(45, hr=140.0),
            _activity(60), _activity(70),
        ]
        assert assess_data_quality(activities, AS_OF) == "excellent"

    def test_future_sessions_ignored(self):
        activities = [_activity(0, hr=140.0), _activity(45, hr=140.0), _activity(-3)]
        assert assess_data_quality(activities, AS_OF) == "excellent"
        assert assess_data_quality([_activity(-3)], AS_OF) == "limited"


# ======================================================================
# Profile
# ======================================================================


class TestTrainingProfile:
    def test_empty_history(self):
        """load 85, consistency 100, endurance 80, intensity 50, efficiency 50."""
        profile = compute_training_profile([], AS_OF)
        assert profile.overall_score == 73
        assert profile.data_quality == "limited"
        assert profile.dimensions.load.is_fallback is True

    def test_overall_is_weighted_mean(self):
        activities = [_activity(d, 60.0, hr=140.0, watts=180.0) for d in range(0, 45, 2)]
        profile = compute_training_profile(activities, AS_OF)
        dims = profile.dimensions
        expected = sum(
            getattr(dims, name).score
            for name in ("load", "consistency", "endurance", "intensity", "efficiency")
        ) / 5
        assert profile.overall_score == int(expected + 0.5)

    def test_custom_weights(self):
        cfg = ProfileConfig(dimension_weights={"load": 1.0})
        profile = compute_training_profile([], AS_OF, config=cfg)
        assert profile.overall_score == profile.dimensions.load.score

    def test_observer_sees_every_stage(self):
        observer = RecordingObserver()
        compute_training_profile([_activity(1)], AS_OF, observer=observer)
        assert [name for name, _ in observer.events] == ["load", "consistency", "training_profile"]
