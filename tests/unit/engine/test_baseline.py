"""
Unit tests for the trailing personal baseline.
"""

import datetime

import pytest

from app.engine.baseline import baseline_values, compute_baseline
from app.schemas.physio import DailyBiometric

TODAY = datetime.date(2024, 6, 30)


def _hrv_day(offset: int, hrv) -> DailyBiometric:
    return DailyBiometric(date=TODAY - datetime.timedelta(days=offset), hrv=hrv)


def _hrv(entry: DailyBiometric):
    return entry.hrv


class TestBaselineValues:
    def test_window_is_half_open(self):
        history = [_hrv_day(o, float(o)) for o in (31, 30, 1, 0, -1)]
        assert baseline_values(history, TODAY, _hrv, 30) == [30.0, 1.0]

    def test_missing_values_skipped(self):
        history = [_hrv_day(3, 50.0), _hrv_day(2, None), _hrv_day(1, 70.0)]
        assert baseline_values(history, TODAY, _hrv, 30) == [50.0, 70.0]


class TestComputeBaseline:
    def test_mean_and_population_spread(self):
        history = [_hrv_day(o, v) for o, v in zip(range(6, 0, -1), [50, 70, 50, 70, 50, 70])]
        baseline = compute_baseline(history, TODAY, _hrv)
        assert baseline.mean == pytest.approx(60.0)
        assert baseline.spread == pytest.approx(10.0)
        assert baseline.sample_count == 6

    def test_too_few_samples(self):
        history = [_hrv_day(o, 60.0) for o in range(4, 0, -1)]
        assert compute_baseline(history, TODAY, _hrv) is None

    def test_custom_minimum(self):
        history = [_hrv_day(o, 60.0) for o in range(2, 0, -1)]
        baseline = compute_baseline(history, TODAY, _hrv, min_samples=2)
        assert baseline.spread == 0.0

    def test_empty_never_divides(self):
        assert compute_baseline([], TODAY, _hrv, min_samples=0) is None
