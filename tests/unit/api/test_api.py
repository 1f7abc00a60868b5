"""
HTTP surface tests.

Each endpoint is exercised through FastAPI's test client with a small
inline payload; the numbers themselves are covered by the engine tests.
"""

import datetime

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_settings
from app.core.config import Settings
from app.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _sleep_payload(**overrides) -> dict:
    payload = {
        "day": "2024-03-11",
        "total_sleep_duration": 28800,
        "efficiency": 100,
        "restless_periods": 0,
        "rem_sleep_duration": 6336,
        "deep_sleep_duration": 5184,
        "light_sleep_duration": 17280,
        "latency": 900,
        "bedtime_start": "2024-03-10T22:30:00+01:00",
        "time_in_bed": 30600,
    }
    payload.update(overrides)
    return payload


def _history(days: int = 10) -> list[dict]:
    today = datetime.date(2024, 6, 30)
    return [
        {
            "date": (today - datetime.timedelta(days=offset)).isoformat(),
            "hrv": 60.0,
            "resting_hr": 50.0,
            "temperature_deviation": 0.0,
            "respiratory_rate": 14.0,
        }
        for offset in range(days, 0, -1)
    ]


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["service"] == "scoring-engine"

    def test_info_reports_engine_defaults(self, client):
        body = client.get("/info").json()
        assert body["readiness"]["baseline_days"] == 30
        assert body["load"]["chronic_days"] == 42


class TestSleepEndpoint:
    def test_ceiling_night(self, client):
        response = client.post("/api/v1/scores/sleep", json=_sleep_payload())
        assert response.status_code == 200
        body = response.json()
        assert body["total_score"] == 100
        assert set(body["components"]) == {
            "totalSleep", "efficiency", "restfulness",
            "remSleep", "deepSleep", "latency", "timing",
        }
        assert body["components"]["totalSleep"]["weight"] == 0.25
        assert body["label"] == "optimal"

    def test_invalid_efficiency_rejected(self, client):
        response = client.post("/api/v1/scores/sleep", json=_sleep_payload(efficiency=120))
        assert response.status_code == 422

    def test_missing_field_rejected(self, client):
        payload = _sleep_payload()
        del payload["latency"]
        assert client.post("/api/v1/scores/sleep", json=payload).status_code == 422


class TestReadinessEndpoint:
    def test_at_baseline(self, client):
        response = client.post("/api/v1/scores/readiness", json={
            "today": {"date": "2024-06-30", "hrv": 60.0, "resting_hr": 50.0,
                      "temperature_deviation": 0.0, "respiratory_rate": 14.0},
            "history": _history(),
        })
        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 90
        assert body["status"] == "Prime"
        assert body["details"]["rhr"]["inverse_trend"] is True

    def test_no_history_is_fallback(self, client):
        body = client.post("/api/v1/scores/readiness", json={
            "today": {"date": "2024-06-30", "hrv": 60.0},
        }).json()
        assert body["is_fallback"] is True
        assert body["score"] == 0

    def test_settings_flow_into_config(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(READINESS_MIN_BASELINE_DAYS=3)
        body = client.post("/api/v1/scores/readiness", json={
            "today": {"date": "2024-06-30", "hrv": 60.0},
            "history": _history(days=3),
        }).json()
        assert body["is_fallback"] is False


class TestManualRecoveryEndpoint:
    def test_logged_day(self, client):
        response = client.post("/api/v1/scores/manual-recovery", json={
            "metric": {"date": "2024-06-30", "sleep_minutes": 480, "hrv": 65.0, "resting_hr": 60.0},
        })
        assert response.status_code == 200
        body = response.json()
        assert body["recovery_score"] == 93
        assert body["is_fallback"] is False

    def test_demographic_applied(self, client):
        body = client.post("/api/v1/scores/manual-recovery", json={
            "metric": {"date": "2024-06-30", "hrv": 67.0},
            "demographic": {"gender": "female", "age_bucket": "25-34"},
        }).json()
        assert body["hrv_score"] == 80
        assert body["sleep_score"] is None

    def test_nothing_logged(self, client):
        body = client.post("/api/v1/scores/manual-recovery", json={
            "metric": {"date": "2024-06-30"},
        }).json()
        assert body["recovery_score"] == 0
        assert body["is_fallback"] is True


class TestResolveEndpoint:
    def test_manual_fills_gaps(self, client):
        body = client.post("/api/v1/scores/biometrics/resolve", json={
            "day": "2024-06-30",
            "ring_night": _sleep_payload(average_hrv=58.0),
            "manual": {"date": "2024-06-30", "hrv": 40.0, "resting_hr": 52.0},
        }).json()
        assert body["biometric"]["hrv"] == 58.0
        assert body["biometric"]["resting_hr"] == 52.0
        assert body["sources"]["hrv"]["source"] == "ring"
        assert body["sources"]["resting_hr"]["source"] == "manual"
        assert body["sources"]["respiratory_rate"]["source"] == "unavailable"


class TestTrainingEndpoints:
    def _activities(self) -> list[dict]:
        as_of = datetime.date(2024, 6, 30)
        return [
            {
                "start": f"{(as_of - datetime.timedelta(days=d)).isoformat()}T07:00:00",
                "moving_time": 6000,
                "average_heartrate": 140.0,
            }
            for d in range(36)
        ]

    def test_load(self, client):
        body = client.post("/api/v1/training/load", json={
            "activities": self._activities(), "as_of": "2024-06-30",
        }).json()
        assert body["score"] == 100
        assert body["metrics"]["ratio"] == pytest.approx(1.1667, abs=1e-4)

    def test_consistency_without_activities(self, client):
        body = client.post("/api/v1/training/consistency", json={"as_of": "2024-06-30"}).json()
        assert body["score"] == 100
        assert body["is_fallback"] is True

    def test_profile(self, client):
        body = client.post("/api/v1/training/profile", json={
            "activities": self._activities(), "as_of": "2024-06-30",
        }).json()
        assert 0 <= body["overall_score"] <= 100
        assert set(body["dimensions"]) == {
            "load", "consistency", "endurance", "intensity", "efficiency",
        }

    def test_as_of_defaults_to_today(self, client):
        response = client.post("/api/v1/training/load", json={"activities": []})
        assert response.status_code == 200
        assert response.json()["is_fallback"] is True
