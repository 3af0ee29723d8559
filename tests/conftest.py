"""Pytest configuration and fixtures."""

import json
from pathlib import Path
import sys

import pytest
import structlog

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from oura_digest.config import (  # noqa: E402
    AppSettings,
    LineSettings,
    MetricsSettings,
    OuraSettings,
    Settings,
    TracingSettings,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI runs."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def oura_settings():
    """Test Oura settings."""
    return OuraSettings(_env_file=None, api_token="oura-token")


@pytest.fixture
def line_settings():
    """Test LINE settings."""
    return LineSettings(_env_file=None, api_token="line-token", TO_LINE_USER="U1234567890")


@pytest.fixture
def settings(oura_settings, line_settings):
    """Combined settings that never read the environment."""
    return Settings(
        oura=oura_settings,
        line=line_settings,
        app=AppSettings(_env_file=None),
        metrics=MetricsSettings(_env_file=None),
        tracing=TracingSettings(_env_file=None),
    )


@pytest.fixture
def activity_item():
    """One daily_activity item as returned by the API."""
    return {
        "id": "a1",
        "day": "2024-05-01",
        "score": 80,
        "active_calories": 450,
        "total_calories": 2000,
        "steps": 8123,
        "non_wear_time": 600,
    }


@pytest.fixture
def sleep_item():
    """One sleep session item as returned by the API."""
    return {
        "id": "s1",
        "day": "2024-05-02",
        "type": "long_sleep",
        "bedtime_start": "2024-05-01T23:15:30+09:00",
        "bedtime_end": "2024-05-02T07:20:10+09:00",
        "deep_sleep_duration": 5400,
        "light_sleep_duration": 14400,
        "rem_sleep_duration": 7200,
        "total_sleep_duration": 28800,
        "efficiency": 90,
        "low_battery_alert": False,
        "average_hrv": 48,
    }


@pytest.fixture
def sleep_score_item():
    """One daily_sleep item as returned by the API."""
    return {
        "id": "d1",
        "day": "2024-05-02",
        "score": 85,
        "contributors": {
            "deep_sleep": 80,
            "efficiency": 88,
            "latency": 70,
            "rem_sleep": 81,
            "restfulness": 82,
            "timing": 90,
            "total_sleep": 83,
        },
    }


def page(*items, next_token=None) -> bytes:
    """Encode items as a usercollection response body."""
    return json.dumps({"data": list(items), "next_token": next_token}).encode()


@pytest.fixture
def make_page():
    return page
