# ABOUTME: Shared test fixtures for the weather screen test suite.
# ABOUTME: Provides a canned Visual Crossing timeline payload and mock HTTP client helpers.

from unittest.mock import AsyncMock

import httpx
import pytest

from city_weather.deps import ForecastDeps

# 2025-01-15 12:00:00 UTC
NOON_EPOCH = 1736942400


def make_timeline(
    icon: str = "clear-day",
    temp: float = 21.6,
    sunrise: str = "06:00:00",
    sunset: str = "20:00:00",
    epoch: int = NOON_EPOCH,
    day_count: int = 15,
) -> dict:
    """Build a timeline body shaped like the Visual Crossing response."""
    return {
        "resolvedAddress": "Paris, Île-de-France, France",
        "timezone": "Europe/Paris",
        "tzoffset": 0.0,
        "currentConditions": {
            "temp": temp,
            "humidity": 65.0,
            "pressure": 1013.0,
            "conditions": "Clear",
            "icon": icon,
            "sunrise": sunrise,
            "sunset": sunset,
            "datetimeEpoch": epoch,
        },
        "days": [
            {"datetime": f"2025-01-{15 + i:02d}", "temp": 10.0 + i, "icon": "rain" if i % 2 else "cloudy"}
            for i in range(day_count)
        ],
    }


def mock_client(json_data: dict | None = None, status_code: int = 200, content: bytes | None = None) -> AsyncMock:
    """Create a mock httpx.AsyncClient whose get() returns the given response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    request = httpx.Request("GET", "https://test")
    if content is not None:
        response = httpx.Response(status_code=status_code, content=content, request=request)
    else:
        response = httpx.Response(status_code=status_code, json=json_data, request=request)
    mock.get.return_value = response
    return mock


@pytest.fixture
def timeline() -> dict:
    return make_timeline()


@pytest.fixture
def deps(timeline) -> ForecastDeps:
    return ForecastDeps(http_client=mock_client(timeline), api_key="test-key")
