# ABOUTME: Service layer for Visual Crossing timeline API calls and response parsing.
# ABOUTME: Fetches current conditions plus the multi-day outlook for a place name.

from datetime import date
from urllib.parse import quote

import httpx

from city_weather.errors import QueryError
from city_weather.models import CurrentConditions, ForecastDay, TimelineResponse

TIMELINE_URL = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"

FORECAST_LENGTH = 7


async def get_timeline(client: httpx.AsyncClient, place_name: str, api_key: str) -> TimelineResponse:
    """Fetch current conditions and forecast days for a place name in metric units.

    Transport errors and non-2xx statuses propagate as ``httpx.HTTPError``; an
    unparsable body raises ``QueryError``.
    """
    resp = await client.get(
        f"{TIMELINE_URL}/{quote(place_name, safe='')}",
        params={"unitGroup": "metric", "key": api_key, "contentType": "json"},
    )
    resp.raise_for_status()
    try:
        data = resp.json()
    except ValueError as e:
        raise QueryError(f"Response body is not JSON: {e}") from e

    return parse_timeline(data)


def parse_timeline(data: dict) -> TimelineResponse:
    """Parse a timeline JSON body, raising QueryError when required fields are missing or invalid."""
    if not isinstance(data, dict):
        raise QueryError("Response body is not a JSON object")
    try:
        return TimelineResponse(
            tz_offset=data.get("tzoffset"),
            current=parse_current_conditions(data["currentConditions"]),
            days=parse_days(data["days"]),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        # pydantic.ValidationError and bad ISO dates are both ValueErrors
        raise QueryError(f"Malformed timeline response: {e!r}") from e


def parse_current_conditions(raw: dict) -> CurrentConditions:
    """Map the camelCase ``currentConditions`` object onto CurrentConditions."""
    return CurrentConditions(
        temp=raw["temp"],
        humidity=raw["humidity"],
        pressure=raw["pressure"],
        conditions=raw["conditions"],
        icon=raw.get("icon"),
        sunrise=raw["sunrise"],
        sunset=raw["sunset"],
        datetime_epoch=raw["datetimeEpoch"],
    )


def parse_days(raw: list[dict]) -> list[ForecastDay]:
    """Parse the chronological ``days`` array into ForecastDay rows."""
    return [
        ForecastDay(
            date=date.fromisoformat(d["datetime"]),
            temp=d["temp"],
            icon=d.get("icon"),
        )
        for d in raw
    ]


def upcoming_days(days: list[ForecastDay]) -> list[ForecastDay]:
    """Drop today and keep the next seven days."""
    return days[1 : FORECAST_LENGTH + 1]
