# ABOUTME: Forecast view controller driving one weather query cycle for the screen.
# ABOUTME: Validates the place name, runs the query, derives day/night, and owns the ViewState.

import logging

import httpx

from city_weather.daylight import derive_day_night, format_time_of_day, location_now, parse_time_of_day
from city_weather.deps import ForecastDeps
from city_weather.errors import QueryError, ValidationError
from city_weather.models import ForecastDay, QueryPhase, TimelineResponse, ViewState
from city_weather.weather_service import get_timeline, upcoming_days

logger = logging.getLogger(__name__)

COLLAPSED_FORECAST_LENGTH = 3

_NO_DATA = {
    "current": None,
    "forecast": [],
    "is_day": None,
    "sunrise_text": None,
    "sunset_text": None,
    "data_loaded": False,
}


def validate_place_name(place_name: str) -> str:
    """Return the trimmed place name, raising ValidationError when nothing is left."""
    trimmed = place_name.strip()
    if not trimmed:
        raise ValidationError()
    return trimmed


def visible_forecast(state: ViewState) -> list[ForecastDay]:
    """The forecast entries on screen: the first three, or all seven when expanded."""
    if state.show_full_forecast:
        return list(state.forecast)
    return state.forecast[:COLLAPSED_FORECAST_LENGTH]


def loaded_fields(timeline: TimelineResponse) -> dict:
    """Compute the ViewState fields for a successful response."""
    current = timeline.current
    try:
        now = location_now(current.datetime_epoch, timeline.tz_offset)
        sunrise = parse_time_of_day(current.sunrise, now)
        sunset = parse_time_of_day(current.sunset, now)
        is_day = derive_day_night(current.datetime_epoch, current.sunrise, current.sunset, timeline.tz_offset)
    except (ValueError, OverflowError, OSError) as e:
        raise QueryError(f"Invalid time data in response: {e}") from e
    return {
        "phase": QueryPhase.LOADED,
        "current": current,
        "forecast": upcoming_days(timeline.days),
        "is_day": is_day,
        "sunrise_text": format_time_of_day(sunrise),
        "sunset_text": format_time_of_day(sunset),
        "data_loaded": True,
        "error": "",
    }


class ForecastViewController:
    """Owns the weather screen's state and applies every transition to it.

    Each query is tagged with a generation number; ``submit_query`` and ``clear``
    advance it, and a response is only applied while its generation is current.
    The most recently issued request therefore always wins.
    """

    def __init__(self, deps: ForecastDeps):
        self.deps = deps
        self._state = ViewState()
        self._generation = 0

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def visible_forecast(self) -> list[ForecastDay]:
        return visible_forecast(self._state)

    def set_place_name(self, text: str) -> ViewState:
        """Update the search box. Emptying it resets the screen."""
        if text == "":
            return self.clear()
        return self._transition(place_name=text)

    async def submit_query(self, place_name: str | None = None) -> ViewState:
        """Query the weather for ``place_name`` (or the search box) and return the new state.

        Empty input records the validation message without touching the network.
        Any query failure replaces the displayed data with the "City not found" banner.
        """
        if place_name is not None:
            self._transition(place_name=place_name)
        try:
            query = validate_place_name(self._state.place_name)
        except ValidationError as e:
            return self._transition(error=e.message)

        self._generation += 1
        generation = self._generation
        self._transition(phase=QueryPhase.LOADING, error="")
        logger.info("Querying weather for %r", query)

        try:
            timeline = await self._fetch(query)
            fields = loaded_fields(timeline)
        except QueryError as e:
            if generation != self._generation:
                logger.debug("Ignoring failure of superseded query for %r", query)
                return self._state
            logger.warning("Weather query for %r failed: %s", query, e.detail)
            return self._transition(phase=QueryPhase.ERROR, error=e.message, **_NO_DATA)

        if generation != self._generation:
            logger.debug("Discarding stale response for %r", query)
            return self._state
        return self._transition(**fields)

    def clear(self) -> ViewState:
        """Reset to the initial home view. Any in-flight response is discarded."""
        self._generation += 1
        return self._transition(place_name="", phase=QueryPhase.IDLE, error="", **_NO_DATA)

    def toggle_forecast_expansion(self) -> ViewState:
        return self._transition(show_full_forecast=not self._state.show_full_forecast)

    async def _fetch(self, place_name: str) -> TimelineResponse:
        try:
            return await get_timeline(self.deps.http_client, place_name, self.deps.api_key)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise QueryError(f"Weather API request failed: {e}") from e
        except UnicodeEncodeError as e:
            raise QueryError(f"Place name cannot be encoded into a URL: {e}") from e

    def _transition(self, **changes) -> ViewState:
        # model_copy skips validators; rebuild so the derived-field invariant is checked
        self._state = ViewState.model_validate({**dict(self._state), **changes})
        return self._state
