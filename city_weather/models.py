# ABOUTME: Pydantic BaseModels for Visual Crossing timeline data and the screen's view state.
# ABOUTME: Defines the typed records passed between the service, controller, and presentation layers.

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, model_validator

TIME_OF_DAY_PATTERN = r"^\d{1,2}:\d{2}:\d{2}$"


class CurrentConditions(BaseModel):
    """Weather snapshot for "now" at the queried location."""

    temp: float
    humidity: float
    pressure: float
    conditions: str
    icon: str | None = None
    sunrise: str = Field(pattern=TIME_OF_DAY_PATTERN)
    sunset: str = Field(pattern=TIME_OF_DAY_PATTERN)
    datetime_epoch: int


class ForecastDay(BaseModel):
    """One day of the multi-day outlook."""

    date: date
    temp: float
    icon: str | None = None


class TimelineResponse(BaseModel):
    """Parsed response from the Visual Crossing timeline endpoint."""

    tz_offset: float | None = None
    current: CurrentConditions
    days: list[ForecastDay] = []


class QueryPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ViewState(BaseModel):
    """Everything the weather screen shows, recomputed on every query cycle.

    The derived fields (``is_day``, ``sunrise_text``, ``sunset_text``) only exist
    alongside ``current`` and are cleared together with it.
    """

    place_name: str = ""
    phase: QueryPhase = QueryPhase.IDLE
    current: CurrentConditions | None = None
    forecast: list[ForecastDay] = []
    error: str = ""
    is_day: bool | None = None
    sunrise_text: str | None = None
    sunset_text: str | None = None
    data_loaded: bool = False
    show_full_forecast: bool = False

    @model_validator(mode="after")
    def _derived_fields_follow_current(self) -> "ViewState":
        derived = (self.is_day, self.sunrise_text, self.sunset_text)
        if self.current is None and any(v is not None for v in derived):
            raise ValueError("day/night and sun times require current conditions")
        if self.current is not None and any(v is None for v in derived):
            raise ValueError("current conditions require day/night and sun times")
        return self
