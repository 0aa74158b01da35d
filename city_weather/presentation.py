# ABOUTME: Turns a ViewState into the display strings and image assets the weather screen shows.
# ABOUTME: Temperatures, pressures, sun times, forecast cards, and the background all resolve here.

import math
from datetime import date

from pydantic import BaseModel

from city_weather.assets import BACKGROUND_IMAGES, resolve_icon, select_background
from city_weather.controller import visible_forecast
from city_weather.models import CurrentConditions, ForecastDay, QueryPhase, ViewState

TITLE = "Weather App"
SEARCH_PLACEHOLDER = "Enter city name"
FORECAST_TITLE = "7-Day Forecast"
EXPAND_LABEL = "Show Full 7-Day Forecast"
COLLAPSE_LABEL = "Show Less"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class CurrentPanel(BaseModel):
    """Current-conditions panel, all values preformatted."""

    city: str
    icon: str
    temperature: str
    conditions: str
    humidity: str
    pressure: str
    sunrise: str
    sunset: str


class ForecastCard(BaseModel):
    key: str
    date_label: str
    icon: str
    temperature: str


class ForecastPanel(BaseModel):
    title: str = FORECAST_TITLE
    cards: list[ForecastCard] = []
    expanded: bool = False
    toggle_label: str = EXPAND_LABEL


class ScreenModel(BaseModel):
    """Everything a client needs to draw the weather screen."""

    title: str = TITLE
    search_placeholder: str = SEARCH_PLACEHOLDER
    place_name: str = ""
    phase: QueryPhase = QueryPhase.IDLE
    background: str
    error: str | None = None
    current: CurrentPanel | None = None
    forecast: ForecastPanel | None = None


def round_half_up(value: float) -> int:
    """Round halves toward positive infinity, like JavaScript's Math.round."""
    return math.floor(value + 0.5)


def format_temperature(value: float) -> str:
    return f"{round_half_up(value)}°C"


def format_number(value: float) -> str:
    """Print whole numbers without a trailing ".0"."""
    return str(int(value)) if float(value).is_integer() else str(value)


def format_forecast_date(day: date) -> str:
    """Day-month label such as "16 Jan"."""
    return f"{day.day} {_MONTHS[day.month - 1]}"


def render_current(current: CurrentConditions, state: ViewState) -> CurrentPanel:
    return CurrentPanel(
        city=state.place_name,
        icon=resolve_icon(current.icon),
        temperature=format_temperature(current.temp),
        conditions=current.conditions,
        humidity=f"{format_number(current.humidity)}%",
        pressure=f"{format_number(current.pressure)} mb",
        sunrise=state.sunrise_text or "",
        sunset=state.sunset_text or "",
    )


def render_forecast_card(day: ForecastDay) -> ForecastCard:
    return ForecastCard(
        key=day.date.isoformat(),
        date_label=format_forecast_date(day.date),
        icon=resolve_icon(day.icon),
        temperature=format_temperature(day.temp),
    )


def render_screen(state: ViewState) -> ScreenModel:
    """Build the screen model for a view state."""
    background = select_background(state.data_loaded, state.is_day)
    screen = ScreenModel(
        place_name=state.place_name,
        phase=state.phase,
        background=BACKGROUND_IMAGES[background],
        error=state.error or None,
    )
    if state.current is not None:
        screen.current = render_current(state.current, state)
    if state.data_loaded:
        screen.forecast = ForecastPanel(
            cards=[render_forecast_card(day) for day in visible_forecast(state)],
            expanded=state.show_full_forecast,
            toggle_label=COLLAPSE_LABEL if state.show_full_forecast else EXPAND_LABEL,
        )
    return screen
