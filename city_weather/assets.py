# ABOUTME: Static lookup from Visual Crossing icon codes to screen image assets.
# ABOUTME: Also picks the home/day/night background for the screen.

from typing import Literal

Background = Literal["home", "day", "night"]

DEFAULT_ICON = "default.png"

# Extend-only. Some codes share artwork.
WEATHER_ICONS: dict[str, str] = {
    "snow": "snowy.png",
    "rain": "rain.png",
    "fog": "fog.png",
    "wind": "windy-day.png",
    "cloudy": "cloudy_1.png",
    "partly-cloudy-day": "cloudy-day.png",
    "partly-cloudy-night": "cloudy-night.png",
    "clear-day": "clear-day.webp",
    "clear-night": "clear-night.png",
    "snow-showers-day": "cloudDay.png",
    "snow-showers-night": "cloudsnow.png",
    "thunder-rain": "thunder.png",
    "thunder-showers-day": "thunderShower.webp",
    "thunder-showers-night": "thunderShower.webp",
    "showers-day": "showerDay.png",
    "showers-night": "showerDay.png",
}

BACKGROUND_IMAGES: dict[str, str] = {
    "home": "homePage.jpg",
    "day": "day.jpg",
    "night": "night.jpg",
}


def resolve_icon(condition_code: str | None) -> str:
    """Map a condition code to its image asset, falling back to the default image."""
    if condition_code is None:
        return DEFAULT_ICON
    return WEATHER_ICONS.get(condition_code, DEFAULT_ICON)


def select_background(data_loaded: bool, is_day: bool | None) -> Background:
    if not data_loaded:
        return "home"
    return "day" if is_day else "night"
