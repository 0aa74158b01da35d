# ABOUTME: Pure time-of-day helpers for sunrise/sunset handling.
# ABOUTME: Derives the day/night flag and formats times the way the screen shows them.

from datetime import datetime, time, timedelta, timezone


def location_now(current_epoch: float, tz_offset: float | None = None) -> datetime:
    """Convert the location's epoch timestamp to an aware datetime in its UTC offset (UTC when unknown)."""
    tz = timezone(timedelta(hours=tz_offset)) if tz_offset is not None else timezone.utc
    return datetime.fromtimestamp(current_epoch, tz=tz)


def parse_time_of_day(value: str, anchor: datetime) -> datetime:
    """Place an "HH:MM:SS" string on the anchor's calendar day, with microseconds zeroed."""
    hours, minutes, seconds = (int(part) for part in value.split(":"))
    return anchor.replace(hour=hours, minute=minutes, second=seconds, microsecond=0)


def derive_day_night(current_epoch: float, sunrise: str, sunset: str, tz_offset: float | None = None) -> bool:
    """Return True (day) iff sunrise <= now < sunset at the queried location.

    Sunrise and sunset are anchored to the same day as "now". The interval is
    half-open: the sunrise instant counts as day, the sunset instant as night.
    """
    now = location_now(current_epoch, tz_offset)
    return parse_time_of_day(sunrise, now) <= now < parse_time_of_day(sunset, now)


def format_time_of_day(instant: datetime | time) -> str:
    """Format as 24-hour "H:MM" with no leading zero on the hour."""
    return f"{instant.hour}:{instant.minute:02d}"
