"""Display helpers for weather snapshots."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

ICON_BASE_URL = "https://openweathermap.org/img/wn/"
HPA_TO_INHG = 0.02953


def icon_url(icon_code: str) -> str:
    # @2x is the high resolution variant
    return f"{ICON_BASE_URL}{icon_code}@2x.png"


def pressure_in_inhg(pressure_hpa: int) -> str:
    return f"{pressure_hpa * HPA_TO_INHG:.2f}"


def format_integer(value: float) -> str:
    return f"{value:.0f}"


def from_unix_timestamp(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def local_time_string(timestamp: int, offset_seconds: int) -> str:
    """Render ``timestamp`` as e.g. ``Jun 5, 6:02 AM`` in a fixed UTC offset."""
    local = from_unix_timestamp(timestamp).astimezone(timezone(timedelta(seconds=offset_seconds)))
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {hour}:{local:%M} {local:%p}"


def time_of_day(timestamp: int, offset_seconds: int = 0) -> str:
    local = from_unix_timestamp(timestamp).astimezone(timezone(timedelta(seconds=offset_seconds)))
    return f"{local:%H:%M}"


__all__ = [
    "icon_url",
    "pressure_in_inhg",
    "format_integer",
    "from_unix_timestamp",
    "local_time_string",
    "time_of_day",
]
