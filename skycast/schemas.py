"""Decoding of the OpenWeather current-conditions payload."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .entities import Coordinate
from .providers.base import DecodeFailure

__all__ = [
    "Condition",
    "MainMetrics",
    "Wind",
    "Clouds",
    "SystemInfo",
    "WeatherSnapshot",
    "decode_snapshot",
]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coord(_Frozen):
    lon: float
    lat: float


class Condition(_Frozen):
    id: int
    main: str
    description: str
    icon: str


class MainMetrics(_Frozen):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: Optional[int] = None
    grnd_level: Optional[int] = None


class Wind(_Frozen):
    speed: float
    deg: int
    gust: Optional[float] = None


class Clouds(_Frozen):
    all: int


class SystemInfo(_Frozen):
    type: Optional[int] = None
    id: Optional[int] = None
    country: str
    sunrise: int
    sunset: int


class WeatherSnapshot(_Frozen):
    """Fully decoded current-conditions observation.

    Numeric fields carry whatever unit system the request asked for; no
    conversion happens after decoding.
    """

    coord: Coord
    weather: Tuple[Condition, ...] = Field(min_length=1)
    main: MainMetrics
    wind: Wind
    clouds: Clouds
    dt: int
    sys: SystemInfo
    timezone: int
    id: int
    name: str
    cod: int
    base: Optional[str] = None
    visibility: Optional[int] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.coord.lat, longitude=self.coord.lon)

    @property
    def primary_condition(self) -> Condition:
        return self.weather[0]

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        payload["weather"] = list(payload["weather"])
        return payload


def decode_snapshot(data: Any) -> WeatherSnapshot:
    if not isinstance(data, dict):
        raise DecodeFailure("weather payload must be a JSON object")
    try:
        return WeatherSnapshot.model_validate(data)
    except ValidationError as exc:
        raise DecodeFailure(f"unexpected weather payload: {exc.error_count()} error(s)") from exc
