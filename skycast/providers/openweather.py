"""OpenWeather current-conditions endpoint."""
from __future__ import annotations

import logging
from typing import Optional

from .base import HttpProvider, InvalidInput
from ..config import DEFAULT_BASE_URL
from ..entities import Coordinate
from ..schemas import WeatherSnapshot, decode_snapshot


class OpenWeatherProvider(HttpProvider):
    """Integration with the OpenWeather current weather endpoint."""

    name = "openweather"
    base_url = f"{DEFAULT_BASE_URL}/data/2.5/weather"

    def __init__(self, *, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        if not api_key:
            raise InvalidInput("api_key must be provided")
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self._log = logging.getLogger(self.__class__.__name__)

    def current_by_coordinate(self, coordinate: Coordinate, units: str) -> WeatherSnapshot:
        params = {"lat": coordinate.latitude, "lon": coordinate.longitude}
        return self._fetch(params, units)

    def current_by_place(self, place: str, units: str) -> WeatherSnapshot:
        if not place or not place.strip(","):
            raise InvalidInput("place must not be empty")
        return self._fetch({"q": place}, units)

    def _fetch(self, params: dict, units: str) -> WeatherSnapshot:
        params = dict(params, appid=self.api_key, units=units)
        self._log.debug("Requesting current conditions for %s", {k: v for k, v in params.items() if k != "appid"})
        response = self._request("GET", self.base_url, params=params)
        return decode_snapshot(self._json(response))


__all__ = ["OpenWeatherProvider"]
