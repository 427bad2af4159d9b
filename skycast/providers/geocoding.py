"""OpenWeather direct (place) and postal geocoding endpoints."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .base import DecodeFailure, HttpProvider, InvalidInput
from ..config import DEFAULT_BASE_URL
from ..entities import Coordinate, GeocodeResult, PostalLookupResult


class OpenWeatherGeocoder(HttpProvider):
    direct_url = f"{DEFAULT_BASE_URL}/geo/1.0/direct"
    zip_url = f"{DEFAULT_BASE_URL}/geo/1.0/zip"

    def __init__(
        self,
        *,
        api_key: str,
        direct_url: Optional[str] = None,
        zip_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        if not api_key:
            raise InvalidInput("api_key must be provided")
        self.api_key = api_key
        self.direct_url = direct_url or self.direct_url
        self.zip_url = zip_url or self.zip_url
        self._log = logging.getLogger(self.__class__.__name__)

    def direct(self, query: str, limit: int = 1) -> List[GeocodeResult]:
        if not query or not query.strip(","):
            raise InvalidInput("query must not be empty")
        if limit < 1:
            raise InvalidInput("limit must be positive")
        params = {"q": query, "limit": limit, "appid": self.api_key}
        data = self._json(self._request("GET", self.direct_url, params=params))
        if not isinstance(data, list):
            raise DecodeFailure("direct geocoding payload must be a JSON array")
        return [_parse_geocode(item) for item in data]

    def postal(self, code: str, country_code: str) -> PostalLookupResult:
        if not code or not country_code:
            raise InvalidInput("postal code and country code are required")
        params = {"zip": f"{code},{country_code}", "appid": self.api_key}
        data = self._json(self._request("GET", self.zip_url, params=params))
        if not isinstance(data, dict):
            raise DecodeFailure("postal geocoding payload must be a JSON object")
        try:
            return PostalLookupResult(
                postal_code=str(data["zip"]),
                name=str(data["name"]),
                coordinate=_coordinate(data),
                country_code=str(data["country"]),
            )
        except KeyError as exc:
            raise DecodeFailure(f"missing field {exc.args[0]!r} in postal payload") from exc


def _coordinate(item: Mapping[str, Any]) -> Coordinate:
    try:
        return Coordinate(latitude=float(item["lat"]), longitude=float(item["lon"]))
    except (TypeError, ValueError) as exc:
        raise DecodeFailure("coordinates must be numeric") from exc


def _parse_geocode(item: Any) -> GeocodeResult:
    if not isinstance(item, dict):
        raise DecodeFailure("geocoding entry must be a JSON object")
    local_names = item.get("local_names")
    if local_names is not None and not isinstance(local_names, dict):
        raise DecodeFailure("local_names must be a mapping")
    try:
        return GeocodeResult(
            name=str(item["name"]),
            coordinate=_coordinate(item),
            country_code=str(item["country"]),
            local_names=dict(local_names) if local_names is not None else None,
            state_code=item.get("state"),
        )
    except KeyError as exc:
        raise DecodeFailure(f"missing field {exc.args[0]!r} in geocoding entry") from exc


__all__ = ["OpenWeatherGeocoder"]
