from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional, Union

from ..entities import ByCoordinate, ByPlace, LocationQuery, ResolutionSettings
from ..providers.base import InvalidInput
from ..providers.openweather import OpenWeatherProvider
from ..schemas import WeatherSnapshot
from ..settings import SettingsStore, as_snapshot
from .resolver import GeocodingResolver


class WeatherClient:
    DEFAULT_POSTAL_COUNTRY = "US"

    def __init__(
        self,
        *,
        provider: OpenWeatherProvider,
        resolver: GeocodingResolver,
        executor: Optional[Executor] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.resolver = resolver
        self.executor = executor or ThreadPoolExecutor(thread_name_prefix="skycast-weather")
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def fetch_weather(
        self,
        query: LocationQuery,
        settings: Union[ResolutionSettings, SettingsStore],
    ) -> WeatherSnapshot:
        """Fetch current conditions for ``query``.

        Digit-only place names are looked up as postal codes first and the
        weather is then requested by coordinate. Raises ``TransportFailure``,
        ``DecodeFailure`` or ``InvalidInput``.
        """
        snapshot = as_snapshot(settings)
        units = snapshot.units
        if isinstance(query, ByCoordinate):
            return self.provider.current_by_coordinate(query.coordinate, units)
        if isinstance(query, ByPlace):
            if query.is_postal_code:
                country = query.country_code or self.DEFAULT_POSTAL_COUNTRY
                self._log.debug("Treating %r as a postal code in %s", query.name, country)
                postal = self.resolver.resolve_postal(query.name, country)
                return self.provider.current_by_coordinate(postal.coordinate, units)
            return self.provider.current_by_place(query.place_string(), units)
        raise InvalidInput(f"Unsupported query: {query!r}")

    def submit(
        self,
        query: LocationQuery,
        settings: Union[ResolutionSettings, SettingsStore],
    ) -> "Future[WeatherSnapshot]":
        snapshot = as_snapshot(settings)
        return self.executor.submit(self.fetch_weather, query, snapshot)

    def search(
        self,
        text: str,
        settings: Union[ResolutionSettings, SettingsStore],
        country_code: Optional[str] = None,
    ) -> WeatherSnapshot:
        return self.fetch_weather(self.build_search_query(text, country_code), settings)

    # Helpers ------------------------------------------------------------
    def build_search_query(self, text: str, country_code: Optional[str] = None) -> ByPlace:
        name = (text or "").strip()
        if not name:
            raise InvalidInput("search text must not be empty")
        query = ByPlace(name, None, country_code)
        if query.is_postal_code and country_code is None:
            return ByPlace(name, None, self.DEFAULT_POSTAL_COUNTRY)
        return query


__all__ = ["WeatherClient"]
