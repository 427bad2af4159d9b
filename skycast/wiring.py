"""Explicit construction of the resolution pipeline."""
from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import requests

from .abstractions import KeyValueStore, LocationProvider, NativeGeocoder
from .config import ClientConfig
from .providers.base import RequestConfig
from .providers.geocoding import OpenWeatherGeocoder
from .providers.openweather import OpenWeatherProvider
from .services.resolver import GeocodingResolver
from .services.tracker import LocationTracker
from .services.weather import WeatherClient
from .settings import SettingsStore


@dataclass
class Pipeline:
    settings: SettingsStore
    resolver: GeocodingResolver
    weather_client: WeatherClient
    tracker: LocationTracker
    executor: Executor
    owns_executor: bool = False

    def close(self) -> None:
        self.tracker.close()
        if self.owns_executor:
            self.executor.shutdown(wait=True)


def build_pipeline(
    config: ClientConfig,
    *,
    location_provider: LocationProvider,
    native_geocoder: Optional[NativeGeocoder] = None,
    store: Optional[KeyValueStore] = None,
    session: Optional[requests.Session] = None,
    executor: Optional[Executor] = None,
) -> Pipeline:
    session = session or requests.Session()
    owns_executor = executor is None
    executor = executor or ThreadPoolExecutor(thread_name_prefix="skycast")
    request_config = RequestConfig(timeout=config.timeout)
    settings = SettingsStore(store)
    geocoder = OpenWeatherGeocoder(
        api_key=config.api_key,
        direct_url=config.direct_geocoding_url,
        zip_url=config.zip_geocoding_url,
        session=session,
        request_config=request_config,
    )
    provider = OpenWeatherProvider(
        api_key=config.api_key,
        base_url=config.weather_url,
        session=session,
        request_config=request_config,
    )
    resolver = GeocodingResolver(geocoder=geocoder, native_geocoder=native_geocoder, executor=executor)
    weather_client = WeatherClient(provider=provider, resolver=resolver, executor=executor)
    tracker = LocationTracker(
        location_provider=location_provider,
        weather_client=weather_client,
        settings=settings,
    )
    return Pipeline(
        settings=settings,
        resolver=resolver,
        weather_client=weather_client,
        tracker=tracker,
        executor=executor,
        owns_executor=owns_executor,
    )


__all__ = ["Pipeline", "build_pipeline"]
