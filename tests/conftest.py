from __future__ import annotations

import pytest

from requests_mock import Mocker

from helpers import DIRECT_URL, WEATHER_URL, ZIP_URL, FakeNativeGeocoder, InlineExecutor
from skycast.entities import Coordinate
from skycast.providers.geocoding import OpenWeatherGeocoder
from skycast.providers.openweather import OpenWeatherProvider
from skycast.services.resolver import GeocodingResolver
from skycast.services.weather import WeatherClient


@pytest.fixture
def requests_mock():
    with Mocker(case_sensitive=True) as mock:
        yield mock


@pytest.fixture
def executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def geocoder() -> OpenWeatherGeocoder:
    return OpenWeatherGeocoder(api_key="test", direct_url=DIRECT_URL, zip_url=ZIP_URL)


@pytest.fixture
def provider() -> OpenWeatherProvider:
    return OpenWeatherProvider(api_key="test", base_url=WEATHER_URL)


@pytest.fixture
def native_geocoder() -> FakeNativeGeocoder:
    return FakeNativeGeocoder(result=Coordinate(48.85, 2.35))


@pytest.fixture
def resolver(geocoder, native_geocoder, executor) -> GeocodingResolver:
    return GeocodingResolver(geocoder=geocoder, native_geocoder=native_geocoder, executor=executor)


@pytest.fixture
def weather_client(provider, resolver, executor) -> WeatherClient:
    return WeatherClient(provider=provider, resolver=resolver, executor=executor)
