from __future__ import annotations

import pytest
import requests

from helpers import DIRECT_URL, WEATHER_URL, ZIP_URL, weather_payload
from skycast.entities import Coordinate
from skycast.providers.base import DecodeFailure, InvalidInput, TransportFailure
from skycast.providers.geocoding import OpenWeatherGeocoder
from skycast.providers.openweather import OpenWeatherProvider


def test_current_by_coordinate_sends_units_and_key(requests_mock, provider):
    requests_mock.get(WEATHER_URL, json=weather_payload())

    snapshot = provider.current_by_coordinate(Coordinate(40.75, -73.99), "imperial")

    query = requests_mock.last_request.qs
    assert query["lat"] == ["40.75"]
    assert query["lon"] == ["-73.99"]
    assert query["units"] == ["imperial"]
    assert query["appid"] == ["test"]
    assert snapshot.name == "New York"


def test_current_by_place_uses_q_parameter(requests_mock, provider):
    requests_mock.get(WEATHER_URL, json=weather_payload(name="Springfield"))

    snapshot = provider.current_by_place("Springfield,IL,US", "metric")

    query = requests_mock.last_request.qs
    assert query["q"] == ["Springfield,IL,US"]
    assert query["units"] == ["metric"]
    assert "lat" not in query
    assert snapshot.name == "Springfield"


def test_http_error_is_transport_failure(requests_mock, provider):
    requests_mock.get(WEATHER_URL, status_code=404, json={"cod": "404", "message": "city not found"})

    with pytest.raises(TransportFailure):
        provider.current_by_place("Nowhere", "metric")


def test_connection_error_is_transport_failure(requests_mock, provider):
    requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectionError)

    with pytest.raises(TransportFailure):
        provider.current_by_coordinate(Coordinate(1.0, 1.0), "metric")


def test_invalid_json_is_decode_failure(requests_mock, provider):
    requests_mock.get(WEATHER_URL, text="<html>oops</html>")

    with pytest.raises(DecodeFailure):
        provider.current_by_coordinate(Coordinate(1.0, 1.0), "metric")


def test_schema_mismatch_is_decode_failure(requests_mock, provider):
    payload = weather_payload()
    del payload["main"]
    requests_mock.get(WEATHER_URL, json=payload)

    with pytest.raises(DecodeFailure):
        provider.current_by_coordinate(Coordinate(1.0, 1.0), "metric")


def test_provider_requires_api_key():
    with pytest.raises(InvalidInput):
        OpenWeatherProvider(api_key="")


def test_empty_place_is_invalid_input(requests_mock, provider):
    with pytest.raises(InvalidInput):
        provider.current_by_place("", "metric")
    assert requests_mock.call_count == 0


def test_direct_geocoding_preserves_order(requests_mock, geocoder):
    requests_mock.get(
        DIRECT_URL,
        json=[
            {
                "name": "London",
                "local_names": {"en": "London", "fr": "Londres"},
                "lat": 51.5073,
                "lon": -0.1276,
                "country": "GB",
                "state": "England",
            },
            {"name": "London", "lat": 42.9834, "lon": -81.233, "country": "CA", "state": "Ontario"},
        ],
    )

    results = geocoder.direct("London", limit=2)

    assert requests_mock.last_request.qs["limit"] == ["2"]
    assert [r.country_code for r in results] == ["GB", "CA"]
    assert results[0].local_names["fr"] == "Londres"
    assert results[1].local_names is None
    assert results[0].coordinate == Coordinate(51.5073, -0.1276)


def test_direct_geocoding_empty_result_is_not_an_error(requests_mock, geocoder):
    requests_mock.get(DIRECT_URL, json=[])

    assert geocoder.direct("Atlantis") == []


def test_direct_geocoding_rejects_non_array(requests_mock, geocoder):
    requests_mock.get(DIRECT_URL, json={"cod": 401})

    with pytest.raises(DecodeFailure):
        geocoder.direct("London")


def test_direct_geocoding_rejects_bad_limit(geocoder):
    with pytest.raises(InvalidInput):
        geocoder.direct("London", limit=0)


def test_postal_lookup(requests_mock, geocoder):
    requests_mock.get(
        ZIP_URL,
        json={"zip": "10001", "name": "New York", "lat": 40.75, "lon": -73.99, "country": "US"},
    )

    result = geocoder.postal("10001", "US")

    assert requests_mock.last_request.qs["zip"] == ["10001,US"]
    assert result.postal_code == "10001"
    assert result.coordinate == Coordinate(40.75, -73.99)


def test_postal_lookup_missing_field(requests_mock, geocoder):
    requests_mock.get(ZIP_URL, json={"zip": "10001", "name": "New York", "country": "US"})

    with pytest.raises(DecodeFailure):
        geocoder.postal("10001", "US")


def test_geocoder_uses_shared_session(requests_mock):
    session = requests.Session()
    geocoder = OpenWeatherGeocoder(api_key="k", direct_url=DIRECT_URL, session=session)
    requests_mock.get(DIRECT_URL, json=[])

    geocoder.direct("Paris")

    assert geocoder.session is session
    assert requests_mock.called
