"""Shared fakes and payloads for the test suite."""
from __future__ import annotations

import copy
from concurrent.futures import Executor, Future
from typing import Any, Dict, List, Optional

from skycast.entities import Coordinate, PermissionStatus


WEATHER_URL = "https://owm.test/data/2.5/weather"
DIRECT_URL = "https://owm.test/geo/1.0/direct"
ZIP_URL = "https://owm.test/geo/1.0/zip"

NEW_YORK_PAYLOAD: Dict[str, Any] = {
    "coord": {"lon": -73.99, "lat": 40.75},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "base": "stations",
    "main": {
        "temp": 71.6,
        "feels_like": 70.9,
        "temp_min": 68.2,
        "temp_max": 74.1,
        "pressure": 1017,
        "humidity": 52,
    },
    "visibility": 10000,
    "wind": {"speed": 8.05, "deg": 230},
    "clouds": {"all": 0},
    "dt": 1717600000,
    "sys": {"type": 2, "id": 2039034, "country": "US", "sunrise": 1717579500, "sunset": 1717633800},
    "timezone": -14400,
    "id": 5128581,
    "name": "New York",
    "cod": 200,
}


class InlineExecutor(Executor):
    """Runs submitted work on the calling thread."""

    def __init__(self) -> None:
        self.submitted = 0

    def submit(self, fn, /, *args, **kwargs) -> Future:
        self.submitted += 1
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class FakeLocationProvider:
    def __init__(self, status: PermissionStatus = PermissionStatus.AUTHORIZED) -> None:
        self.status = status
        self.authorization_requests = 0
        self.location_requests = 0
        self.fail_with: Optional[Exception] = None

    def authorization_status(self) -> PermissionStatus:
        return self.status

    def request_authorization(self) -> None:
        self.authorization_requests += 1

    def request_location(self) -> None:
        self.location_requests += 1
        if self.fail_with is not None:
            raise self.fail_with


class FakeNativeGeocoder:
    def __init__(self, result: Optional[Coordinate] = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.queries: List[str] = []

    def geocode_address(self, address: str) -> Future:
        self.queries.append(address)
        future: Future = Future()
        if self.error is not None:
            future.set_exception(self.error)
        else:
            future.set_result(self.result)
        return future


def weather_payload(**overrides: Any) -> Dict[str, Any]:
    payload = copy.deepcopy(NEW_YORK_PAYLOAD)
    payload.update(overrides)
    return payload



