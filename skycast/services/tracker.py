from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import replace
from threading import RLock
from typing import Callable, List, Optional

from ..abstractions import LocationProvider
from ..entities import ByCoordinate, Coordinate, PermissionStatus, TrackerState
from ..schemas import WeatherSnapshot
from ..settings import SettingsStore
from .weather import WeatherClient


StateListener = Callable[[TrackerState], None]


class LocationTracker:
    """Owns the device-location flow and the published current weather.

    The device provider reports back through the ``on_*`` event methods.
    Each event runs its read-compare-publish-persist sequence under one lock,
    so concurrent events are queued rather than interleaved. Weather fetches
    run on the weather client's executor and publish on completion; the last
    completion wins.
    """

    def __init__(
        self,
        *,
        location_provider: LocationProvider,
        weather_client: WeatherClient,
        settings: SettingsStore,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.location_provider = location_provider
        self.weather_client = weather_client
        self.settings = settings
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._lock = RLock()
        self._listeners: List[StateListener] = []
        self._state = TrackerState(last_persisted_coordinate=settings.get_last_coordinate())
        self._disconnect = settings.signal.connect(self.on_settings_changed)

    @property
    def state(self) -> TrackerState:
        with self._lock:
            return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # Lifecycle ----------------------------------------------------------
    def start(self) -> None:
        self.check_authorization()

    def close(self) -> None:
        self._disconnect()

    def check_authorization(self) -> None:
        status = self.location_provider.authorization_status()
        self._log.debug("Location authorization status: %s", status)
        if status is PermissionStatus.NOT_DETERMINED:
            self.location_provider.request_authorization()
        elif status is PermissionStatus.AUTHORIZED:
            self._request_fix(permission_denied=False)
        else:
            self._publish(permission_denied=True)

    def refresh(self) -> None:
        self._request_fix()

    def search(self, text: str, country_code: Optional[str] = None) -> "Future[WeatherSnapshot]":
        """Fetch weather for a typed query and publish it as the current snapshot."""
        query = self.weather_client.build_search_query(text, country_code)
        future = self.weather_client.submit(query, self.settings.snapshot())
        future.add_done_callback(self._on_weather_done)
        return future

    # Device events ------------------------------------------------------
    def on_location_fix(self, coordinate: Coordinate) -> Optional["Future[WeatherSnapshot]"]:
        with self._lock:
            persisted = self._state.last_persisted_coordinate
            changed = persisted is None or persisted != coordinate
            if changed:
                self.settings.set_last_coordinate(coordinate)
                persisted = coordinate
            self._publish(
                last_known_coordinate=coordinate,
                last_persisted_coordinate=persisted,
                is_fetching=False,
            )
        if not changed:
            self._log.debug("Location unchanged at %s, skipping weather fetch", coordinate)
            return None
        return self._fetch_weather(coordinate)

    def on_location_error(self, error: BaseException) -> None:
        self._log.warning("Failed to fetch location: %s", error)
        self._publish(is_fetching=False)

    def on_authorization_changed(self) -> None:
        self.check_authorization()

    def on_settings_changed(self) -> None:
        self._request_fix()

    # Helpers ------------------------------------------------------------
    def _request_fix(self, **changes) -> None:
        self._publish(is_fetching=True, **changes)
        try:
            self.location_provider.request_location()
        except Exception as exc:
            self.on_location_error(exc)

    def _fetch_weather(self, coordinate: Coordinate) -> Optional["Future[WeatherSnapshot]"]:
        try:
            future = self.weather_client.submit(ByCoordinate(coordinate), self.settings.snapshot())
        except RuntimeError as exc:
            self._record_weather_failure(exc)
            return None
        future.add_done_callback(self._on_weather_done)
        return future

    def _on_weather_done(self, future: "Future[WeatherSnapshot]") -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._record_weather_failure(exc)
            return
        self._publish(current_snapshot=future.result(), last_error=None)

    def _record_weather_failure(self, exc: BaseException) -> None:
        self._log.error("Failed to fetch weather: %s", exc, exc_info=exc)
        self._publish(last_error=str(exc) or exc.__class__.__name__)

    def _publish(self, **changes) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
            for listener in list(self._listeners):
                try:
                    listener(state)
                except Exception:
                    self._log.exception("State listener %r failed", listener)


__all__ = ["LocationTracker"]
