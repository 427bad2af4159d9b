"""Persisted resolution settings and the settings-changed signal."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List, Optional

from .abstractions import InMemoryStore, KeyValueStore
from .entities import Coordinate, ResolutionSettings


logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class SettingsChangedSignal:
    """Process-local broadcast without payload."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = Lock()

    def connect(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def disconnect() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return disconnect

    def send(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.exception("Settings listener %r failed", listener)


class SettingsStore:
    KEY_METRIC = "isMetric"
    KEY_API_GEOCODING = "useApiGeocoding"
    KEY_GEOCODER_ENABLED = "isGeocoderEnabled"
    KEY_LAST_LATITUDE = "lastLatitude"
    KEY_LAST_LONGITUDE = "lastLongitude"

    DEFAULT_METRIC = False
    DEFAULT_API_GEOCODING = False
    DEFAULT_GEOCODER_ENABLED = True

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        signal: Optional[SettingsChangedSignal] = None,
    ) -> None:
        self.store = store if store is not None else InMemoryStore()
        self.signal = signal or SettingsChangedSignal()

    def get_metric(self) -> bool:
        return bool(self.store.get(self.KEY_METRIC, self.DEFAULT_METRIC))

    def set_metric(self, flag: bool) -> None:
        self._set_flag(self.KEY_METRIC, flag, self.get_metric())

    def get_api_geocoding(self) -> bool:
        return bool(self.store.get(self.KEY_API_GEOCODING, self.DEFAULT_API_GEOCODING))

    def set_api_geocoding(self, flag: bool) -> None:
        self._set_flag(self.KEY_API_GEOCODING, flag, self.get_api_geocoding())

    def get_geocoder_enabled(self) -> bool:
        return bool(self.store.get(self.KEY_GEOCODER_ENABLED, self.DEFAULT_GEOCODER_ENABLED))

    def set_geocoder_enabled(self, flag: bool) -> None:
        self._set_flag(self.KEY_GEOCODER_ENABLED, flag, self.get_geocoder_enabled())

    def get_last_coordinate(self) -> Optional[Coordinate]:
        lat = self.store.get(self.KEY_LAST_LATITUDE)
        lon = self.store.get(self.KEY_LAST_LONGITUDE)
        if lat is None or lon is None:
            return None
        return Coordinate(latitude=float(lat), longitude=float(lon))

    def set_last_coordinate(self, coordinate: Optional[Coordinate]) -> None:
        if coordinate is None:
            self.store.remove(self.KEY_LAST_LATITUDE)
            self.store.remove(self.KEY_LAST_LONGITUDE)
            return
        self.store.set(self.KEY_LAST_LATITUDE, coordinate.latitude)
        self.store.set(self.KEY_LAST_LONGITUDE, coordinate.longitude)

    def snapshot(self) -> ResolutionSettings:
        return ResolutionSettings(
            use_metric_units=self.get_metric(),
            prefer_api_geocoding=self.get_api_geocoding(),
            geocoding_enabled=self.get_geocoder_enabled(),
        )

    def notify_changed(self) -> None:
        self.signal.send()

    def _set_flag(self, key: str, flag: bool, previous: bool) -> None:
        self.store.set(key, bool(flag))
        if bool(flag) != previous:
            logger.debug("Setting %s changed to %s", key, flag)
            self.notify_changed()


def as_snapshot(settings) -> ResolutionSettings:
    """Return a frozen snapshot for either a snapshot or a live store."""

    if isinstance(settings, ResolutionSettings):
        return settings
    if isinstance(settings, SettingsStore):
        return settings.snapshot()
    raise TypeError(f"Unsupported settings object: {type(settings).__name__}")


__all__ = ["SettingsStore", "SettingsChangedSignal", "as_snapshot"]
