from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Union

from ..abstractions import NativeGeocoder
from ..entities import ByPlace, Coordinate, GeocodeResult, PostalLookupResult, ResolutionSettings
from ..providers.base import PermissionDenied
from ..providers.geocoding import OpenWeatherGeocoder
from ..settings import SettingsStore, as_snapshot


CoordinateCallback = Callable[[Optional[Coordinate]], None]


class GeocodingResolver:
    """Turns place names and postal codes into coordinates.

    ``resolve_place`` and ``resolve_postal`` propagate provider errors.
    ``resolve_coordinate_for_query`` never does: every failure is logged and
    reported as ``None``.
    """

    def __init__(
        self,
        *,
        geocoder: OpenWeatherGeocoder,
        native_geocoder: Optional[NativeGeocoder] = None,
        executor: Optional[Executor] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.geocoder = geocoder
        self.native_geocoder = native_geocoder
        self.executor = executor or ThreadPoolExecutor(thread_name_prefix="skycast-geocode")
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def resolve_place(
        self,
        name: str,
        state_code: Optional[str] = None,
        country_code: Optional[str] = None,
        limit: int = 1,
    ) -> List[GeocodeResult]:
        query = ByPlace(name, state_code, country_code).place_string()
        return self.geocoder.direct(query, limit=limit)

    def resolve_postal(self, code: str, country_code: str) -> PostalLookupResult:
        return self.geocoder.postal(code, country_code)

    def resolve_coordinate_for_query(
        self,
        text: str,
        settings: Union[ResolutionSettings, SettingsStore],
        callback: Optional[CoordinateCallback] = None,
    ) -> "Future[Optional[Coordinate]]":
        future = self._start(text, settings)
        result: "Future[Optional[Coordinate]]" = Future()

        def _complete(done: Future) -> None:
            coordinate = self._collapse(done)
            if callback is not None:
                try:
                    callback(coordinate)
                except Exception:
                    self._log.exception("Coordinate callback failed for %r", text)
            result.set_result(coordinate)

        future.add_done_callback(_complete)
        return result

    # Helpers ------------------------------------------------------------
    def _start(self, text: str, settings) -> "Future[Optional[Coordinate]]":
        try:
            snapshot = as_snapshot(settings)
        except TypeError as exc:
            future: "Future[Optional[Coordinate]]" = Future()
            future.set_exception(exc)
            return future
        if snapshot.geocoding_enabled and not snapshot.prefer_api_geocoding:
            return self._resolve_natively(text)
        return self._submit_remote(text)

    def _submit_remote(self, text: str) -> "Future[Optional[Coordinate]]":
        try:
            return self.executor.submit(self._resolve_remotely, text)
        except RuntimeError as exc:
            future: "Future[Optional[Coordinate]]" = Future()
            future.set_exception(exc)
            return future

    def _resolve_remotely(self, text: str) -> Optional[Coordinate]:
        results = self.resolve_place(text)
        if not results:
            self._log.info("No geocoding result for %r", text)
            return None
        return results[0].coordinate

    def _resolve_natively(self, text: str) -> "Future[Optional[Coordinate]]":
        if self.native_geocoder is None:
            future: "Future[Optional[Coordinate]]" = Future()
            future.set_exception(PermissionDenied("native geocoder unavailable"))
            return future
        try:
            return self.native_geocoder.geocode_address(text)
        except Exception as exc:
            future = Future()
            future.set_exception(exc)
            return future

    def _collapse(self, done: Future) -> Optional[Coordinate]:
        if done.cancelled():
            self._log.warning("Coordinate resolution was cancelled")
            return None
        exc = done.exception()
        if exc is not None:
            self._log.warning("Coordinate resolution failed: %s", exc, exc_info=exc)
            return None
        return done.result()


__all__ = ["GeocodingResolver"]
