"""Protocols for the device and storage collaborators of the pipeline."""
from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Optional, Protocol

from .entities import Coordinate, PermissionStatus


class KeyValueStore(Protocol):
    """Persisted scalar preferences."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class NativeGeocoder(Protocol):
    """The device's own address-to-coordinate capability."""

    def geocode_address(self, address: str) -> "Future[Optional[Coordinate]]":
        """Resolve ``address``; the future may fail with a provider-specific error."""
        ...


class LocationProvider(Protocol):
    """Device location source.

    Results are not returned from these calls. The provider reports back
    through the tracker's ``on_location_fix``, ``on_location_error`` and
    ``on_authorization_changed`` event methods.
    """

    def authorization_status(self) -> PermissionStatus:
        ...

    def request_authorization(self) -> None:
        ...

    def request_location(self) -> None:
        """Ask for a single position fix."""
        ...


class InMemoryStore:
    """Dict-backed :class:`KeyValueStore` for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[dict] = None) -> None:
        self._values = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


__all__ = ["KeyValueStore", "NativeGeocoder", "LocationProvider", "InMemoryStore"]
