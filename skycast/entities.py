from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from .schemas import WeatherSnapshot


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class ByCoordinate:
    coordinate: Coordinate


@dataclass(frozen=True)
class ByPlace:
    """Free-text place query.

    A name made only of decimal digits is a postal code, not a place name.
    """

    name: str
    state_code: Optional[str] = None
    country_code: Optional[str] = None

    @property
    def is_postal_code(self) -> bool:
        return self.name.isascii() and self.name.isdecimal()

    def place_string(self) -> str:
        parts = [self.name]
        if self.state_code:
            parts.append(self.state_code)
        if self.country_code:
            parts.append(self.country_code)
        return ",".join(parts)


LocationQuery = Union[ByCoordinate, ByPlace]


@dataclass(frozen=True)
class GeocodeResult:
    name: str
    coordinate: Coordinate
    country_code: str
    local_names: Optional[Mapping[str, str]] = None
    state_code: Optional[str] = None


@dataclass(frozen=True)
class PostalLookupResult:
    postal_code: str
    name: str
    coordinate: Coordinate
    country_code: str


@dataclass(frozen=True)
class ResolutionSettings:
    """Settings captured at the start of a resolution operation."""

    use_metric_units: bool = False
    prefer_api_geocoding: bool = False
    geocoding_enabled: bool = True

    @property
    def units(self) -> str:
        return "metric" if self.use_metric_units else "imperial"


class PermissionStatus(enum.Enum):
    NOT_DETERMINED = "not_determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TrackerState:
    last_known_coordinate: Optional[Coordinate] = None
    is_fetching: bool = False
    permission_denied: bool = False
    current_snapshot: Optional["WeatherSnapshot"] = None
    last_persisted_coordinate: Optional[Coordinate] = None
    last_error: Optional[str] = None


__all__ = [
    "Coordinate",
    "ByCoordinate",
    "ByPlace",
    "LocationQuery",
    "GeocodeResult",
    "PostalLookupResult",
    "ResolutionSettings",
    "PermissionStatus",
    "TrackerState",
]
