"""Client configuration read from the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_BASE_URL = "https://api.openweathermap.org"


class ImproperlyConfigured(RuntimeError):
    """Raised when a required configuration value is missing or invalid."""


def env(name: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    source = os.environ if environ is None else environ
    value = source.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @property
    def weather_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/data/2.5/weather"

    @property
    def direct_geocoding_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/geo/1.0/direct"

    @property
    def zip_geocoding_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/geo/1.0/zip"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        raw_timeout = env("SKYCAST_HTTP_TIMEOUT", "", environ)
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError as exc:
            raise ImproperlyConfigured(f"SKYCAST_HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        return cls(
            api_key=env("SKYCAST_OPENWEATHER_API_KEY", environ=environ),
            base_url=env("SKYCAST_OPENWEATHER_BASE_URL", DEFAULT_BASE_URL, environ),
            timeout=timeout,
        )


__all__ = ["ClientConfig", "ImproperlyConfigured", "env", "DEFAULT_BASE_URL"]
