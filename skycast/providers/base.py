from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Base provider error."""


class TransportFailure(ProviderError):
    """Raised when bytes could not be obtained from the remote endpoint."""


class DecodeFailure(ProviderError):
    """Raised when a payload does not match the expected shape."""


class InvalidInput(ProviderError, ValueError):
    """Raised when a request cannot be built from the given arguments."""


class PermissionDenied(ProviderError):
    """Raised when a device capability is unavailable to the app."""


@dataclass
class RequestConfig:
    # None leaves the transport default in place.
    timeout: Optional[float] = None


class HttpProvider:
    """Base class for the OpenWeather HTTP endpoints.

    Every failure to obtain a response, including non-2xx statuses, surfaces
    as :class:`TransportFailure`; unparseable bodies surface as
    :class:`DecodeFailure`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            raise TransportFailure(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise TransportFailure("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise TransportFailure("request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DecodeFailure("invalid json") from exc


__all__ = [
    "HttpProvider",
    "ProviderError",
    "TransportFailure",
    "DecodeFailure",
    "InvalidInput",
    "PermissionDenied",
    "RequestConfig",
]
