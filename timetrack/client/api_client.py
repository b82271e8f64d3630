import logging
from typing import Any, Dict, Optional

import httpx

from timetrack.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed API call.

    Non-2xx responses keep their status code and JSON body; transport
    failures (no response at all) use status code 0.
    """

    def __init__(self, message: str, status_code: int, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_conflict(self) -> bool:
        """409, e.g. a timer is already running or the resource has linked entries"""
        return self.status_code == 409


class ApiClient:
    """Thin JSON wrapper over an httpx.Client scoped to the API prefix"""

    def __init__(self, http: httpx.Client, base_path: str = settings.API_V1_STR):
        self.http = http
        self.base_path = base_path.rstrip("/")

    @classmethod
    def from_url(
        cls, base_url: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None
    ) -> "ApiClient":
        """Client owning its own httpx.Client; use as a context manager to close it"""
        return cls(httpx.Client(base_url=base_url, timeout=timeout, transport=transport))

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{self.base_path}{url}", **kwargs)
        except httpx.HTTPError as exc:
            # No response at all: connection refused, timeout, protocol error
            logger.debug(f"{method} {url} failed: {exc!r}")
            raise ApiError(str(exc) or "Network error", 0) from exc

        if response.is_error:
            message = f"Request failed: {response.reason_phrase}"
            payload: Dict[str, Any] = {}
            try:
                payload = response.json()
            except ValueError:
                pass
            if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
                message = payload["detail"]
            logger.debug(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code, payload if isinstance(payload, dict) else None)

        if response.status_code == 204 or not response.content:
            return None
        if response.headers.get("content-type", "").startswith("application/json"):
            return response.json()
        return response.text

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", url, params=params)

    def post(self, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", url, json=body)

    def put(self, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", url, json=body)

    def delete(self, url: str) -> Any:
        return self.request("DELETE", url)
