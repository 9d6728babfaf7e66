"""Thin requests wrapper shared by every agent client."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import requests
import structlog

from phoenix_console.api.errors import ApiError, SchemaMismatch
from phoenix_console.config import DEFAULT_TIMEOUT_SECONDS

logger = structlog.get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]


class StaticTokenProvider:
    def __init__(self, token: Optional[str]) -> None:
        self._token = token

    def __call__(self) -> Optional[str]:
        return self._token


class EnvTokenProvider:
    def __init__(self, variable: str = "PHOENIX_AUTH_TOKEN") -> None:
        self.variable = variable

    def __call__(self) -> Optional[str]:
        return os.environ.get(self.variable, "").strip() or None


class FileTokenProvider:
    """Read the persisted auth token; the file is never written here."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __call__(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8").strip() or None
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.warning("auth-token-unreadable", path=str(self.path), error=str(exc))
            return None


def chain_providers(*providers: TokenProvider) -> TokenProvider:
    """Return the first non-empty token offered by ``providers``."""

    def _provider() -> Optional[str]:
        for provider in providers:
            token = provider()
            if token:
                return token
        return None

    return _provider


class HttpClient:
    """Issue JSON requests against one agent base URL.

    Failures are logged and raised as :class:`ApiError`; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
        service: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_provider = token_provider
        self.session = session or requests.Session()
        self.service = service

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: Optional[Any] = None) -> Any:
        return self._request("POST", path, json=payload)

    def put(self, path: str, payload: Optional[Any] = None) -> Any:
        return self._request("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def upload(
        self,
        path: str,
        files: Mapping[str, Any],
        data: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """POST a multipart body; ``files`` maps form fields to file tuples."""
        return self._request("POST", path, files=files, data=data)

    def probe(self, path: str = "/health") -> float:
        """GET ``path`` and return the round trip in milliseconds."""
        start = time.monotonic()
        self._request("GET", path)
        return round((time.monotonic() - start) * 1000, 1)

    def _headers(self, multipart: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if not multipart:
            headers["Content-Type"] = "application/json"
        token = self.token_provider() if self.token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
        files: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, str]] = None,
    ) -> Any:
        endpoint = f"/{path.lstrip('/')}"
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                data=data,
                headers=self._headers(multipart=files is not None),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            message = (
                exc.response.text
                if exc.response is not None and exc.response.text
                else str(exc)
            )
            logger.error(
                "api-http-error",
                service=self.service,
                endpoint=endpoint,
                method=method,
                status_code=status_code,
                message=message,
            )
            raise ApiError(
                f"HTTP {status_code}: {message}",
                service=self.service,
                endpoint=endpoint,
                status_code=status_code,
                kind="http",
            ) from exc
        except requests.Timeout as exc:
            logger.error(
                "api-timeout",
                service=self.service,
                endpoint=endpoint,
                method=method,
                timeout=self.timeout,
            )
            raise ApiError(
                f"Request to {self.service or self.base_url} timed out after {self.timeout}s",
                service=self.service,
                endpoint=endpoint,
                kind="timeout",
            ) from exc
        except requests.RequestException as exc:
            logger.error(
                "api-request-error",
                service=self.service,
                endpoint=endpoint,
                method=method,
                error=str(exc),
            )
            raise ApiError(
                f"Unable to reach {self.service or self.base_url}: {exc}",
                service=self.service,
                endpoint=endpoint,
                kind="network",
            ) from exc

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error(
                "api-invalid-json",
                service=self.service,
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise SchemaMismatch(
                f"{self.service or self.base_url} returned a non-JSON response",
                service=self.service,
                endpoint=endpoint,
                status_code=response.status_code,
            ) from exc
