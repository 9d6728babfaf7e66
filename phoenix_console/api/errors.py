"""Error types surfaced by the agent API layer."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class ApiError(Exception):
    """A failed call to one of the agent services."""

    def __init__(
        self,
        message: str,
        *,
        service: Optional[str] = None,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        kind: str = "http",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.service = service
        self.endpoint = endpoint
        self.status_code = status_code
        self.kind = kind

    @property
    def unreachable(self) -> bool:
        return self.kind in {"network", "timeout"}

    def __str__(self) -> str:
        return self.message


class SchemaMismatch(ApiError):
    """A response body that does not fit the shape the caller expects."""

    def __init__(self, message: str, **kwargs: object) -> None:
        kwargs.setdefault("kind", "schema")
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ValidationFailure(ValueError):
    """Required form input was missing; raised before any request is sent."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(f"Please fill in all required fields: {', '.join(self.missing)}")
