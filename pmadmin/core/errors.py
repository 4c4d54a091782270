"""Error taxonomy shared by the API client and the data-access engines."""
from __future__ import annotations

from typing import Any


class AdminError(Exception):
    """Base class for failures raised by the dashboard data layer."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "")
        self.message = message


class ValidationError(AdminError):
    """Raised when required input is missing or malformed; no request is issued."""


class TransportError(AdminError):
    """Raised when a request failed before any response was obtained."""


class ServerError(AdminError):
    """Raised when the backend answered but reported a failure."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        payload: Any | None = None,
    ) -> None:
        self.server_message = message
        self.status_code = status_code
        self.payload = payload
        if not message and status_code is not None:
            message = f"Request failed with status {status_code}"
        super().__init__(message)


class UnreachableResourceError(AdminError):
    """Raised when a user-supplied link did not pass the reachability probe."""

    def __init__(self, url: str, message: str = "The URL does not exist.") -> None:
        super().__init__(message)
        self.url = url


def resolve_error_message(exc: BaseException, fallback: str) -> str:
    """Pick the user-facing message for ``exc``.

    The server-supplied message wins, then the exception's own description,
    then ``fallback``.
    """

    server_message = getattr(exc, "server_message", None)
    if isinstance(server_message, str) and server_message.strip():
        return server_message
    description = str(exc).strip()
    if description:
        return description
    return fallback


__all__ = [
    "AdminError",
    "ServerError",
    "TransportError",
    "UnreachableResourceError",
    "ValidationError",
    "resolve_error_message",
]
