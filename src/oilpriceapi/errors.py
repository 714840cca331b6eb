"""Error types raised by the Oil Price API client."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional


class OilPriceAPIError(Exception):
    """Base error for every failure raised by the client.

    Attributes:
        message: Human readable description.
        status_code: HTTP status of the failed response, when there was one.
        code: Stable machine-readable error code.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class AuthenticationError(OilPriceAPIError):
    """Raised on HTTP 401."""

    def __init__(self, message: str = "Invalid API key") -> None:
        super().__init__(message, 401, "AUTHENTICATION_ERROR")


class RateLimitError(OilPriceAPIError):
    """Raised on HTTP 429. ``retry_after`` is the server cooldown in seconds."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Optional[int] = None) -> None:
        super().__init__(message, 429, "RATE_LIMIT_ERROR")
        self.retry_after = retry_after


class NotFoundError(OilPriceAPIError):
    """Raised on HTTP 404."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, 404, "NOT_FOUND_ERROR")


class ServerError(OilPriceAPIError):
    """Raised on HTTP 500, 502, 503 and 504."""

    def __init__(self, message: str = "Internal server error", status_code: int = 500) -> None:
        super().__init__(message, status_code, "SERVER_ERROR")


class RequestTimeoutError(OilPriceAPIError, TimeoutError):
    """Raised when a single attempt exceeds the configured timeout."""

    def __init__(self, timeout_ms: int, message: str = "Request timeout") -> None:
        super().__init__(f"{message} ({timeout_ms}ms)", None, "TIMEOUT_ERROR")
        self.timeout_ms = timeout_ms


class ResponseFormatError(OilPriceAPIError):
    """Raised when a successful response does not carry the expected envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, status_code, "INVALID_RESPONSE")


class RequestCancelledError(OilPriceAPIError):
    """Raised when the caller's cancel event is set before the request finishes."""

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(message, None, "CANCELLED")


class ConfigError(OilPriceAPIError, ValueError):
    """Raised when client configuration is invalid or incomplete."""

    def __init__(self, message: str) -> None:
        super().__init__(message, None, "CONFIG_ERROR")


SERVER_ERROR_STATUSES = frozenset({500, 502, 503, 504})


def _extract_message(body: str) -> Optional[str]:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_retry_after(value: Any) -> Optional[int]:
    """Parse a ``Retry-After`` header given in whole seconds."""
    if value is None:
        return None
    try:
        seconds = int(str(value).strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def error_from_response(
    status: int,
    reason: str,
    body: str,
    headers: Mapping[str, str] | None = None,
) -> OilPriceAPIError:
    """Build the typed error matching a non-2xx response."""
    message = _extract_message(body) or f"HTTP {status}: {reason}"

    if status == 401:
        return AuthenticationError(message)
    if status == 404:
        return NotFoundError(message)
    if status == 429:
        retry_after = parse_retry_after((headers or {}).get("Retry-After"))
        return RateLimitError(message, retry_after)
    if status in SERVER_ERROR_STATUSES:
        return ServerError(message, status)
    return OilPriceAPIError(message, status, "HTTP_ERROR")
