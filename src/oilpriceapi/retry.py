"""Backoff arithmetic and the retry decision."""

from __future__ import annotations

from enum import Enum

import requests

from oilpriceapi.errors import RateLimitError, RequestTimeoutError, ServerError

# Upper bound for server-specified Retry-After waits, in seconds.
MAX_RETRY_AFTER_SECONDS = 300


class RetryStrategy(str, Enum):
    """How the wait between attempts grows."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    FIXED = "fixed"


def calculate_delay(attempt: int, strategy: RetryStrategy | str, base_delay_ms: int) -> int:
    """Return the wait in milliseconds before retry number ``attempt`` (0-based)."""
    strategy = RetryStrategy(strategy)
    if strategy is RetryStrategy.EXPONENTIAL:
        return base_delay_ms * 2**attempt
    if strategy is RetryStrategy.LINEAR:
        return base_delay_ms * (attempt + 1)
    return base_delay_ms


# Transport failures worth another attempt: refused connections, DNS, dropped streams.
# Malformed requests (bad scheme, URL or header) fail the same way every time.
TRANSIENT_TRANSPORT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)


def is_retryable(error: BaseException) -> bool:
    """Timeouts, 5xx, 429 and transient transport failures are retried."""
    if isinstance(error, (RequestTimeoutError, ServerError, RateLimitError)):
        return True
    return isinstance(error, TRANSIENT_TRANSPORT_ERRORS)
