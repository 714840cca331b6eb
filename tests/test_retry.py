"""Tests for backoff arithmetic and retryability."""

from __future__ import annotations

import pytest
import requests

from oilpriceapi.errors import (
    AuthenticationError,
    NotFoundError,
    OilPriceAPIError,
    RateLimitError,
    RequestCancelledError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
)
from oilpriceapi.retry import RetryStrategy, calculate_delay, is_retryable


@pytest.mark.parametrize(
    "strategy, expected",
    [
        ("exponential", [1000, 2000, 4000]),
        ("linear", [1000, 2000, 3000]),
        ("fixed", [1000, 1000, 1000]),
    ],
)
def test_delay_sequences(strategy: str, expected: list) -> None:
    assert [calculate_delay(attempt, strategy, 1000) for attempt in range(3)] == expected


def test_delay_accepts_enum() -> None:
    assert calculate_delay(3, RetryStrategy.EXPONENTIAL, 250) == 2000


def test_unknown_strategy_is_rejected() -> None:
    with pytest.raises(ValueError):
        calculate_delay(0, "random", 1000)


@pytest.mark.parametrize(
    "error",
    [
        RequestTimeoutError(1000),
        ServerError("boom", 503),
        RateLimitError("slow down"),
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.ConnectTimeout("dns"),
        requests.exceptions.ChunkedEncodingError("stream dropped"),
    ],
)
def test_retryable_errors(error: Exception) -> None:
    assert is_retryable(error)


@pytest.mark.parametrize(
    "error",
    [
        AuthenticationError(),
        NotFoundError(),
        OilPriceAPIError("bad request", 400, "HTTP_ERROR"),
        ResponseFormatError("garbage"),
        RequestCancelledError(),
        ValueError("not a transport error"),
        requests.exceptions.MissingSchema("no scheme"),
        requests.exceptions.InvalidSchema("ftp"),
        requests.exceptions.InvalidURL("bad url"),
        requests.exceptions.InvalidHeader("bad header"),
    ],
)
def test_non_retryable_errors(error: Exception) -> None:
    assert not is_retryable(error)
