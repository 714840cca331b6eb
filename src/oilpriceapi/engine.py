"""Request execution shared by every resource method.

Each call builds the URL once and then runs up to ``max_retries + 1``
sequential attempts. A failed attempt is turned into a typed error, which is
either raised or followed by a wait (backoff, or the server's Retry-After on
429) and another attempt. Successful bodies go through the envelope
normalizer.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests
from requests import Response

from oilpriceapi.config import ClientConfig
from oilpriceapi.errors import (
    OilPriceAPIError,
    RateLimitError,
    RequestCancelledError,
    RequestTimeoutError,
    ResponseFormatError,
    error_from_response,
)
from oilpriceapi.normalizer import classify_envelope
from oilpriceapi.retry import MAX_RETRY_AFTER_SECONDS, calculate_delay, is_retryable
from oilpriceapi.version import SDK_NAME, SDK_VERSION, build_user_agent

logger = logging.getLogger(__name__)

Transport = Callable[..., Response]


def build_url(base_url: str, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """Join base URL and endpoint and append the non-None query parameters."""
    url = f"{base_url.rstrip('/')}{endpoint}"
    query = {key: str(value) for key, value in (params or {}).items() if value is not None}
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": build_user_agent(),
        "X-SDK-Name": SDK_NAME,
        "X-SDK-Version": SDK_VERSION,
    }


class RequestEngine:
    """Runs requests with timeout, retry and response normalization.

    ``transport`` has the signature of :func:`requests.request` and ``sleep``
    that of :func:`time.sleep`; both can be replaced for tests.

    The per-attempt timeout is passed to ``requests`` as ``timeout=``, which
    bounds the connect phase and each socket read separately. A server that
    keeps trickling bytes can therefore hold one attempt longer than
    ``timeout_ms``.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config
        self._transport = transport or requests.request
        self._sleep = sleep or time.sleep

    def _log(self, message: str, *args: Any) -> None:
        if self.config.debug:
            logger.debug(message, *args)

    def execute(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        method: str = "GET",
        body: Any = None,
        expect_body: bool = True,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        """Send a request and return the normalized payload.

        Raises a subclass of :class:`OilPriceAPIError` when the request
        ultimately fails.
        """
        url = build_url(self.config.base_url, endpoint, params)
        headers = build_headers(self.config.api_key)
        last_attempt = self.config.max_retries
        self._log("Request: %s %s", method, url)

        for attempt in range(last_attempt + 1):
            self._check_cancelled(cancel)
            if attempt > 0:
                self._log("Retry attempt %d/%d", attempt, last_attempt)

            try:
                response = self._attempt(method, url, headers, body)
            except (OilPriceAPIError, requests.exceptions.RequestException) as exc:
                error: Exception = exc
            else:
                return self._read_payload(response, expect_body)

            retryable = is_retryable(error)
            self._log("Request failed: %s (attempt=%d, retryable=%s)", error, attempt, retryable)

            if isinstance(error, RateLimitError) and error.retry_after and error.retry_after > 0:
                if attempt < last_attempt:
                    wait = min(error.retry_after, MAX_RETRY_AFTER_SECONDS)
                    self._log("Rate limited. Waiting %ss", wait)
                    self._wait(wait, cancel)
                    continue

            if not retryable:
                if isinstance(error, OilPriceAPIError):
                    raise error
                raise OilPriceAPIError(f"Request failed: {error}", None, "NETWORK_ERROR") from error
            if attempt == last_attempt:
                if isinstance(error, OilPriceAPIError):
                    raise error
                raise OilPriceAPIError(
                    f"Request failed after {last_attempt + 1} attempts: {error}",
                    None,
                    "NETWORK_ERROR",
                ) from error

            delay_ms = calculate_delay(attempt, self.config.retry_strategy, self.config.retry_delay_ms)
            self._log("Waiting %dms before retry...", delay_ms)
            self._wait(delay_ms / 1000, cancel)

        raise OilPriceAPIError("Unknown error occurred")  # pragma: no cover

    def _attempt(self, method: str, url: str, headers: Dict[str, str], body: Any) -> Response:
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.config.timeout_seconds}
        if body is not None:
            kwargs["json"] = body
        try:
            response = self._transport(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise RequestTimeoutError(self.config.timeout_ms) from exc

        self._log("Response: %s %s", response.status_code, response.reason)
        if not 200 <= response.status_code < 300:
            error = error_from_response(response.status_code, response.reason, response.text, response.headers)
            self._log("Error response: %s", error.message)
            raise error
        return response

    def _read_payload(self, response: Response, expect_body: bool) -> Any:
        if not expect_body:
            return None
        try:
            envelope = json.loads(response.text)
        except ValueError as exc:
            raise ResponseFormatError("Response body is not valid JSON", response.status_code) from exc

        shape, payload = classify_envelope(envelope)
        self._log("Response data received: status=%s shape=%s", envelope.get("status"), shape.value)
        return payload

    def _wait(self, seconds: float, cancel: Optional[threading.Event]) -> None:
        if cancel is None:
            self._sleep(seconds)
        elif cancel.wait(seconds):
            raise RequestCancelledError()

    @staticmethod
    def _check_cancelled(cancel: Optional[threading.Event]) -> None:
        if cancel is not None and cancel.is_set():
            raise RequestCancelledError()
