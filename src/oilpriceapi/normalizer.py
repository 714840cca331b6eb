"""Interpretation of the API's ``{status, data}`` success envelope."""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from oilpriceapi.errors import ResponseFormatError


class EnvelopeShape(str, Enum):
    """Which kind of payload a success envelope carries."""

    PRICE_LIST = "price_list"  # data.prices: historical / listing endpoints
    SINGLE_PRICE = "single_price"  # data.price: latest price for one commodity
    RAW = "raw"  # anything else, returned unchanged


def classify_envelope(envelope: Any) -> Tuple[EnvelopeShape, Any]:
    """Return the envelope's shape and the payload to hand back to callers."""
    if not isinstance(envelope, dict):
        raise ResponseFormatError(f"Expected a JSON object envelope, got {type(envelope).__name__}")
    data = envelope.get("data")
    if data is None:
        raise ResponseFormatError("Response envelope has no data payload")

    if isinstance(data, dict):
        prices = data.get("prices")
        if isinstance(prices, list):
            return EnvelopeShape.PRICE_LIST, prices
        if "price" in data:
            return EnvelopeShape.SINGLE_PRICE, [data]
    return EnvelopeShape.RAW, data


def normalize_envelope(envelope: Any) -> Any:
    """Shortcut for callers that only need the payload."""
    _, payload = classify_envelope(envelope)
    return payload
