"""Tests for success envelope normalization."""

from __future__ import annotations

import pytest

from oilpriceapi.errors import ResponseFormatError
from oilpriceapi.normalizer import EnvelopeShape, classify_envelope, normalize_envelope


def test_single_price_is_wrapped_in_a_list() -> None:
    data = {"price": 72.5, "code": "WTI_USD", "currency": "USD"}

    shape, payload = classify_envelope({"data": data})

    assert shape is EnvelopeShape.SINGLE_PRICE
    assert payload == [data]


def test_prices_collection_is_returned_unchanged() -> None:
    prices = [{"price": 70.0}, {"price": 71.0}]

    shape, payload = classify_envelope({"status": "success", "data": {"prices": prices, "meta": {}}})

    assert shape is EnvelopeShape.PRICE_LIST
    assert payload is prices


def test_other_payloads_are_returned_raw() -> None:
    data = {"commodities": [{"code": "WTI_USD"}]}
    assert classify_envelope({"status": "success", "data": data}) == (EnvelopeShape.RAW, data)
    assert normalize_envelope({"data": {"alert": {"id": "a1"}}}) == {"alert": {"id": "a1"}}
    assert normalize_envelope({"data": [1, 2]}) == [1, 2]


def test_empty_prices_list() -> None:
    assert normalize_envelope({"data": {"prices": []}}) == []


@pytest.mark.parametrize(
    "envelope",
    [
        None,
        [],
        "text",
        {"status": "success"},
        {"status": "success", "data": None},
    ],
)
def test_malformed_envelopes_raise(envelope: object) -> None:
    with pytest.raises(ResponseFormatError):
        normalize_envelope(envelope)


def test_null_prices_falls_through_to_other_shapes() -> None:
    data = {"prices": None, "commodities": []}
    assert classify_envelope({"status": "success", "data": data}) == (EnvelopeShape.RAW, data)

    single = {"prices": None, "price": 72.5}
    assert classify_envelope({"data": single}) == (EnvelopeShape.SINGLE_PRICE, [single])
