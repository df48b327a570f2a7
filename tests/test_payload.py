"""Tests for request body decoding."""

import pytest

from product_api.exceptions import InvalidPayloadError
from product_api.schemas.product import decode_product_payload


def test_decodes_product_fields():
    payload = decode_product_payload(b'{"name": "Laptop", "price": 1500.5, "quantity": 10}')

    assert payload.name == "Laptop"
    assert payload.price == 1500.5
    assert payload.quantity == 10


def test_integer_price_is_a_number():
    payload = decode_product_payload(b'{"name": "Pen", "price": 2, "quantity": 1}')

    assert payload.price == 2.0


def test_id_and_unknown_keys_are_ignored():
    payload = decode_product_payload(
        b'{"id": 5, "sku": "X-1", "name": "Pen", "price": 2.5, "quantity": 1}'
    )

    assert payload.model_dump() == {"name": "Pen", "price": 2.5, "quantity": 1}


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"{",
        b'"a string"',
        b'{"price": 1.0, "quantity": 1}',
        b'{"name": 12, "price": 1.0, "quantity": 1}',
        b'{"name": "Pen", "price": "1.0", "quantity": 1}',
        b'{"name": "Pen", "price": 1.0, "quantity": false}',
        b'{"name": "Pen", "price": NaN, "quantity": 1}',
        b'{"name": "Pen", "price": Infinity, "quantity": 1}',
        b'{"name": "Pen", "price": 1e999, "quantity": 1}',
        b'{"name": "Pen", "price": 1.0, "quantity": 9223372036854775808}',
    ],
)
def test_rejects_malformed_bodies(raw):
    with pytest.raises(InvalidPayloadError) as exc_info:
        decode_product_payload(raw)

    assert exc_info.value.message == "Invalid request payload"
    assert exc_info.value.context["errors"]
