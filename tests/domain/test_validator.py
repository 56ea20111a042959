"""Tests for the fail-fast field rules."""

import math

import pytest
from core.exceptions import ValidationError
from core.models import ItemPayload
from core.validator import (
    INTEGER_MESSAGE,
    NEGATIVE_MESSAGE,
    NUMERIC_MESSAGE,
    REQUIRED_MESSAGE,
    ensure_valid,
    validate,
    validate_all,
)


def _payload(**overrides):
    raw = {
        "name": "Widget",
        "sku": "wd-1",
        "category": "Tools",
        "quantity": 5,
        "min_stock": 10,
        "price": 9.99,
    }
    raw.update(overrides)
    return ItemPayload.from_input(raw)


class TestPayloadNormalization:
    def test_text_is_trimmed_and_collapsed(self):
        payload = _payload(name="  Big   red\twidget ", category=" Tools ")
        assert payload.name == "Big red widget"
        assert payload.category == "Tools"

    def test_sku_is_upper_cased(self):
        assert _payload(sku=" ab-1 ").sku == "AB-1"

    def test_numeric_strings_are_parsed(self):
        payload = _payload(quantity="7", min_stock=" 2 ", price="3.5")
        assert (payload.quantity, payload.min_stock, payload.price) == (7.0, 2.0, 3.5)

    def test_camel_case_min_stock_is_accepted(self):
        payload = ItemPayload.from_input({"name": "a", "sku": "b", "category": "c", "minStock": 4})
        assert payload.min_stock == 4.0

    @pytest.mark.parametrize("value", ["", "abc", None, True, [1]])
    def test_unusable_numbers_become_nan(self, value):
        assert math.isnan(_payload(quantity=value).quantity)


class TestValidate:
    def test_clean_payload_passes(self):
        assert validate(_payload()) == ""

    @pytest.mark.parametrize("field", ["name", "sku", "category"])
    def test_required_fields(self, field):
        assert validate(_payload(**{field: "   "})) == REQUIRED_MESSAGE

    def test_required_takes_precedence_over_every_other_rule(self):
        payload = _payload(name="", sku="X" * 50, quantity="nope", min_stock=1.5, price=-1)
        assert validate(payload) == REQUIRED_MESSAGE

    def test_name_length(self):
        assert validate(_payload(name="n" * 80)) == ""
        assert validate(_payload(name="n" * 81)) == "Name cannot exceed 80 characters."

    def test_sku_length(self):
        assert validate(_payload(sku="s" * 31)) == "SKU cannot exceed 30 characters."

    def test_category_length(self):
        assert validate(_payload(category="c" * 41)) == "Category cannot exceed 40 characters."

    def test_lengths_are_checked_name_first(self):
        assert validate(_payload(name="n" * 81, sku="s" * 31)) == "Name cannot exceed 80 characters."

    def test_length_before_numeric(self):
        assert validate(_payload(category="c" * 41, price="x")) == "Category cannot exceed 40 characters."

    @pytest.mark.parametrize("field", ["quantity", "min_stock", "price"])
    def test_numeric(self, field):
        assert validate(_payload(**{field: "x"})) == NUMERIC_MESSAGE

    def test_infinite_is_not_numeric(self):
        assert validate(_payload(price=float("inf"))) == NUMERIC_MESSAGE

    def test_integer(self):
        assert validate(_payload(quantity=2.5)) == INTEGER_MESSAGE
        assert validate(_payload(min_stock="1.1")) == INTEGER_MESSAGE

    def test_price_may_have_decimals(self):
        assert validate(_payload(price=0.5)) == ""

    def test_integer_before_sign(self):
        assert validate(_payload(quantity=-1.5)) == INTEGER_MESSAGE

    @pytest.mark.parametrize("field", ["quantity", "min_stock", "price"])
    def test_non_negative(self, field):
        assert validate(_payload(**{field: -1})) == NEGATIVE_MESSAGE

    def test_zero_is_allowed(self):
        assert validate(_payload(quantity=0, min_stock=0, price=0)) == ""


class TestValidateAll:
    def test_reports_every_failure_in_order(self):
        payload = _payload(name="", sku="s" * 31, quantity=1.5, price=-2)
        assert validate_all(payload) == [
            REQUIRED_MESSAGE,
            "SKU cannot exceed 30 characters.",
            INTEGER_MESSAGE,
            NEGATIVE_MESSAGE,
        ]

    def test_skips_number_rules_once_numeric_fails(self):
        assert validate_all(_payload(quantity="x", price=-1)) == [NUMERIC_MESSAGE]

    def test_clean_payload(self):
        assert validate_all(_payload()) == []


class TestEnsureValid:
    def test_returns_payload(self):
        payload = _payload()
        assert ensure_valid(payload) is payload

    def test_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(_payload(price=-1))
        assert exc_info.value.message == NEGATIVE_MESSAGE
