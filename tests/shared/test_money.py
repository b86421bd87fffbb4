"""Tests for price parsing and cents conversion."""

from decimal import Decimal

import pytest
from shared.money import format_price, from_cents, parse_price, to_cents


class TestParsePrice:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10.00", Decimal("10.00")),
            ("$10.00", Decimal("10.00")),
            ("R 1,250.50", Decimal("1250.50")),
            (" 35 ", Decimal("35.00")),
            (Decimal("4.5"), Decimal("4.50")),
            (12, Decimal("12.00")),
            (3.75, Decimal("3.75")),
            ("2.005", Decimal("2.01")),
        ],
    )
    def test_accepted_inputs(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", ["", "free", "$", None, True, "-5.00", Decimal("NaN"), [10], "9" * 30])
    def test_rejected_inputs(self, value):
        with pytest.raises(ValueError):
            parse_price(value)


class TestCents:
    def test_to_cents(self):
        assert to_cents("$10.50") == 1050
        assert to_cents(Decimal("0.01")) == 1

    def test_from_cents(self):
        assert from_cents(2500) == Decimal("25.00")
        assert from_cents(0) == Decimal("0.00")

    def test_format_price(self):
        assert format_price(125050) == "$1,250.50"
        assert format_price(999, symbol="R ") == "R 9.99"
