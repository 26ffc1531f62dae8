"""Unit tests for Money, Quantity and stock-level parsing."""

from decimal import Decimal

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, Quantity, parse_stock_level


class TestMoney:

    def test_of_accepts_fractional_strings(self):
        assert Money.of("12.50").amount == Decimal("12.50")

    def test_of_strips_whitespace(self):
        assert Money.of(" 99.99 ").amount == Decimal("99.99")

    def test_default_currency_is_peso(self):
        assert str(Money.of("250")) == "₱250.00"

    def test_usd_symbol(self):
        assert str(Money.of("5", "USD")) == "$5.00"

    def test_zero_is_allowed(self):
        assert Money.of("0") == Money.zero()

    @pytest.mark.parametrize("raw", ["-1", "abc", "", "NaN", "Infinity", None, True, [1], object()])
    def test_rejects_invalid_amounts(self, raw):
        with pytest.raises(ValidationError):
            Money.of(raw)

    def test_rejects_non_decimal_amount(self):
        with pytest.raises(ValidationError, match="Decimal"):
            Money(1.5)  # type: ignore[arg-type]

    def test_addition_and_multiplication(self):
        total = Money.of("10.25") * 3 + Money.of("0.25")
        assert total == Money.of("31.00")

    def test_cannot_mix_currencies(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1") + Money.of("1", "USD")

    def test_multiply_rejects_bool(self):
        with pytest.raises(TypeError):
            Money.of("1") * True

    def test_rounded_is_half_up(self):
        assert Money.of("2.345").rounded() == Money.of("2.35")
        assert Money.of("2.344").rounded() == Money.of("2.34")


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -2])
    def test_rejects_non_positive(self, value):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(value)

    @pytest.mark.parametrize("value", [1.5, "2", True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError, match="integer"):
            Quantity(value)


class TestParseStockLevel:

    @pytest.mark.parametrize("raw, expected", [(7, 7), ("7", 7), (" 12 ", 12), (0, 0), ("0", 0)])
    def test_accepts_integers(self, raw, expected):
        assert parse_stock_level(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "-5", -1, "2.5", 2.0, None, False, [3]])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(ValidationError, match="invalid quantity"):
            parse_stock_level(raw)
