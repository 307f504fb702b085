"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, require_positive, require_text


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00"
        assert str(Money.of("9.5")) == "9.50"

    def test_plain_string_keeps_precision(self):
        assert Money.of("0.125").to_plain_string() == "0.125"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") <= Money.of("10")

    def test_zero(self):
        assert Money.zero() == Money.of("0")


# ── Guards ───────────────────────────────────────────────────────────────────


class TestGuards:

    def test_require_positive_accepts_positive(self):
        assert require_positive(3) == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_require_positive_rejects_non_positive(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            require_positive(value)

    def test_require_positive_rejects_bool(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            require_positive(True)

    def test_require_positive_uses_label(self):
        with pytest.raises(ValidationError, match="Component quantity must be positive"):
            require_positive(0, "Component quantity")

    def test_require_text_strips(self):
        assert require_text("  PAN ", "Product id") == "PAN"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_text_rejects_blank(self, value):
        with pytest.raises(ValidationError, match="Product id is required"):
            require_text(value, "Product id")
