"""Unit tests for the Sale aggregate."""

from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.sale import Sale, SaleItemRequest, SaleLine
from ims.domain.model.value_objects import Money


def _pan():
    return Product.ingredient("PAN", "Pan", 10, 0, UnitOfMeasure.UNIT, Money.of("0.50"))


class TestSaleItemRequest:

    def test_strips_product_id(self):
        assert SaleItemRequest(" PAN ", 2).product_id == "PAN"

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            SaleItemRequest("PAN", 0)

    def test_blank_product_rejected(self):
        with pytest.raises(ValidationError, match="Product id is required"):
            SaleItemRequest("", 1)


class TestSale:

    def test_create_generates_id_and_utc_timestamp(self):
        sale = Sale.create([SaleLine(_pan(), 2, Money.of("0.50"))])
        assert sale.id.startswith("V-")
        assert sale.timestamp.tzinfo is not None

    def test_ids_are_unique(self):
        line = SaleLine(_pan(), 1, Money.of("0.50"))
        assert Sale.create([line]).id != Sale.create([line]).id

    def test_total_uses_snapshot_prices(self):
        pan = _pan()
        sale = Sale.create([SaleLine(pan, 4, Money.of("0.50"))])
        pan.update_cost(Money.of("9.00"))
        assert sale.total == Money.of("2.00")

    def test_empty_sale_rejected(self):
        with pytest.raises(ValidationError, match="at least one line"):
            Sale.create([])

    def test_reconstitute_keeps_id_and_timestamp(self):
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        sale = Sale.reconstitute("V-1", ts, [SaleLine(_pan(), 1, Money.of("0.50"))])
        assert sale.id == "V-1"
        assert sale.timestamp == ts

    def test_lines_are_immutable(self):
        sale = Sale.create([SaleLine(_pan(), 1, Money.of("0.50"))])
        assert isinstance(sale.lines, tuple)

    def test_line_subtotal(self):
        assert SaleLine(_pan(), 3, Money.of("1.25")).subtotal == Money.of("3.75")
