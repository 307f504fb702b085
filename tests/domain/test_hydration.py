"""Unit tests for OrderHydrator and SaleHydrator."""

import logging
from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import InvalidStateError
from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.replenishment_order import OrderStatus, ReplenishmentOrder
from ims.domain.model.sale import Sale, SaleLine
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import Money
from ims.domain.repository.sale_repository import SaleHeader
from ims.domain.service.hydration import OrderHydrator, SaleHydrator
from tests.fakes import (
    FakeOrderRepository,
    FakeProductRepository,
    FakeSaleRepository,
    FakeSupplierRepository,
)


def _pan(stock=3):
    return Product.ingredient("PAN", "Pan", stock, 5, UnitOfMeasure.UNIT, Money.of("0.50"))


def _supplier():
    return Supplier("S1", "Panaderia Sol", "sol@example.com")


def _setup():
    supplier = _supplier()
    products = FakeProductRepository([_pan()])
    suppliers = FakeSupplierRepository([supplier])
    orders = FakeOrderRepository()
    return OrderHydrator(orders, products, suppliers), orders, products, suppliers


class TestOrderHydratorStore:

    def test_store_appends_items_once(self):
        hydrator, orders, products, _ = _setup()
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(products.get_by_id("PAN"), 2)

        hydrator.store(order)
        hydrator.store(order)

        assert orders.item_rows == [(order.id, "PAN", 2)]

    def test_store_appends_only_the_difference(self):
        hydrator, orders, products, _ = _setup()
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(products.get_by_id("PAN"), 2)
        hydrator.store(order)
        order.add_product(products.get_by_id("PAN"), 3)
        hydrator.store(order)

        assert orders.item_rows == [(order.id, "PAN", 2), (order.id, "PAN", 3)]
        assert orders.item_quantities(order.id) == {"PAN": 5}

    def test_store_refuses_to_shrink(self):
        hydrator, orders, products, _ = _setup()
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(products.get_by_id("PAN"), 2)
        orders.append_item(order.id, "PAN", 9)

        with pytest.raises(InvalidStateError, match="cannot shrink"):
            hydrator.store(order)


class TestOrderHydratorRead:

    def test_round_trip_resolves_live_entities(self):
        hydrator, _, products, _ = _setup()
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(products.get_by_id("PAN"), 2)
        order.mark_sent()
        hydrator.store(order)

        loaded = hydrator.get_by_id(order.id)

        assert loaded.id == order.id
        assert loaded.status == OrderStatus.SENT
        assert loaded.sent_at == order.sent_at
        assert loaded.supplier.name == "Panaderia Sol"
        assert loaded.quantities == {"PAN": 2}
        assert loaded.items[0].product is products.get_by_id("PAN")

    def test_missing_product_becomes_placeholder(self, caplog):
        hydrator, _, products, _ = _setup()
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(products.get_by_id("PAN"), 2)
        hydrator.store(order)
        products.delete("PAN")

        with caplog.at_level(logging.WARNING):
            loaded = hydrator.list_all()[0]

        assert loaded.items[0].product.is_placeholder
        assert loaded.quantities == {"PAN": 2}
        assert "unknown product 'PAN'" in caplog.text

    def test_missing_supplier_keeps_header_placeholder(self):
        hydrator, _, _, suppliers = _setup()
        order = ReplenishmentOrder.create(_supplier())
        hydrator.store(order)
        suppliers.delete("S1")

        loaded = hydrator.get_by_id(order.id)
        assert loaded.supplier.id == "S1"
        assert loaded.supplier.name == "N/A"

    def test_unknown_order_is_none(self):
        hydrator, _, _, _ = _setup()
        assert hydrator.get_by_id("P-nope") is None


class TestSaleHydrator:

    def test_round_trip_keeps_snapshot_price(self):
        pan = _pan(stock=10)
        products = FakeProductRepository([pan])
        sales = FakeSaleRepository()
        sale = Sale.create([SaleLine(pan, 2, Money.of("0.50"))])
        sales.save(sale)
        pan.update_cost(Money.of("0.80"))

        loaded = SaleHydrator(sales, products).get_by_id(sale.id)

        assert loaded.id == sale.id
        assert loaded.timestamp == sale.timestamp
        assert loaded.lines[0].product is pan
        assert loaded.total == Money.of("1.00")

    def test_missing_product_priced_at_stored_price(self):
        pan = _pan(stock=10)
        sales = FakeSaleRepository()
        sales.save(Sale.create([SaleLine(pan, 2, Money.of("0.50"))]))

        loaded = SaleHydrator(sales, FakeProductRepository()).list_all()[0]

        assert loaded.lines[0].product.is_placeholder
        assert loaded.lines[0].product.price() == Money.of("0.50")

    def test_header_without_lines_is_skipped(self, caplog):
        sales = FakeSaleRepository()
        sales.headers.append(SaleHeader("V-orphan", datetime.now(timezone.utc)))

        with caplog.at_level(logging.WARNING):
            assert SaleHydrator(sales, FakeProductRepository()).list_all() == []
        assert "V-orphan" in caplog.text
