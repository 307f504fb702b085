"""Integration tests for the RegisterSale and sale history use cases."""

import pytest

from ims.application.dto import SaleItemInput
from ims.application.register_sale import RegisterSaleHandler
from ims.application.show_sales import ListSalesHandler, ShowSaleHandler
from ims.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.value_objects import Money
from ims.domain.service.hydration import SaleHydrator
from tests.fakes import FakeProductRepository, FakeSaleRepository


def _setup():
    pan = Product.ingredient("PAN", "Pan", 10, 0, UnitOfMeasure.UNIT, Money.of("0.50"))
    leche = Product.ingredient("LECHE", "Leche", 6, 0, UnitOfMeasure.LITER, Money.of("1.20"))
    desayuno = Product.bundle("DESAYUNO", "Desayuno", [(pan, 2), (leche, 1)])
    products = FakeProductRepository([pan, leche, desayuno])
    sales = FakeSaleRepository()
    return RegisterSaleHandler(products, sales), products, sales


class TestRegisterSale:

    def test_returns_priced_lines(self):
        handler, _, _ = _setup()
        dto = handler.handle([SaleItemInput("DESAYUNO", 2), SaleItemInput("PAN", 1)])

        assert dto.id.startswith("V-")
        assert [(l.product_id, l.quantity, l.unit_price, l.subtotal) for l in dto.lines] == [
            ("DESAYUNO", 2, "2.20", "4.40"),
            ("PAN", 1, "0.50", "0.50"),
        ]
        assert dto.total == "4.90"

    def test_updates_stock(self):
        handler, products, _ = _setup()
        handler.handle([SaleItemInput("DESAYUNO", 2)])
        assert products.get_by_id("PAN").stock_current == 6
        assert products.get_by_id("LECHE").stock_current == 4

    def test_invalid_quantity_rejected(self):
        handler, _, sales = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            handler.handle([SaleItemInput("PAN", 0)])
        assert sales.headers == []

    def test_overcommitted_sale_changes_nothing(self):
        handler, products, sales = _setup()
        with pytest.raises(InsufficientStockError, match="LECHE"):
            handler.handle([SaleItemInput("DESAYUNO", 4), SaleItemInput("LECHE", 3)])
        assert products.get_by_id("PAN").stock_current == 10
        assert products.get_by_id("LECHE").stock_current == 6
        assert sales.headers == []


class TestSaleHistory:

    def test_list_and_show(self):
        handler, products, sales = _setup()
        first = handler.handle([SaleItemInput("PAN", 2)])
        second = handler.handle([SaleItemInput("LECHE", 1)])
        hydrator = SaleHydrator(sales, products)

        listed = ListSalesHandler(hydrator).handle()
        assert [s.id for s in listed] == [first.id, second.id]
        assert ShowSaleHandler(hydrator).handle(second.id).total == "1.20"

    def test_show_unknown_sale_rejected(self):
        _, products, sales = _setup()
        with pytest.raises(EntityNotFoundError, match="V-nope"):
            ShowSaleHandler(SaleHydrator(sales, products)).handle("V-nope")
