"""Unit tests for the Product aggregate (ingredients and bundles)."""

import pytest

from ims.domain.exceptions import InsufficientStockError, ValidationError
from ims.domain.model.product import Product, ProductKind, UnitOfMeasure
from ims.domain.model.value_objects import Money


def _ingredient(pid="PAN", stock=10, minimum=0, cost="0.50"):
    return Product.ingredient(
        id=pid,
        name=pid.title(),
        stock_current=stock,
        stock_minimum=minimum,
        unit=UnitOfMeasure.UNIT,
        cost_per_unit=Money.of(cost),
    )


class TestIngredient:

    def test_factory_builds_ingredient(self):
        p = _ingredient(stock=7, minimum=3)
        assert p.kind is ProductKind.INGREDIENT
        assert not p.is_bundle
        assert p.stock_current == 7
        assert p.stock_minimum == 3
        assert p.price() == Money.of("0.50")
        assert p.available_units() == 7

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="Product id is required"):
            _ingredient(pid=" ")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _ingredient(stock=-1)

    def test_unknown_unit_rejected(self):
        with pytest.raises(ValidationError, match="Unknown unit"):
            Product.ingredient("X", "X", 0, 0, "BOX", Money.of("1"))

    def test_deduct_stock(self):
        p = _ingredient(stock=10)
        p.deduct_stock(4)
        assert p.stock_current == 6

    def test_deduct_more_than_stock_fails_and_leaves_stock(self):
        p = _ingredient(stock=5)
        with pytest.raises(InsufficientStockError) as exc_info:
            p.deduct_stock(6)
        assert exc_info.value.product_id == "PAN"
        assert exc_info.value.required == 6
        assert exc_info.value.available == 5
        assert p.stock_current == 5

    def test_deduct_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _ingredient().deduct_stock(0)

    def test_add_stock(self):
        p = _ingredient(stock=3)
        p.add_stock(2)
        assert p.stock_current == 5

    def test_catalog_maintenance(self):
        p = _ingredient()
        p.rename("Pan frances")
        p.set_stock_minimum(8)
        p.update_cost(Money.of("0.75"))
        assert p.name == "Pan frances"
        assert p.stock_minimum == 8
        assert p.price() == Money.of("0.75")

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _ingredient().set_stock_minimum(-1)


class TestBundle:

    def _burger(self, pan_stock=10, carne_stock=10):
        pan = _ingredient("PAN", stock=pan_stock, cost="0.50")
        carne = _ingredient("CARNE", stock=carne_stock, cost="2.00")
        burger = Product.bundle("BURGER", "Burger", [(pan, 2), (carne, 1)])
        return burger, pan, carne

    def test_price_is_sum_of_components(self):
        burger, _, _ = self._burger()
        assert burger.price() == Money.of("3.00")

    def test_bundle_holds_no_own_stock(self):
        burger, _, _ = self._burger()
        assert burger.kind is ProductKind.BUNDLE
        assert burger.stock_current == 0
        assert burger.stock_minimum == 0

    def test_available_units_limited_by_scarcest_component(self):
        burger, _, _ = self._burger(pan_stock=7, carne_stock=10)
        assert burger.available_units() == 3

    def test_empty_bundle_has_no_units(self):
        assert Product.bundle("EMPTY", "Empty").available_units() == 0

    def test_empty_bundle_cannot_be_deducted(self):
        empty = Product.bundle("EMPTY", "Empty")
        with pytest.raises(InsufficientStockError) as exc_info:
            empty.deduct_stock(3)
        assert exc_info.value.product_id == "EMPTY"
        assert exc_info.value.required == 3
        assert exc_info.value.available == 0

    def test_deduct_propagates_to_components(self):
        burger, pan, carne = self._burger()
        burger.deduct_stock(2)
        assert pan.stock_current == 6
        assert carne.stock_current == 8

    def test_deduct_is_all_or_nothing(self):
        burger, pan, carne = self._burger(pan_stock=10, carne_stock=1)
        with pytest.raises(InsufficientStockError, match="CARNE"):
            burger.deduct_stock(2)
        assert pan.stock_current == 10
        assert carne.stock_current == 1

    def test_nested_bundle_aggregates_repeated_ingredient(self):
        burger, pan, _ = self._burger()
        combo = Product.bundle("COMBO", "Combo", [(burger, 1), (pan, 1)])
        requirements = combo.stock_requirements(2)
        assert requirements["PAN"][1] == 6
        assert requirements["CARNE"][1] == 2
        assert requirements["PAN"][0] is pan

    def test_add_stock_to_bundle_rejected(self):
        burger, _, _ = self._burger()
        with pytest.raises(ValidationError, match="holds no stock"):
            burger.add_stock(1)

    def test_self_inclusion_rejected(self):
        burger, _, _ = self._burger()
        with pytest.raises(ValidationError, match="cannot contain itself"):
            burger.add_component(burger, 1)

    def test_cycle_rejected(self):
        burger, _, _ = self._burger()
        combo = Product.bundle("COMBO", "Combo", [(burger, 1)])
        with pytest.raises(ValidationError, match="cannot contain itself"):
            burger.add_component(combo, 1)

    def test_component_on_ingredient_rejected(self):
        pan = _ingredient()
        with pytest.raises(ValidationError, match="is not a bundle"):
            pan.add_component(_ingredient("CARNE"), 1)

    def test_uses_is_transitive(self):
        burger, _, _ = self._burger()
        combo = Product.bundle("COMBO", "Combo", [(burger, 1)])
        assert combo.uses("CARNE")
        assert not combo.uses("QUESO")

    def test_component_price_change_is_visible(self):
        burger, pan, _ = self._burger()
        pan.update_cost(Money.of("1.00"))
        assert burger.price() == Money.of("4.00")


class TestPlaceholder:

    def test_placeholder_is_flagged(self):
        p = Product.placeholder("GONE")
        assert p.is_placeholder
        assert p.name == "N/A"
        assert p.price() == Money.zero()

    def test_placeholder_keeps_given_cost(self):
        assert Product.placeholder("GONE", Money.of("3")).price() == Money.of("3")
