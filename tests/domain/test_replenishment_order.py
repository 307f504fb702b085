"""Unit tests for the ReplenishmentOrder aggregate and its state machine."""

from datetime import datetime, timezone

import pytest

from ims.domain.exceptions import InvalidStateError, ValidationError
from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.replenishment_order import OrderStatus, ReplenishmentOrder
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import Money


def _supplier():
    return Supplier("S1", "Panaderia Sol", "sol@example.com")


def _pan():
    return Product.ingredient("PAN", "Pan", 3, 5, UnitOfMeasure.UNIT, Money.of("0.50"))


class TestCreate:

    def test_new_order_is_pending_and_empty(self):
        order = ReplenishmentOrder.create(_supplier())
        assert order.id.startswith("P-")
        assert order.status == OrderStatus.PENDING
        assert order.is_empty
        assert order.sent_at is None

    def test_supplier_required(self):
        with pytest.raises(ValidationError, match="Supplier is required"):
            ReplenishmentOrder.create(None)


class TestItems:

    def test_repeated_product_sums_quantities(self):
        order = ReplenishmentOrder.create(_supplier())
        pan = _pan()
        order.add_product(pan, 2)
        order.add_product(pan, 3)
        assert order.quantities == {"PAN": 5}
        assert len(order.items) == 1

    def test_quantities_is_a_copy(self):
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(_pan(), 2)
        order.quantities["PAN"] = 99
        assert order.quantities == {"PAN": 2}

    def test_non_positive_quantity_rejected(self):
        order = ReplenishmentOrder.create(_supplier())
        with pytest.raises(ValidationError, match="must be positive"):
            order.add_product(_pan(), 0)

    def test_bundle_rejected(self):
        bundle = Product.bundle("COMBO", "Combo", [(_pan(), 1)])
        order = ReplenishmentOrder.create(_supplier())
        with pytest.raises(ValidationError, match="cannot be ordered"):
            order.add_product(bundle, 1)

    @pytest.mark.parametrize("status", [OrderStatus.SENT, OrderStatus.RECEIVED])
    def test_adding_to_non_pending_order_rejected(self, status):
        order = ReplenishmentOrder.reconstitute(
            "P-1", _supplier(), datetime.now(timezone.utc), status, items=[(_pan(), 1)]
        )
        with pytest.raises(InvalidStateError, match="expected PENDING"):
            order.add_product(_pan(), 1)
        assert order.quantities == {"PAN": 1}


class TestTransitions:

    def _order_with_items(self):
        order = ReplenishmentOrder.create(_supplier())
        order.add_product(_pan(), 2)
        return order

    def test_send_stamps_sent_at(self):
        order = self._order_with_items()
        order.mark_sent()
        assert order.status == OrderStatus.SENT
        assert order.sent_at is not None

    def test_send_empty_order_rejected(self):
        order = ReplenishmentOrder.create(_supplier())
        with pytest.raises(InvalidStateError, match="without items"):
            order.mark_sent()
        assert order.status == OrderStatus.PENDING

    def test_send_twice_rejected(self):
        order = self._order_with_items()
        order.mark_sent()
        with pytest.raises(InvalidStateError, match="expected PENDING"):
            order.mark_sent()

    def test_receive_pending_rejected(self):
        order = self._order_with_items()
        with pytest.raises(InvalidStateError, match="expected SENT"):
            order.mark_received()

    def test_receive_is_final(self):
        order = self._order_with_items()
        order.mark_sent()
        order.mark_received()
        assert order.status == OrderStatus.RECEIVED
        assert order.received_at is not None
        with pytest.raises(InvalidStateError):
            order.mark_received()
        with pytest.raises(InvalidStateError):
            order.mark_sent()


class TestReconstitute:

    def test_merges_items_without_state_checks(self):
        created = datetime(2024, 1, 2, tzinfo=timezone.utc)
        pan = _pan()
        order = ReplenishmentOrder.reconstitute(
            "P-7", _supplier(), created, OrderStatus.RECEIVED,
            items=[(pan, 1), (pan, 4)],
        )
        assert order.id == "P-7"
        assert order.created_at == created
        assert order.status == OrderStatus.RECEIVED
        assert order.quantities == {"PAN": 5}
