"""Unit tests for the ReplenishmentPolicy domain service."""

from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.value_objects import Money
from ims.domain.service.replenishment_policy import ReplenishmentPlan, ReplenishmentPolicy
from tests.fakes import FakeSupplierAssignmentRepository


def _pan(stock, minimum):
    return Product.ingredient("PAN", "Pan", stock, minimum, UnitOfMeasure.UNIT, Money.of("0.50"))


class TestPlanFor:

    def test_plans_the_shortfall(self):
        policy = ReplenishmentPolicy(FakeSupplierAssignmentRepository({"PAN": "S1"}))
        assert policy.plan_for(_pan(3, 5)) == ReplenishmentPlan("PAN", "S1", 2)

    def test_nothing_when_at_minimum(self):
        policy = ReplenishmentPolicy(FakeSupplierAssignmentRepository({"PAN": "S1"}))
        assert policy.plan_for(_pan(5, 5)) is None

    def test_nothing_without_supplier(self):
        policy = ReplenishmentPolicy(FakeSupplierAssignmentRepository())
        assert policy.plan_for(_pan(0, 5)) is None

    def test_bundles_are_never_planned(self):
        bundle = Product.bundle("COMBO", "Combo", [(_pan(0, 5), 1)])
        policy = ReplenishmentPolicy(FakeSupplierAssignmentRepository({"COMBO": "S1"}))
        assert policy.plan_for(bundle) is None
