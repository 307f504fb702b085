"""Domain service: Replenishment Policy.

Decides whether a product needs restocking and from whom.  The policy
only *plans*; raising the order is the application layer's job.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.product import Product
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)


@dataclass(frozen=True)
class ReplenishmentPlan:
    product_id: str
    supplier_id: str
    quantity: int


class ReplenishmentPolicy:

    def __init__(self, assignments: SupplierAssignmentRepository) -> None:
        self._assignments = assignments

    def plan_for(self, product: Product) -> ReplenishmentPlan | None:
        """Return what to order for *product*, or None if nothing is needed.

        Nothing is ordered while ``stock_current >= stock_minimum`` (always
        the case for bundles) or when no supplier is configured.
        """
        if product.stock_current >= product.stock_minimum:
            return None
        supplier_id = self._assignments.supplier_for(product.id)
        if supplier_id is None:
            return None
        return ReplenishmentPlan(
            product_id=product.id,
            supplier_id=supplier_id,
            quantity=product.stock_minimum - product.stock_current,
        )
