"""Application service: Auto-Replenishment use case.

For a product below its minimum stock with a configured supplier, a new
PENDING order is opened for that supplier holding one item of
``stock_minimum - stock_current`` units.  Each triggering product gets
its own order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ims.application.dto import OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.product import Product
from ims.domain.model.replenishment_order import ReplenishmentOrder
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)
from ims.domain.repository.supplier_repository import SupplierRepository
from ims.domain.service.hydration import OrderHydrator
from ims.domain.service.replenishment_policy import ReplenishmentPolicy

logger = logging.getLogger(__name__)


class AutoReplenishHandler:

    def __init__(
        self,
        orders: OrderHydrator,
        product_repo: ProductRepository,
        supplier_repo: SupplierRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._orders = orders
        self._product_repo = product_repo
        self._supplier_repo = supplier_repo
        self._policy = ReplenishmentPolicy(assignment_repo)

    def handle_product(self, product_id: str) -> OrderDTO | None:
        """Replenish one product if needed; None when nothing was ordered."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return self._replenish(product)

    def handle_products(self, product_ids: Iterable[str]) -> list[OrderDTO]:
        wanted = set(product_ids)
        return self._replenish_each(p for p in self._product_repo.list_all() if p.id in wanted)

    def handle_all(self) -> list[OrderDTO]:
        """Apply the per-product rule to the whole catalog."""
        return self._replenish_each(self._product_repo.list_all())

    # --- Internal helpers -----------------------------------------------------

    def _replenish_each(self, products: Iterable[Product]) -> list[OrderDTO]:
        """Best-effort: a product whose supplier is missing is skipped."""
        created = []
        for product in products:
            try:
                dto = self._replenish(product)
            except EntityNotFoundError as exc:
                logger.warning("Skipping auto-replenishment of %s: %s", product.id, exc)
                continue
            if dto is not None:
                created.append(dto)
        return created

    def _replenish(self, product: Product) -> OrderDTO | None:
        plan = self._policy.plan_for(product)
        if plan is None:
            return None

        supplier = self._supplier_repo.get_by_id(plan.supplier_id)
        if supplier is None:
            raise EntityNotFoundError(
                f"Supplier '{plan.supplier_id}' of product '{product.id}' not found"
            )

        order = ReplenishmentOrder.create(supplier)
        order.add_product(product, plan.quantity)
        self._orders.store(order)

        logger.info(
            "Auto-replenishment: order %s for %d x %s from %s",
            order.id, plan.quantity, product.id, supplier.id,
        )
        return order_to_dto(order)
