"""Application service: Create Replenishment Order use case."""

from __future__ import annotations

import logging

from ims.application.dto import OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.replenishment_order import ReplenishmentOrder
from ims.domain.repository.supplier_repository import SupplierRepository
from ims.domain.service.hydration import OrderHydrator

logger = logging.getLogger(__name__)


class CreateReplenishmentOrderHandler:

    def __init__(self, orders: OrderHydrator, supplier_repo: SupplierRepository) -> None:
        self._orders = orders
        self._supplier_repo = supplier_repo

    def handle(self, supplier_id: str) -> OrderDTO:
        """Open a new, empty PENDING order for a supplier."""
        supplier = self._supplier_repo.get_by_id(supplier_id)
        if supplier is None:
            raise EntityNotFoundError(f"Supplier '{supplier_id}' not found")

        order = ReplenishmentOrder.create(supplier)
        self._orders.store(order)

        logger.info("Created order %s for supplier %s", order.id, supplier.id)
        return order_to_dto(order)
