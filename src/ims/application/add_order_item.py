"""Application service: Add Order Item use case."""

from __future__ import annotations

import logging

from ims.application.dto import OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.service.hydration import OrderHydrator

logger = logging.getLogger(__name__)


class AddOrderItemHandler:

    def __init__(self, orders: OrderHydrator, product_repo: ProductRepository) -> None:
        self._orders = orders
        self._product_repo = product_repo

    def handle(self, order_id: str, product_id: str, quantity: int) -> OrderDTO:
        """Add *quantity* units of a product to a PENDING order.

        Repeating a product sums the quantities.
        """
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        order.add_product(product, quantity)
        self._orders.store(order)

        logger.info("Order %s: added %d x %s", order.id, quantity, product.id)
        return order_to_dto(order)
