"""Application service: Receive Order use cases (single and bulk).

Receiving coordinates two aggregates: every ordered product gains the
ordered quantity, then the order moves to RECEIVED.  All preconditions
are checked before the first product is touched.
"""

from __future__ import annotations

import logging

from ims.application.dto import BatchFailure, BatchOutcome, OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidStateError,
)
from ims.domain.model.replenishment_order import OrderStatus
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.service.hydration import OrderHydrator

logger = logging.getLogger(__name__)


class ReceiveOrderHandler:

    def __init__(self, orders: OrderHydrator, product_repo: ProductRepository) -> None:
        self._orders = orders
        self._product_repo = product_repo

    def handle(self, order_id: str) -> OrderDTO:
        """Add the ordered stock to every product and mark the order RECEIVED.

        Steps:
        1. Load the complete order (fail if not found).
        2. Require SENT and every item to reference an existing product.
        3. Increment and persist each product's stock.
        4. Transition the order and persist its header.
        """
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        if order.status != OrderStatus.SENT:
            raise InvalidStateError(
                f"Cannot receive order {order.id} — current status is "
                f"{order.status.value}, expected SENT"
            )
        missing = [item.product.id for item in order.items if item.product.is_placeholder]
        if missing:
            raise EntityNotFoundError(
                f"Order {order.id} references unknown product(s): {', '.join(missing)}"
            )

        for item in order.items:
            item.product.add_stock(item.quantity)
            self._product_repo.save(item.product)

        order.mark_received()
        self._orders.store(order)

        logger.info("Order %s received (%d item(s))", order.id, len(order.items))
        return order_to_dto(order)


class ReceiveAllSentHandler:

    def __init__(self, orders: OrderHydrator, product_repo: ProductRepository) -> None:
        self._orders = orders
        self._receive = ReceiveOrderHandler(orders, product_repo)

    def handle(self) -> BatchOutcome:
        """Receive every SENT order that has items, continuing past failures."""
        succeeded = 0
        failures: list[BatchFailure] = []
        for order in self._orders.list_all():
            if order.status != OrderStatus.SENT or order.is_empty:
                continue
            try:
                self._receive.handle(order.id)
            except DomainException as exc:
                logger.warning("Could not receive order %s: %s", order.id, exc)
                failures.append(BatchFailure(order.id, str(exc)))
            else:
                succeeded += 1
        return BatchOutcome(succeeded=succeeded, failures=failures)
