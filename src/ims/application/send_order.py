"""Application service: Send Order use cases (single and bulk)."""

from __future__ import annotations

import logging

from ims.application.dto import BatchFailure, BatchOutcome, OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import DomainException, EntityNotFoundError
from ims.domain.model.replenishment_order import OrderStatus
from ims.domain.service.hydration import OrderHydrator

logger = logging.getLogger(__name__)


class SendOrderHandler:

    def __init__(self, orders: OrderHydrator) -> None:
        self._orders = orders

    def handle(self, order_id: str) -> OrderDTO:
        """Transition a PENDING order with items to SENT."""
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        order.mark_sent()
        self._orders.store(order)

        logger.info("Order %s sent to %s", order.id, order.supplier.id)
        return order_to_dto(order)


class SendAllPendingHandler:

    def __init__(self, orders: OrderHydrator) -> None:
        self._orders = orders
        self._send = SendOrderHandler(orders)

    def handle(self) -> BatchOutcome:
        """Send every PENDING order that has items.

        Best effort: an order that fails is recorded in the outcome and
        the remaining orders are still attempted.
        """
        succeeded = 0
        failures: list[BatchFailure] = []
        for order in self._orders.list_all():
            if order.status != OrderStatus.PENDING or order.is_empty:
                continue
            try:
                self._send.handle(order.id)
            except DomainException as exc:
                logger.warning("Could not send order %s: %s", order.id, exc)
                failures.append(BatchFailure(order.id, str(exc)))
            else:
                succeeded += 1
        return BatchOutcome(succeeded=succeeded, failures=failures)
