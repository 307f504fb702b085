"""Application service: replenishment order queries."""

from __future__ import annotations

from ims.application.dto import OrderDTO
from ims.application.mapping import order_to_dto
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.replenishment_order import OrderStatus
from ims.domain.service.hydration import OrderHydrator


class ShowOrderHandler:

    def __init__(self, orders: OrderHydrator) -> None:
        self._orders = orders

    def handle(self, order_id: str) -> OrderDTO:
        order = self._orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, orders: OrderHydrator) -> None:
        self._orders = orders

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        orders = self._orders.list_all()
        if status is not None:
            try:
                wanted = OrderStatus(status.strip().upper())
            except ValueError:
                raise ValidationError(f"Unknown order status '{status}'") from None
            orders = [o for o in orders if o.status == wanted]
        return [order_to_dto(o) for o in orders]
