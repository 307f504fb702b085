"""ReplenishmentOrder aggregate: a request to a supplier for more stock.

Lifecycle: PENDING -> SENT -> RECEIVED.  No state is ever revisited and
stock may only be incremented for an order that is being received.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import InvalidStateError, ValidationError
from ims.domain.model.product import Product
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import require_positive, require_text


class OrderStatus(Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    RECEIVED = "RECEIVED"


@dataclass(frozen=True)
class OrderItem:
    """``quantity`` units of ``product`` requested from the supplier."""

    product: Product
    quantity: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReplenishmentOrder:
    """Aggregate root for replenishment orders.

    Use ``ReplenishmentOrder.create()`` for new orders and
    ``ReplenishmentOrder.reconstitute()`` for orders read back from
    storage.  Items are kept in insertion order, keyed by product id;
    adding the same product twice sums the quantities.
    """

    id: str
    supplier: Supplier
    created_at: datetime
    status: OrderStatus = OrderStatus.PENDING
    sent_at: datetime | None = None
    received_at: datetime | None = None
    _items: dict[str, OrderItem] = field(default_factory=dict, init=False, repr=False)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create(supplier: Supplier) -> ReplenishmentOrder:
        if supplier is None:
            raise ValidationError("Supplier is required")
        return ReplenishmentOrder(
            id=f"P-{uuid.uuid4()}",
            supplier=supplier,
            created_at=_now(),
        )

    @staticmethod
    def reconstitute(
        order_id: str,
        supplier: Supplier,
        created_at: datetime,
        status: OrderStatus,
        sent_at: datetime | None = None,
        received_at: datetime | None = None,
        items: Iterable[tuple[Product, int]] = (),
    ) -> ReplenishmentOrder:
        """Rebuild a persisted order without re-running lifecycle rules."""
        order = ReplenishmentOrder(
            id=require_text(order_id, "Order id"),
            supplier=supplier,
            created_at=created_at,
            status=status,
            sent_at=sent_at,
            received_at=received_at,
        )
        for product, quantity in items:
            order._merge(product, quantity)
        return order

    # --- Items ----------------------------------------------------------------

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return tuple(self._items.values())

    @property
    def quantities(self) -> dict[str, int]:
        """Copy of ``{product_id: quantity}`` in insertion order."""
        return {pid: item.quantity for pid, item in self._items.items()}

    @property
    def is_empty(self) -> bool:
        return not self._items

    def add_product(self, product: Product, quantity: int) -> None:
        """Request *quantity* more units of *product*.

        Only PENDING orders accept new items.
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot add items to order {self.id} — current status is "
                f"{self.status.value}, expected PENDING"
            )
        if product is None:
            raise ValidationError("Order item requires a product")
        if product.is_bundle:
            raise ValidationError(
                f"Bundle '{product.id}' cannot be ordered; order its components instead"
            )
        self._merge(product, quantity)

    # --- State transitions ----------------------------------------------------

    def mark_sent(self) -> None:
        """Transition PENDING -> SENT."""
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot send order {self.id} — current status is "
                f"{self.status.value}, expected PENDING"
            )
        if self.is_empty:
            raise InvalidStateError(f"Cannot send order {self.id} without items")
        self.status = OrderStatus.SENT
        self.sent_at = _now()

    def mark_received(self) -> None:
        """Transition SENT -> RECEIVED.

        Stock increments must happen *before* calling this (coordinated by
        the application handler).
        """
        if self.status != OrderStatus.SENT:
            raise InvalidStateError(
                f"Cannot receive order {self.id} — current status is "
                f"{self.status.value}, expected SENT"
            )
        if self.is_empty:
            raise InvalidStateError(f"Cannot receive order {self.id} without items")
        self.status = OrderStatus.RECEIVED
        self.received_at = _now()

    # --- Internal helpers -----------------------------------------------------

    def _merge(self, product: Product, quantity: int) -> None:
        require_positive(quantity)
        existing = self._items.get(product.id)
        if existing is not None:
            quantity += existing.quantity
            product = existing.product
        self._items[product.id] = OrderItem(product, quantity)
