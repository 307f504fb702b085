"""Abstract repository for the ReplenishmentOrder aggregate.

Order headers and order items live in separate stores.  Headers are
upserted; item rows are append-only and summed per product on read.
Reading returns *header-only* orders (placeholder supplier, no items);
``OrderHydrator`` completes them.
"""

from __future__ import annotations

from abc import abstractmethod

from ims.domain.model.replenishment_order import ReplenishmentOrder
from ims.domain.repository.entity_store import EntityStore


class OrderRepository(EntityStore[ReplenishmentOrder]):

    @abstractmethod
    def append_item(self, order_id: str, product_id: str, quantity: int) -> None:
        """Append one item row.  No duplicate check is made here."""

    @abstractmethod
    def item_quantities(self, order_id: str) -> dict[str, int]:
        """Return ``{product_id: quantity}`` for an order, summed per product."""
