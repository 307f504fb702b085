"""Abstract store for the product -> supplier association."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SupplierAssignmentRepository(ABC):
    """Which supplier replenishes which product.

    Kept apart from the Product aggregate: associations are created,
    overwritten and removed explicitly.
    """

    @abstractmethod
    def supplier_for(self, product_id: str) -> str | None:
        """Return the supplier id configured for a product, or None."""

    @abstractmethod
    def assign(self, product_id: str, supplier_id: str) -> None:
        """Associate a product with a supplier (last write wins)."""

    @abstractmethod
    def unassign(self, product_id: str) -> None:
        """Remove a product's association; no-op when there is none."""

    @abstractmethod
    def list_all(self) -> dict[str, str]:
        """Return a copy of every association."""
