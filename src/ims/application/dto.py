"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Prices are formatted
strings; timestamps are ISO-8601 text.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SaleItemInput:
    """Input: one product requested at the till."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class SaleLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "2.50"
    subtotal: str


@dataclass(frozen=True)
class SaleDTO:
    id: str
    timestamp: str
    lines: list[SaleLineDTO]
    total: str


@dataclass(frozen=True)
class ComponentDTO:
    product_id: str
    product_name: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    kind: str
    price: str
    available_units: int
    stock_current: int
    stock_minimum: int
    unit: str | None = None
    supplier_id: str | None = None
    components: list[ComponentDTO] = field(default_factory=list)


@dataclass(frozen=True)
class SupplierDTO:
    id: str
    name: str
    contact: str


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    id: str
    supplier_id: str
    supplier_name: str
    status: str
    items: list[OrderItemDTO]
    created_at: str
    sent_at: str | None = None
    received_at: str | None = None


@dataclass(frozen=True)
class BatchFailure:
    order_id: str
    message: str


@dataclass(frozen=True)
class BatchOutcome:
    """Result of a best-effort bulk operation.

    ``succeeded`` counts the orders processed; orders that failed are
    listed in ``failures`` and did not stop the rest of the batch.
    """

    succeeded: int
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)
