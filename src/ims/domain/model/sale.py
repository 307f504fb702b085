"""Sale aggregate: an immutable record of products sold together."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from ims.domain.exceptions import ValidationError
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, require_positive, require_text


@dataclass(frozen=True)
class SaleItemRequest:
    """Input: one requested line (product id + quantity)."""

    product_id: str
    quantity: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "product_id", require_text(self.product_id, "Product id"))
        require_positive(self.quantity)


@dataclass(frozen=True)
class SaleLine:
    """One sold product with the unit price applied at sale time.

    ``unit_price`` is a snapshot: later price changes of the product do
    not affect recorded sales.
    """

    product: Product
    quantity: int
    unit_price: Money  # locked at sale time

    def __post_init__(self) -> None:
        if self.product is None:
            raise ValidationError("Sale line requires a product")
        require_positive(self.quantity)
        if not isinstance(self.unit_price, Money):
            raise ValidationError("Sale line requires a unit price")

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Sale:
    """Aggregate root for sales.

    Two named constructors: ``Sale.create()`` for a new sale (generates
    id and timestamp) and ``Sale.reconstitute()`` for sales read back
    from storage.  A sale never has an empty line list.
    """

    id: str
    timestamp: datetime
    lines: tuple[SaleLine, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", require_text(self.id, "Sale id"))
        if self.timestamp is None:
            raise ValidationError("Sale timestamp is required")
        lines = tuple(self.lines or ())
        if not lines:
            raise ValidationError("Sale must contain at least one line")
        object.__setattr__(self, "lines", lines)

    @staticmethod
    def create(lines: list[SaleLine]) -> Sale:
        return Sale(
            id=f"V-{uuid.uuid4().hex}",
            timestamp=datetime.now(timezone.utc),
            lines=tuple(lines),
        )

    @staticmethod
    def reconstitute(sale_id: str, timestamp: datetime, lines: list[SaleLine]) -> Sale:
        return Sale(id=sale_id, timestamp=timestamp, lines=tuple(lines))

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result
