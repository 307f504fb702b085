"""Flat-file implementation of OrderRepository.

Two files:
- ``orders.csv``     : headers (``id;supplier_id;created_at;status;sent_at;received_at``),
                      upserted by rewriting the whole file
- ``order_items.csv``: items (``order_id;product_id;quantity``), append-only

Reads return header-only orders: the supplier is a placeholder carrying
just the id and the item map is empty.  ``OrderHydrator`` rebuilds the
complete order from both files and the live product/supplier stores.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ims.domain.exceptions import UnsupportedOperationError
from ims.domain.model.replenishment_order import OrderStatus, ReplenishmentOrder
from ims.domain.model.supplier import Supplier
from ims.domain.model.value_objects import require_positive
from ims.domain.repository.order_repository import OrderRepository
from ims.infrastructure.persistence.delimited_file import DelimitedFile

HEADER_COLUMNS = ("id", "supplier_id", "created_at", "status", "sent_at", "received_at")
ITEM_COLUMNS = ("order_id", "product_id", "quantity")


class CsvOrderRepository(OrderRepository):

    def __init__(self, data_dir: Path) -> None:
        self._headers = DelimitedFile(data_dir / "orders.csv", HEADER_COLUMNS)
        self._items = DelimitedFile(data_dir / "order_items.csv", ITEM_COLUMNS)
        self._headers.ensure()
        self._items.ensure()

    # --- OrderRepository interface --------------------------------------------

    def list_all(self) -> list[ReplenishmentOrder]:
        return [self._to_domain(row) for _, row in self._header_rows()]

    def get_by_id(self, entity_id: str) -> ReplenishmentOrder | None:
        for _, row in self._header_rows():
            if row[0] == entity_id:
                return self._to_domain(row)
        return None

    def save(self, entity: ReplenishmentOrder) -> None:
        """Upsert the header row.  Items are never written here."""
        rows = [row for _, row in self._header_rows()]
        replaced = False
        for i, row in enumerate(rows):
            if row[0] == entity.id:
                rows[i] = self._to_row(entity)
                replaced = True
                break
        if not replaced:
            rows.append(self._to_row(entity))
        self._headers.rewrite(rows)

    def delete(self, entity_id: str) -> None:
        raise UnsupportedOperationError("Replenishment orders cannot be deleted")

    def append_item(self, order_id: str, product_id: str, quantity: int) -> None:
        require_positive(quantity)
        self._items.append([[order_id, product_id, str(quantity)]])

    def item_quantities(self, order_id: str) -> dict[str, int]:
        quantities: dict[str, int] = {}
        for number, row in self._items.read_rows():
            if len(row) < len(ITEM_COLUMNS):
                self._items.skip(number, "expected order_id;product_id;quantity")
                continue
            if row[0] != order_id:
                continue
            try:
                quantity = int(row[2])
            except ValueError:
                self._items.skip(number, f"invalid quantity {row[2]!r}")
                continue
            if quantity <= 0:
                self._items.skip(number, f"quantity must be positive, got {quantity}")
                continue
            quantities[row[1]] = quantities.get(row[1], 0) + quantity
        return quantities

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: ReplenishmentOrder) -> list[str]:
        return [
            order.id,
            order.supplier.id,
            order.created_at.isoformat(),
            order.status.value,
            order.sent_at.isoformat() if order.sent_at else "",
            order.received_at.isoformat() if order.received_at else "",
        ]

    @staticmethod
    def _to_domain(row: list[str]) -> ReplenishmentOrder:
        return ReplenishmentOrder.reconstitute(
            order_id=row[0],
            supplier=Supplier.placeholder(row[1]),
            created_at=datetime.fromisoformat(row[2]),
            status=OrderStatus(row[3]),
            sent_at=datetime.fromisoformat(row[4]) if row[4] else None,
            received_at=datetime.fromisoformat(row[5]) if row[5] else None,
        )

    # --- File helpers ---------------------------------------------------------

    def _header_rows(self):
        """Yield well-formed header rows; malformed ones are skipped and logged."""
        for number, row in self._headers.read_rows():
            if len(row) < len(HEADER_COLUMNS):
                self._headers.skip(number, f"expected {len(HEADER_COLUMNS)} columns")
                continue
            try:
                OrderStatus(row[3])
                for stamp in (row[2], row[4], row[5]):
                    if stamp:
                        datetime.fromisoformat(stamp)
            except ValueError as exc:
                self._headers.skip(number, str(exc))
                continue
            yield number, row
