"""Reconciliation of header and detail records into complete aggregates.

Orders and sales are persisted as a header store plus an independent
detail store, and detail rows only carry foreign ids.  Every read path
that surfaces a complete order or sale goes through a hydrator which:

1. reads the header records,
2. groups the detail records belonging to each header,
3. re-resolves every foreign id against the *live* product and supplier
   stores, substituting a placeholder when the referenced entity is gone
   so that reads never fail outright.

The low-level stores stay generic; this module is the only place that
knows how the pieces fit together.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import InvalidStateError
from ims.domain.model.product import Product
from ims.domain.model.replenishment_order import ReplenishmentOrder
from ims.domain.model.sale import Sale, SaleLine
from ims.domain.model.supplier import Supplier
from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.sale_repository import SaleHeader, SaleRepository
from ims.domain.repository.supplier_repository import SupplierRepository

logger = logging.getLogger(__name__)


class OrderHydrator:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        supplier_repo: SupplierRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._supplier_repo = supplier_repo

    # --- Read side ------------------------------------------------------------

    def list_all(self) -> list[ReplenishmentOrder]:
        headers = self._order_repo.list_all()
        if not headers:
            return []
        catalog = self._catalog()
        suppliers = {s.id: s for s in self._supplier_repo.list_all()}
        return [self._hydrate(h, catalog, suppliers) for h in headers]

    def get_by_id(self, order_id: str) -> ReplenishmentOrder | None:
        header = self._order_repo.get_by_id(order_id)
        if header is None:
            return None
        supplier = self._supplier_repo.get_by_id(header.supplier.id)
        suppliers = {supplier.id: supplier} if supplier is not None else {}
        return self._hydrate(header, self._catalog(), suppliers)

    # --- Write side -----------------------------------------------------------

    def store(self, order: ReplenishmentOrder) -> None:
        """Persist the header, then append only the item quantities not yet stored.

        Item rows are append-only, so the detail store is scanned first and
        only the difference per product is written.  Storing the same order
        twice therefore never duplicates its items.
        """
        self._order_repo.save(order)
        stored = self._order_repo.item_quantities(order.id)
        for product_id, quantity in order.quantities.items():
            delta = quantity - stored.get(product_id, 0)
            if delta < 0:
                raise InvalidStateError(
                    f"Order {order.id} already stores {stored[product_id]} of "
                    f"'{product_id}', cannot shrink to {quantity}"
                )
            if delta > 0:
                self._order_repo.append_item(order.id, product_id, delta)

    # --- Internal helpers -----------------------------------------------------

    def _catalog(self) -> dict[str, Product]:
        return {p.id: p for p in self._product_repo.list_all()}

    def _hydrate(
        self,
        header: ReplenishmentOrder,
        catalog: dict[str, Product],
        suppliers: dict[str, Supplier],
    ) -> ReplenishmentOrder:
        supplier = suppliers.get(header.supplier.id)
        if supplier is None:
            logger.warning(
                "Order %s references unknown supplier '%s'",
                header.id, header.supplier.id,
            )
            supplier = header.supplier

        items: list[tuple[Product, int]] = []
        for product_id, quantity in self._order_repo.item_quantities(header.id).items():
            product = catalog.get(product_id)
            if product is None:
                logger.warning(
                    "Order %s references unknown product '%s'", header.id, product_id
                )
                product = Product.placeholder(product_id)
            items.append((product, quantity))

        return ReplenishmentOrder.reconstitute(
            order_id=header.id,
            supplier=supplier,
            created_at=header.created_at,
            status=header.status,
            sent_at=header.sent_at,
            received_at=header.received_at,
            items=items,
        )


class SaleHydrator:

    def __init__(
        self,
        sale_repo: SaleRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._sale_repo = sale_repo
        self._product_repo = product_repo

    def list_all(self) -> list[Sale]:
        headers = self._sale_repo.list_headers()
        if not headers:
            return []
        catalog = {p.id: p for p in self._product_repo.list_all()}
        grouped: dict[str, list] = {}
        for record in self._sale_repo.list_lines():
            grouped.setdefault(record.sale_id, []).append(record)

        sales: list[Sale] = []
        for header in headers:
            sale = self._hydrate(header, grouped.get(header.id, []), catalog)
            if sale is not None:
                sales.append(sale)
        return sales

    def get_by_id(self, sale_id: str) -> Sale | None:
        header = self._sale_repo.get_header(sale_id)
        if header is None:
            return None
        catalog = {p.id: p for p in self._product_repo.list_all()}
        return self._hydrate(header, self._sale_repo.lines_for(sale_id), catalog)

    @staticmethod
    def _hydrate(
        header: SaleHeader,
        records: list,
        catalog: dict[str, Product],
    ) -> Sale | None:
        if not records:
            logger.warning("Sale %s has no stored lines; skipping", header.id)
            return None
        lines = []
        for record in records:
            product = catalog.get(record.product_id)
            if product is None:
                product = Product.placeholder(record.product_id, record.unit_price)
            lines.append(SaleLine(product, record.quantity, record.unit_price))
        return Sale.reconstitute(header.id, header.timestamp, lines)
