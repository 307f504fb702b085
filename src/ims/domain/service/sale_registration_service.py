"""Domain service: Sale Registration.

Registering a sale touches several aggregates (every product sold, every
ingredient inside a sold bundle, and the new Sale), and the flat-file
stores offer no transactions.  The two-phase approach (validate-then-
mutate) ensures stock is never left partially decremented when one line
of the sale cannot be covered.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.product import Product, ensure_available
from ims.domain.model.sale import Sale, SaleItemRequest, SaleLine
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class SaleRegistrationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
    ) -> None:
        self._product_repo = product_repo
        self._sale_repo = sale_repo

    def register(self, requests: Sequence[SaleItemRequest]) -> Sale:
        """Validate every requested line, then decrement stock and record the sale.

        Uses a two-phase approach:
          Phase 1 — resolve and validate: every product must exist and the
                    ingredient stock must cover the *sum* of what all lines
                    need.  Fails before any mutation.
          Phase 2 — mutate and persist: deduct stock line by line, snapshot
                    unit prices, append the Sale, save the touched products.
        """
        if not requests:
            raise ValidationError("Sale must contain at least one item")

        # Phase 1: resolve every product and validate running totals
        catalog = {p.id: p for p in self._product_repo.list_all()}
        resolved: list[tuple[Product, int]] = []
        needed: dict[str, tuple[Product, int]] = {}

        for request in requests:
            product = catalog.get(request.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{request.product_id}' not found")
            for pid, (ingredient, units) in product.stock_requirements(request.quantity).items():
                _, already = needed.get(pid, (ingredient, 0))
                needed[pid] = (ingredient, already + units)
            resolved.append((product, request.quantity))

        ensure_available(needed.values())

        # Phase 2: mutate and persist
        lines: list[SaleLine] = []
        for product, quantity in resolved:
            product.deduct_stock(quantity)
            lines.append(SaleLine(product, quantity, product.price()))

        sale = Sale.create(lines)
        self._sale_repo.save(sale)

        for ingredient, _ in needed.values():
            self._product_repo.save(ingredient)

        logger.info(
            "Registered sale %s: %d line(s), total %s",
            sale.id, len(sale.lines), sale.total,
        )
        return sale
