"""Application service: Register Sale use case.

Delegates the validate-then-apply work to ``SaleRegistrationService``.
When an ``AutoReplenishHandler`` is supplied, every ingredient the sale
drew stock from is checked against its minimum right after the sale.
"""

from __future__ import annotations

import logging

from ims.application.auto_replenish import AutoReplenishHandler
from ims.application.dto import SaleDTO, SaleItemInput
from ims.application.mapping import sale_to_dto
from ims.domain.exceptions import DomainException
from ims.domain.model.sale import SaleItemRequest
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.sale_repository import SaleRepository
from ims.domain.service.sale_registration_service import SaleRegistrationService

logger = logging.getLogger(__name__)


class RegisterSaleHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        auto_replenish: AutoReplenishHandler | None = None,
    ) -> None:
        self._service = SaleRegistrationService(product_repo, sale_repo)
        self._auto_replenish = auto_replenish

    def handle(self, item_inputs: list[SaleItemInput]) -> SaleDTO:
        requests = [SaleItemRequest(s.product_id, s.quantity) for s in item_inputs]
        sale = self._service.register(requests)

        if self._auto_replenish is not None:
            touched: list[str] = []
            for line in sale.lines:
                for product_id in line.product.stock_requirements(line.quantity):
                    if product_id not in touched:
                        touched.append(product_id)
            # the sale is already recorded; a replenishment failure must not undo it
            try:
                self._auto_replenish.handle_products(touched)
            except DomainException as exc:
                logger.warning("Auto-replenishment after sale %s failed: %s", sale.id, exc)

        return sale_to_dto(sale)
