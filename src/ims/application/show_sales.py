"""Application service: sale history queries."""

from __future__ import annotations

from ims.application.dto import SaleDTO
from ims.application.mapping import sale_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.service.hydration import SaleHydrator


class ListSalesHandler:

    def __init__(self, sales: SaleHydrator) -> None:
        self._sales = sales

    def handle(self) -> list[SaleDTO]:
        return [sale_to_dto(s) for s in self._sales.list_all()]


class ShowSaleHandler:

    def __init__(self, sales: SaleHydrator) -> None:
        self._sales = sales

    def handle(self, sale_id: str) -> SaleDTO:
        sale = self._sales.get_by_id(sale_id)
        if sale is None:
            raise EntityNotFoundError(f"Sale '{sale_id}' not found")
        return sale_to_dto(sale)
