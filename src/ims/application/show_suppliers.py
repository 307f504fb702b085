"""Application service: List Suppliers use case (query)."""

from __future__ import annotations

from ims.application.dto import SupplierDTO
from ims.application.mapping import supplier_to_dto
from ims.domain.repository.supplier_repository import SupplierRepository


class ListSuppliersHandler:

    def __init__(self, supplier_repo: SupplierRepository) -> None:
        self._supplier_repo = supplier_repo

    def handle(self) -> list[SupplierDTO]:
        return [supplier_to_dto(s) for s in self._supplier_repo.list_all()]
