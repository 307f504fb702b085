"""Application service: Add Supplier use case."""

from __future__ import annotations

from ims.application.dto import SupplierDTO
from ims.application.mapping import supplier_to_dto
from ims.domain.exceptions import ValidationError
from ims.domain.model.supplier import Supplier
from ims.domain.repository.supplier_repository import SupplierRepository


class AddSupplierHandler:

    def __init__(self, supplier_repo: SupplierRepository) -> None:
        self._supplier_repo = supplier_repo

    def handle(self, supplier_id: str, name: str, contact: str) -> SupplierDTO:
        supplier = Supplier(id=supplier_id, name=name, contact=contact)
        if self._supplier_repo.get_by_id(supplier.id) is not None:
            raise ValidationError(f"Supplier '{supplier.id}' already exists")
        self._supplier_repo.save(supplier)
        return supplier_to_dto(supplier)
