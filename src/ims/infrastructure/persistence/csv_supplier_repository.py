"""Flat-file implementation of SupplierRepository (``id;name;contact``)."""

from __future__ import annotations

from pathlib import Path

from ims.domain.exceptions import ValidationError
from ims.domain.model.supplier import Supplier
from ims.domain.repository.supplier_repository import SupplierRepository
from ims.infrastructure.persistence.delimited_file import DelimitedFile

COLUMNS = ("id", "name", "contact")


class CsvSupplierRepository(SupplierRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = DelimitedFile(file_path, COLUMNS)
        self._file.ensure()

    # --- SupplierRepository interface -----------------------------------------

    def list_all(self) -> list[Supplier]:
        return self._load()

    def get_by_id(self, entity_id: str) -> Supplier | None:
        for supplier in self._load():
            if supplier.id == entity_id:
                return supplier
        return None

    def save(self, entity: Supplier) -> None:
        suppliers = [s for s in self._load() if s.id != entity.id]
        suppliers.append(entity)
        self._persist(suppliers)

    def delete(self, entity_id: str) -> None:
        suppliers = self._load()
        remaining = [s for s in suppliers if s.id != entity_id]
        if len(remaining) != len(suppliers):
            self._persist(remaining)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> list[Supplier]:
        suppliers = []
        for number, row in self._file.read_rows():
            if len(row) < len(COLUMNS):
                self._file.skip(number, f"expected {len(COLUMNS)} columns, got {len(row)}")
                continue
            try:
                suppliers.append(Supplier(id=row[0], name=row[1], contact=row[2]))
            except ValidationError as exc:
                self._file.skip(number, str(exc))
        return suppliers

    def _persist(self, suppliers: list[Supplier]) -> None:
        self._file.rewrite([s.id, s.name, s.contact] for s in suppliers)
