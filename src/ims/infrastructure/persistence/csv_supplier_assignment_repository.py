"""Flat-file implementation of SupplierAssignmentRepository.

``product_suppliers.csv`` holds ``product_id;supplier_id`` rows.  The
mapping is loaded once, best-effort: if the file cannot be read the
repository starts empty and logs a warning instead of failing.  Every
change rewrites the whole file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ims.domain.exceptions import StorageError
from ims.domain.model.value_objects import require_text
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)
from ims.infrastructure.persistence.delimited_file import DelimitedFile

logger = logging.getLogger(__name__)

COLUMNS = ("product_id", "supplier_id")


class CsvSupplierAssignmentRepository(SupplierAssignmentRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = DelimitedFile(file_path, COLUMNS)
        self._assignments: dict[str, str] = {}
        self._load()

    def supplier_for(self, product_id: str) -> str | None:
        return self._assignments.get(product_id)

    def assign(self, product_id: str, supplier_id: str) -> None:
        product_id = require_text(product_id, "Product id")
        supplier_id = require_text(supplier_id, "Supplier id")
        self._assignments[product_id] = supplier_id
        self._persist()

    def unassign(self, product_id: str) -> None:
        if self._assignments.pop(product_id, None) is not None:
            self._persist()

    def list_all(self) -> dict[str, str]:
        return dict(self._assignments)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> None:
        try:
            for number, row in self._file.read_rows():
                product_id = row[0].strip()
                supplier_id = row[1].strip() if len(row) > 1 else ""
                if not product_id or not supplier_id:
                    self._file.skip(number, "expected product_id;supplier_id")
                    continue
                self._assignments[product_id] = supplier_id
        except StorageError as exc:
            logger.warning("Supplier assignments unavailable, starting empty: %s", exc)
            self._assignments = {}

    def _persist(self) -> None:
        self._file.rewrite([pid, sid] for pid, sid in self._assignments.items())
