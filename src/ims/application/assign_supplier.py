"""Application service: product <-> supplier association use cases."""

from __future__ import annotations

import logging

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)
from ims.domain.repository.supplier_repository import SupplierRepository

logger = logging.getLogger(__name__)


class AssignSupplierHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        supplier_repo: SupplierRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._supplier_repo = supplier_repo
        self._assignment_repo = assignment_repo

    def handle(self, product_id: str, supplier_id: str) -> None:
        """Make *supplier_id* the supplier of *product_id* (replaces any previous one)."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if product.is_bundle:
            raise ValidationError(f"Bundle '{product_id}' cannot have a supplier")
        if self._supplier_repo.get_by_id(supplier_id) is None:
            raise EntityNotFoundError(f"Supplier '{supplier_id}' not found")

        self._assignment_repo.assign(product_id, supplier_id)
        logger.info("Product %s now supplied by %s", product_id, supplier_id)


class UnassignSupplierHandler:

    def __init__(self, assignment_repo: SupplierAssignmentRepository) -> None:
        self._assignment_repo = assignment_repo

    def handle(self, product_id: str) -> None:
        self._assignment_repo.unassign(product_id)
