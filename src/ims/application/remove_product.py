"""Application service: Remove Product use case."""

from __future__ import annotations

import logging

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)

logger = logging.getLogger(__name__)


class RemoveProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._assignment_repo = assignment_repo

    def handle(self, product_id: str) -> None:
        """Delete a product and its supplier association.

        Refused while a bundle still lists the product as a component.
        """
        products = self._product_repo.list_all()
        if not any(p.id == product_id for p in products):
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        users = sorted(p.id for p in products if p.uses(product_id))
        if users:
            raise ValidationError(
                f"Product '{product_id}' is used by bundle(s): {', '.join(users)}"
            )

        self._product_repo.delete(product_id)
        self._assignment_repo.unassign(product_id)
        logger.info("Removed product %s", product_id)
