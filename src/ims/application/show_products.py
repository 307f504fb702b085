"""Application service: product catalog queries."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.application.mapping import product_to_dto
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._assignment_repo = assignment_repo

    def handle(self, below_minimum: bool = False) -> list[ProductDTO]:
        """List the catalog; ``below_minimum`` keeps only products needing stock."""
        products = self._product_repo.list_all()
        if below_minimum:
            products = [p for p in products if p.stock_current < p.stock_minimum]
        return [
            product_to_dto(p, self._assignment_repo.supplier_for(p.id))
            for p in products
        ]


class ShowProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._assignment_repo = assignment_repo

    def handle(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return product_to_dto(product, self._assignment_repo.supplier_for(product.id))
