"""Application service: Update Product use case."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.application.mapping import product_to_dto
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.value_objects import Money
from ims.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        stock_minimum: int | None = None,
        cost_per_unit: str | None = None,
    ) -> ProductDTO:
        """Change a product's name, minimum stock and/or unit cost."""
        if name is None and stock_minimum is None and cost_per_unit is None:
            raise ValidationError("Nothing to update")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        if name is not None:
            product.rename(name)
        if stock_minimum is not None:
            product.set_stock_minimum(stock_minimum)
        if cost_per_unit is not None:
            product.update_cost(Money.of(cost_per_unit))

        self._product_repo.save(product)
        return product_to_dto(product)
