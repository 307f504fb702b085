"""Application service: Add Product use cases (ingredients and bundles)."""

from __future__ import annotations

import logging

from ims.application.dto import ProductDTO
from ims.application.mapping import product_to_dto
from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.product import Product, UnitOfMeasure
from ims.domain.model.value_objects import Money, require_text
from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.supplier_assignment_repository import (
    SupplierAssignmentRepository,
)
from ims.domain.repository.supplier_repository import SupplierRepository

logger = logging.getLogger(__name__)


def parse_unit(raw: str) -> UnitOfMeasure:
    try:
        return UnitOfMeasure[raw.strip().upper()]
    except KeyError:
        allowed = ", ".join(u.name for u in UnitOfMeasure)
        raise ValidationError(f"Unknown unit '{raw}'. Expected one of: {allowed}") from None


def _ensure_new_id(product_repo: ProductRepository, product_id: str) -> str:
    product_id = require_text(product_id, "Product id")
    if product_repo.get_by_id(product_id) is not None:
        raise ValidationError(f"Product '{product_id}' already exists")
    return product_id


class AddIngredientHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        supplier_repo: SupplierRepository,
        assignment_repo: SupplierAssignmentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._supplier_repo = supplier_repo
        self._assignment_repo = assignment_repo

    def handle(
        self,
        product_id: str,
        name: str,
        unit: str,
        cost_per_unit: str,
        stock_current: int = 0,
        stock_minimum: int = 0,
        supplier_id: str | None = None,
    ) -> ProductDTO:
        """Add an ingredient, optionally associating it with a supplier."""
        product_id = _ensure_new_id(self._product_repo, product_id)
        if supplier_id and self._supplier_repo.get_by_id(supplier_id) is None:
            raise EntityNotFoundError(f"Supplier '{supplier_id}' not found")

        product = Product.ingredient(
            id=product_id,
            name=name,
            stock_current=stock_current,
            stock_minimum=stock_minimum,
            unit=parse_unit(unit),
            cost_per_unit=Money.of(cost_per_unit),
        )
        self._product_repo.save(product)
        if supplier_id:
            self._assignment_repo.assign(product.id, supplier_id)

        logger.info("Added ingredient %s (%s)", product.id, product.name)
        return product_to_dto(product, supplier_id or None)


class AddBundleHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str,
        components: list[tuple[str, int]],
    ) -> ProductDTO:
        """Add a bundle built from ``(component_id, quantity)`` pairs."""
        product_id = _ensure_new_id(self._product_repo, product_id)
        if not components:
            raise ValidationError("Bundle must have at least one component")

        catalog = {p.id: p for p in self._product_repo.list_all()}
        resolved: list[tuple[Product, int]] = []
        for component_id, quantity in components:
            component = catalog.get(component_id)
            if component is None:
                raise EntityNotFoundError(f"Product '{component_id}' not found")
            resolved.append((component, quantity))

        bundle = Product.bundle(id=product_id, name=name, components=resolved)
        self._product_repo.save(bundle)

        logger.info("Added bundle %s with %d component(s)", bundle.id, len(resolved))
        return product_to_dto(bundle)
