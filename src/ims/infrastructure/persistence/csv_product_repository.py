"""Flat-file implementation of ProductRepository.

Columns: ``kind;id;name;stock_current;stock_minimum;unit;cost_per_unit;components``.
Ingredient rows leave ``components`` empty; bundle rows leave the stock,
unit and cost columns empty and encode components as ``id:qty|id:qty``.

``save`` and ``delete`` read the whole file and rewrite it (fine for a
small catalog; there is no index).
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from ims.domain.exceptions import DomainException
from ims.domain.model.product import Product, ProductKind, UnitOfMeasure
from ims.domain.model.value_objects import Money
from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.persistence.delimited_file import DelimitedFile
from ims.infrastructure.persistence.field_codec import join_fields, split_fields

logger = logging.getLogger(__name__)

COLUMNS = (
    "kind", "id", "name", "stock_current", "stock_minimum",
    "unit", "cost_per_unit", "components",
)
_COMPONENT_DELIMITER = "|"


class _MalformedRow(Exception):
    pass


class CsvProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = DelimitedFile(file_path, COLUMNS)
        self._file.ensure()

    # --- ProductRepository interface ------------------------------------------

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def get_by_id(self, entity_id: str) -> Product | None:
        return self._load().get(entity_id)

    def save(self, entity: Product) -> None:
        products = [p for p in self._load().values() if p.id != entity.id]
        products.append(entity)
        self._persist(products)

    def delete(self, entity_id: str) -> None:
        products = self._load()
        if entity_id in products:
            del products[entity_id]
            self._persist(list(products.values()))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(product: Product) -> list[str]:
        if product.kind is ProductKind.BUNDLE:
            components = join_fields(
                (f"{c.product.id}:{c.quantity}" for c in product.components),
                _COMPONENT_DELIMITER,
            )
            return [product.kind.value, product.id, product.name, "", "", "", "", components]
        return [
            product.kind.value,
            product.id,
            product.name,
            str(product.stock_current),
            str(product.stock_minimum),
            product.variant.unit.value,
            product.variant.cost_per_unit.to_plain_string(),
            "",
        ]

    @staticmethod
    def _ingredient_from_row(row: list[str]) -> Product:
        try:
            return Product.ingredient(
                id=row[1],
                name=row[2],
                stock_current=int(row[3]),
                stock_minimum=int(row[4]),
                unit=UnitOfMeasure(row[5]),
                cost_per_unit=Money(Decimal(row[6])),
            )
        except (ValueError, InvalidOperation, DomainException) as exc:
            raise _MalformedRow(str(exc)) from exc

    @staticmethod
    def _parse_components(raw: str) -> list[tuple[str, int]]:
        if not raw:
            return []
        parsed = []
        for entry in split_fields(raw, _COMPONENT_DELIMITER):
            component_id, sep, qty = entry.rpartition(":")
            if not sep:
                raise _MalformedRow(f"bad component entry {entry!r}")
            try:
                parsed.append((component_id, int(qty)))
            except ValueError as exc:
                raise _MalformedRow(f"bad component quantity {qty!r}") from exc
        return parsed

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        """Read every row and resolve bundle components to shared objects."""
        rows: dict[str, tuple[int, list[str]]] = {}
        for number, row in self._file.read_rows():
            if len(row) < len(COLUMNS):
                self._file.skip(number, f"expected {len(COLUMNS)} columns, got {len(row)}")
                continue
            rows[row[1]] = (number, row)

        products: dict[str, Product] = {}
        for product_id in rows:
            self._resolve(product_id, rows, products, set())
        # keep file order
        return {pid: products[pid] for pid in rows if pid in products}

    def _resolve(
        self,
        product_id: str,
        rows: dict[str, tuple[int, list[str]]],
        products: dict[str, Product],
        visiting: set[str],
    ) -> Product | None:
        if product_id in products:
            return products[product_id]
        if product_id not in rows or product_id in visiting:
            return None
        number, row = rows[product_id]
        try:
            if row[0] == ProductKind.INGREDIENT.value:
                product = self._ingredient_from_row(row)
            elif row[0] == ProductKind.BUNDLE.value:
                visiting.add(product_id)
                try:
                    product = self._bundle_from_row(row, rows, products, visiting)
                finally:
                    visiting.discard(product_id)
            else:
                raise _MalformedRow(f"unknown product kind {row[0]!r}")
        except _MalformedRow as exc:
            self._file.skip(number, str(exc))
            return None
        products[product_id] = product
        return product

    def _bundle_from_row(
        self,
        row: list[str],
        rows: dict[str, tuple[int, list[str]]],
        products: dict[str, Product],
        visiting: set[str],
    ) -> Product:
        try:
            bundle = Product.bundle(id=row[1], name=row[2])
        except DomainException as exc:
            raise _MalformedRow(str(exc)) from exc
        for component_id, quantity in self._parse_components(row[7]):
            if component_id in visiting:
                raise _MalformedRow(f"bundle cycle through {component_id!r}")
            component = self._resolve(component_id, rows, products, visiting)
            if component is None:
                logger.warning(
                    "Bundle '%s' references unknown product '%s'; component dropped",
                    bundle.id, component_id,
                )
                continue
            try:
                bundle.add_component(component, quantity)
            except DomainException as exc:
                raise _MalformedRow(str(exc)) from exc
        return bundle

    def _persist(self, products: list[Product]) -> None:
        self._file.rewrite(self._to_row(p) for p in products)
