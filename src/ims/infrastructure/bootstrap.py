"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  File locations come
from ``ims.config``.
"""

from __future__ import annotations

from ims.application.auto_replenish import AutoReplenishHandler
from ims.config import get_settings
from ims.domain.service.hydration import OrderHydrator, SaleHydrator
from ims.infrastructure.persistence.csv_order_repository import CsvOrderRepository
from ims.infrastructure.persistence.csv_product_repository import (
    CsvProductRepository,
)
from ims.infrastructure.persistence.csv_sale_repository import CsvSaleRepository
from ims.infrastructure.persistence.csv_supplier_assignment_repository import (
    CsvSupplierAssignmentRepository,
)
from ims.infrastructure.persistence.csv_supplier_repository import (
    CsvSupplierRepository,
)


def product_repository() -> CsvProductRepository:
    return CsvProductRepository(get_settings().products_file)


def supplier_repository() -> CsvSupplierRepository:
    return CsvSupplierRepository(get_settings().suppliers_file)


def assignment_repository() -> CsvSupplierAssignmentRepository:
    return CsvSupplierAssignmentRepository(get_settings().assignments_file)


def sale_repository() -> CsvSaleRepository:
    return CsvSaleRepository(get_settings().data_dir)


def order_repository() -> CsvOrderRepository:
    return CsvOrderRepository(get_settings().data_dir)


def order_hydrator() -> OrderHydrator:
    return OrderHydrator(order_repository(), product_repository(), supplier_repository())


def sale_hydrator() -> SaleHydrator:
    return SaleHydrator(sale_repository(), product_repository())


def auto_replenish_handler() -> AutoReplenishHandler:
    return AutoReplenishHandler(
        orders=order_hydrator(),
        product_repo=product_repository(),
        supplier_repo=supplier_repository(),
        assignment_repo=assignment_repository(),
    )
