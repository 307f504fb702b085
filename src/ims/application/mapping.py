"""Domain -> DTO mapping shared by the use-case handlers."""

from __future__ import annotations

from datetime import datetime

from ims.application.dto import (
    ComponentDTO,
    OrderDTO,
    OrderItemDTO,
    ProductDTO,
    SaleDTO,
    SaleLineDTO,
    SupplierDTO,
)
from ims.domain.model.product import Ingredient, Product
from ims.domain.model.replenishment_order import ReplenishmentOrder
from ims.domain.model.sale import Sale
from ims.domain.model.supplier import Supplier


def _stamp(value: datetime | None) -> str | None:
    return value.isoformat(timespec="seconds") if value is not None else None


def product_to_dto(product: Product, supplier_id: str | None = None) -> ProductDTO:
    unit = product.variant.unit.value if isinstance(product.variant, Ingredient) else None
    return ProductDTO(
        id=product.id,
        name=product.name,
        kind=product.kind.value,
        price=str(product.price()),
        available_units=product.available_units(),
        stock_current=product.stock_current,
        stock_minimum=product.stock_minimum,
        unit=unit,
        supplier_id=supplier_id,
        components=[
            ComponentDTO(c.product.id, c.product.name, c.quantity)
            for c in product.components
        ],
    )


def supplier_to_dto(supplier: Supplier) -> SupplierDTO:
    return SupplierDTO(id=supplier.id, name=supplier.name, contact=supplier.contact)


def sale_to_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        timestamp=_stamp(sale.timestamp),
        lines=[
            SaleLineDTO(
                product_id=line.product.id,
                product_name=line.product.name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                subtotal=str(line.subtotal),
            )
            for line in sale.lines
        ],
        total=str(sale.total),
    )


def order_to_dto(order: ReplenishmentOrder) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        supplier_id=order.supplier.id,
        supplier_name=order.supplier.name,
        status=order.status.value,
        items=[
            OrderItemDTO(item.product.id, item.product.name, item.quantity)
            for item in order.items
        ],
        created_at=_stamp(order.created_at),
        sent_at=_stamp(order.sent_at),
        received_at=_stamp(order.received_at),
    )
