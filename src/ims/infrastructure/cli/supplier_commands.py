"""CLI commands for suppliers and product assignments."""

from __future__ import annotations

import click

from ims.application.add_supplier import AddSupplierHandler
from ims.application.assign_supplier import AssignSupplierHandler, UnassignSupplierHandler
from ims.application.show_suppliers import ListSuppliersHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import (
    assignment_repository,
    product_repository,
    supplier_repository,
)


@click.command("add")
@click.option("--id", "supplier_id", required=True, help="Supplier ID.")
@click.option("--name", required=True, help="Supplier name.")
@click.option("--contact", required=True, help="Phone or e-mail.")
def supplier_add(supplier_id: str, name: str, contact: str) -> None:
    """Register a new supplier."""
    handler = AddSupplierHandler(supplier_repo=supplier_repository())

    try:
        dto = handler.handle(supplier_id=supplier_id, name=name, contact=contact)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier {dto.id} '{dto.name}' added")


@click.command("list")
def supplier_list() -> None:
    """List all suppliers."""
    handler = ListSuppliersHandler(supplier_repo=supplier_repository())

    try:
        suppliers = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'ID':<10} {'Name':<24} {'Contact':<30}")
    click.echo("-" * 66)
    for s in suppliers:
        click.echo(f"{s.id:<10} {s.name:<24} {s.contact:<30}")


@click.command("assign")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID.")
def supplier_assign(product_id: str, supplier_id: str) -> None:
    """Set the supplier a product is replenished from."""
    handler = AssignSupplierHandler(
        product_repo=product_repository(),
        supplier_repo=supplier_repository(),
        assignment_repo=assignment_repository(),
    )

    try:
        handler.handle(product_id=product_id, supplier_id=supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} assigned to supplier {supplier_id}")


@click.command("unassign")
@click.option("--product", "product_id", required=True, help="Product ID.")
def supplier_unassign(product_id: str) -> None:
    """Remove a product's supplier assignment."""
    handler = UnassignSupplierHandler(assignment_repo=assignment_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} has no supplier now")
