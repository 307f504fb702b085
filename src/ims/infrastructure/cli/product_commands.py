"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ims.application.add_product import AddBundleHandler, AddIngredientHandler
from ims.application.dto import ProductDTO
from ims.application.remove_product import RemoveProductHandler
from ims.application.show_products import ListProductsHandler, ShowProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.product import UnitOfMeasure
from ims.infrastructure.bootstrap import (
    assignment_repository,
    product_repository,
    supplier_repository,
)
from ims.infrastructure.cli.parsing import parse_pairs


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--unit", required=True, type=click.Choice([u.name for u in UnitOfMeasure], case_sensitive=False),
              help="Unit of measure.")
@click.option("--cost", required=True, help="Cost per unit (e.g. 1.50).")
@click.option("--stock", default=0, show_default=True, type=int, help="Current stock.")
@click.option("--minimum", default=0, show_default=True, type=int, help="Minimum stock.")
@click.option("--supplier", "supplier_id", default=None, help="Supplier ID to assign.")
def product_add(
    product_id: str,
    name: str,
    unit: str,
    cost: str,
    stock: int,
    minimum: int,
    supplier_id: str | None,
) -> None:
    """Add a new ingredient to the catalog."""
    handler = AddIngredientHandler(
        product_repo=product_repository(),
        supplier_repo=supplier_repository(),
        assignment_repo=assignment_repository(),
    )

    try:
        dto = handler.handle(
            product_id=product_id,
            name=name,
            unit=unit,
            cost_per_unit=cost,
            stock_current=stock,
            stock_minimum=minimum,
            supplier_id=supplier_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Ingredient {dto.id} '{dto.name}' added at {dto.price} per {dto.unit}")


@click.command("add-bundle")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--components", required=True, help="Components as 'ProductId:Qty,ProductId:Qty'.")
def product_add_bundle(product_id: str, name: str, components: str) -> None:
    """Add a bundle made of existing products."""
    handler = AddBundleHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id=product_id, name=name, components=parse_pairs(components))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bundle {dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
@click.option("--below-minimum", is_flag=True, default=False, help="Only products below minimum stock.")
def product_list(below_minimum: bool) -> None:
    """List all products in the catalog."""
    handler = ListProductsHandler(
        product_repo=product_repository(),
        assignment_repo=assignment_repository(),
    )

    try:
        products = handler.handle(below_minimum=below_minimum)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<20} {'Kind':<10} {'Price':>10} {'Avail':>6} {'Min':>5} {'Supplier':<10}")
    click.echo("-" * 77)
    for p in products:
        click.echo(
            f"{p.id:<10} {p.name:<20} {p.kind:<10} {p.price:>10} "
            f"{p.available_units:>6} {p.stock_minimum:>5} {p.supplier_id or '-':<10}"
        )


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  ({dto.kind})")
    click.echo(f"Name:      {dto.name}")
    click.echo(f"Price:     {dto.price}")
    click.echo(f"Available: {dto.available_units}")
    if dto.components:
        click.echo("Components:")
        for c in dto.components:
            click.echo(f"  {c.quantity:>4} x {c.product_id} ({c.product_name})")
    else:
        click.echo(f"Unit:      {dto.unit}")
        click.echo(f"Stock:     {dto.stock_current} (minimum {dto.stock_minimum})")
        click.echo(f"Supplier:  {dto.supplier_id or '-'}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
def product_show(product_id: str) -> None:
    """Show details of one product."""
    handler = ShowProductHandler(
        product_repo=product_repository(),
        assignment_repo=assignment_repository(),
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--minimum", default=None, type=int, help="New minimum stock.")
@click.option("--cost", default=None, help="New cost per unit (e.g. 2.25).")
def product_update(product_id: str, name: str | None, minimum: int | None, cost: str | None) -> None:
    """Update a product's name, minimum stock or cost."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id=product_id, name=name, stock_minimum=minimum, cost_per_unit=cost)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID to remove.")
def product_remove(product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = RemoveProductHandler(
        product_repo=product_repository(),
        assignment_repo=assignment_repository(),
    )

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed")
