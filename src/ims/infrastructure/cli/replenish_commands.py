"""CLI commands for automatic replenishment."""

from __future__ import annotations

import click

from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import auto_replenish_handler


@click.command("all")
def replenish_all() -> None:
    """Raise an order for every product below its minimum stock."""
    handler = auto_replenish_handler()

    try:
        created = handler.handle_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not created:
        click.echo("Nothing to replenish.")
        return
    for dto in created:
        item = dto.items[0]
        click.echo(f"Order {dto.id}: {item.quantity} x {item.product_id} from {dto.supplier_id}")


@click.command("product")
@click.option("--id", "product_id", required=True, help="Product ID.")
def replenish_product(product_id: str) -> None:
    """Raise an order for one product if it is below its minimum stock."""
    handler = auto_replenish_handler()

    try:
        dto = handler.handle_product(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        click.echo(f"Product {product_id} does not need replenishment.")
        return
    click.echo(f"Order {dto.id} created for {dto.items[0].quantity} x {product_id}")
