"""CLI commands for sales."""

from __future__ import annotations

import click

from ims.application.dto import SaleDTO, SaleItemInput
from ims.application.register_sale import RegisterSaleHandler
from ims.application.show_sales import ListSalesHandler, ShowSaleHandler
from ims.config import get_settings
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import (
    auto_replenish_handler,
    product_repository,
    sale_hydrator,
    sale_repository,
)
from ims.infrastructure.cli.parsing import parse_pairs


def _display_sale(dto: SaleDTO) -> None:
    click.echo(f"Sale {dto.id}  ({dto.timestamp})")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Sale Total':<27} {dto.total:>20}")


@click.command("register")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def sale_register(items: str) -> None:
    """Register a sale and deduct stock."""
    inputs = [SaleItemInput(product_id=pid, quantity=qty) for pid, qty in parse_pairs(items)]

    auto = auto_replenish_handler() if get_settings().auto_replenish_on_sale else None
    handler = RegisterSaleHandler(
        product_repo=product_repository(),
        sale_repo=sale_repository(),
        auto_replenish=auto,
    )

    try:
        dto = handler.handle(inputs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("list")
def sale_list() -> None:
    """List recorded sales."""
    handler = ListSalesHandler(sales=sale_hydrator())

    try:
        sales = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'ID':<36} {'Timestamp':<26} {'Lines':>5} {'Total':>10}")
    click.echo("-" * 80)
    for s in sales:
        click.echo(f"{s.id:<36} {s.timestamp:<26} {len(s.lines):>5} {s.total:>10}")


@click.command("show")
@click.option("--id", "sale_id", required=True, help="Sale ID to display.")
def sale_show(sale_id: str) -> None:
    """Show the lines of one sale."""
    handler = ShowSaleHandler(sales=sale_hydrator())

    try:
        dto = handler.handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)
