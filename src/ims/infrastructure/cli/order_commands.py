"""CLI commands for the ReplenishmentOrder aggregate."""

from __future__ import annotations

import click

from ims.application.add_order_item import AddOrderItemHandler
from ims.application.create_replenishment_order import CreateReplenishmentOrderHandler
from ims.application.dto import BatchOutcome, OrderDTO
from ims.application.receive_order import ReceiveAllSentHandler, ReceiveOrderHandler
from ims.application.send_order import SendAllPendingHandler, SendOrderHandler
from ims.application.show_order import ListOrdersHandler, ShowOrderHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.replenishment_order import OrderStatus
from ims.infrastructure.bootstrap import (
    order_hydrator,
    product_repository,
    supplier_repository,
)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Supplier: {dto.supplier_name} ({dto.supplier_id})")
    click.echo(f"Created:  {dto.created_at}")
    if dto.sent_at:
        click.echo(f"Sent:     {dto.sent_at}")
    if dto.received_at:
        click.echo(f"Received: {dto.received_at}")
    click.echo()

    if not dto.items:
        click.echo("  (no items)")
        return
    click.echo(f"  {'Product':<12} {'Name':<20} {'Qty':>5}")
    click.echo(f"  {'-'*39}")
    for item in dto.items:
        click.echo(f"  {item.product_id:<12} {item.product_name:<20} {item.quantity:>5}")


def _display_outcome(verb: str, outcome: BatchOutcome) -> None:
    click.echo(f"Orders {verb}: {outcome.succeeded}")
    for failure in outcome.failures:
        click.echo(f"  failed {failure.order_id}: {failure.message}", err=True)


@click.command("create")
@click.option("--supplier", "supplier_id", required=True, help="Supplier ID.")
def order_create(supplier_id: str) -> None:
    """Open a new replenishment order."""
    handler = CreateReplenishmentOrderHandler(
        orders=order_hydrator(),
        supplier_repo=supplier_repository(),
    )

    try:
        dto = handler.handle(supplier_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")


@click.command("add-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to order.")
def order_add_item(order_id: str, product_id: str, quantity: int) -> None:
    """Add a product to a pending order."""
    handler = AddOrderItemHandler(orders=order_hydrator(), product_repo=product_repository())

    try:
        dto = handler.handle(order_id=order_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(orders=order_hydrator())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
              help="Only orders in this status.")
def order_list(status: str | None) -> None:
    """List replenishment orders."""
    handler = ListOrdersHandler(orders=order_hydrator())

    try:
        orders = handler.handle(status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<40} {'Supplier':<12} {'Items':>5} {'Status':<10}")
    click.echo("-" * 70)
    for o in orders:
        click.echo(f"{o.id:<40} {o.supplier_id:<12} {len(o.items):>5} {o.status:<10}")


@click.command("send")
@click.option("--id", "order_id", required=True, help="Order ID to send.")
def order_send(order_id: str) -> None:
    """Mark a pending order as sent to its supplier."""
    handler = SendOrderHandler(orders=order_hydrator())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} sent.")


@click.command("send-all")
def order_send_all() -> None:
    """Send every pending order that has items."""
    handler = SendAllPendingHandler(orders=order_hydrator())

    try:
        outcome = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_outcome("sent", outcome)


@click.command("receive")
@click.option("--id", "order_id", required=True, help="Order ID to receive.")
def order_receive(order_id: str) -> None:
    """Receive a sent order (adds the ordered stock)."""
    handler = ReceiveOrderHandler(orders=order_hydrator(), product_repo=product_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} received — stock updated.")


@click.command("receive-all")
def order_receive_all() -> None:
    """Receive every sent order that has items."""
    handler = ReceiveAllSentHandler(orders=order_hydrator(), product_repo=product_repository())

    try:
        outcome = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_outcome("received", outcome)
