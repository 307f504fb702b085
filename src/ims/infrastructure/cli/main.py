import logging
from pathlib import Path

import click

from ims.config import get_settings
from ims.infrastructure.cli.order_commands import (
    order_add_item,
    order_create,
    order_list,
    order_receive,
    order_receive_all,
    order_send,
    order_send_all,
    order_show,
)
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_add_bundle,
    product_list,
    product_remove,
    product_show,
    product_update,
)
from ims.infrastructure.cli.replenish_commands import replenish_all, replenish_product
from ims.infrastructure.cli.sale_commands import sale_list, sale_register, sale_show
from ims.infrastructure.cli.supplier_commands import (
    supplier_add,
    supplier_assign,
    supplier_list,
    supplier_unassign,
)


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding the data files (overrides IMS_DATA_DIR).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(data_dir: Path | None, verbose: bool) -> None:
    """IMS — Inventory, Sales & Replenishment"""
    settings = get_settings()
    if data_dir is not None:
        settings.data_dir = data_dir

    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def supplier() -> None:
    """Manage suppliers and product assignments."""


@cli.group()
def sale() -> None:
    """Register and review sales."""


@cli.group()
def order() -> None:
    """Manage replenishment orders."""


@cli.group()
def replenish() -> None:
    """Raise replenishment orders for products below minimum stock."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_add_bundle)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_show)
product.add_command(product_update)
supplier.add_command(supplier_add)
supplier.add_command(supplier_assign)
supplier.add_command(supplier_list)
supplier.add_command(supplier_unassign)
sale.add_command(sale_list)
sale.add_command(sale_register)
sale.add_command(sale_show)
order.add_command(order_add_item)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_receive)
order.add_command(order_receive_all)
order.add_command(order_send)
order.add_command(order_send_all)
order.add_command(order_show)
replenish.add_command(replenish_all)
replenish.add_command(replenish_product)
