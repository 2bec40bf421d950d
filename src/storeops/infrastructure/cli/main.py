import click

from storeops.infrastructure.cli.dashboard_commands import dashboard
from storeops.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_history,
    inventory_retry,
    inventory_show,
)
from storeops.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from storeops.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storeops.infrastructure.logging_setup import setup_logging
from storeops.infrastructure.settings import get_settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """storeops: catalog, orders and inventory for a small store."""
    settings = get_settings(log_level="INFO") if verbose else get_settings()
    setup_logging(settings)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Track and adjust stock."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_history)
inventory.add_command(inventory_retry)
inventory.add_command(inventory_show)
cli.add_command(dashboard)
