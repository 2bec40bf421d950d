"""CLI commands for orders."""

from __future__ import annotations

import click

from storeops.application.create_order import CreateOrderHandler
from storeops.application.dto import OrderDTO
from storeops.application.list_orders import ListOrdersHandler
from storeops.application.show_order import ShowOrderHandler
from storeops.application.update_order_status import UpdateOrderStatusHandler
from storeops.domain.model.order import OrderStatus
from storeops.domain.service.order_composer import ItemRequest
from storeops.infrastructure.cli.runtime import run_with_repositories


def _item_requests(
    ctx: click.Context, param: click.Parameter, raw: str
) -> list[ItemRequest]:
    """Option callback turning "1:3,2:5" into one ItemRequest per pair."""
    requests: list[ItemRequest] = []
    for entry in filter(None, (part.strip() for part in raw.split(","))):
        product_id, sep, quantity = entry.partition(":")
        if not sep:
            raise click.BadParameter(
                f"Invalid item format '{entry}', use PRODUCT_ID:QUANTITY", ctx, param
            )
        try:
            requests.append(ItemRequest(int(product_id), int(quantity)))
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{entry}': product id and quantity must be whole numbers",
                ctx,
                param,
            ) from None
    return requests


def _display_order(dto: OrderDTO) -> None:
    click.secho(f"Order {dto.order_number}", bold=True, nl=False)
    click.echo(f"  [{dto.status}]  placed {dto.created_at}")
    click.echo(f"Ship to: {dto.customer_name}, {dto.customer_address}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*48}")
    click.echo(f"  {'Order Total':<27} {dto.total:>21}")


@click.command("create")
@click.option("--customer", required=True, help="Who the order is for.")
@click.option("--address", required=True, help="Where it ships.")
@click.option(
    "--items",
    "requests",
    required=True,
    callback=_item_requests,
    help="Comma-separated PRODUCT_ID:QUANTITY pairs, e.g. 1:3,2:5.",
)
def order_create(customer: str, address: str, requests: list[ItemRequest]) -> None:
    """Create a new order priced from the current catalog."""
    dto = run_with_repositories(
        lambda repos: CreateOrderHandler(repos.orders, repos.products).handle(
            customer_name=customer,
            customer_address=address,
            items=requests,
        )
    )
    click.echo(f"Order {dto.order_number} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_show(order_id: int) -> None:
    """Print one order with its lines and total."""
    dto = run_with_repositories(
        lambda repos: ShowOrderHandler(repos.orders).handle(order_id)
    )
    _display_order(dto)


@click.command("list")
@click.option("--search", default="", help="Filter by order number or customer.")
def order_list(search: str) -> None:
    """List orders, newest first."""
    orders = run_with_repositories(
        lambda repos: ListOrdersHandler(repos.orders).handle(search=search)
    )

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<10} {'Customer':<20} {'Status':<11} {'Total':>10}  Created")
    click.echo("-" * 74)
    for o in orders:
        click.echo(
            f"{o.order_number:<10} {o.customer_name:<20} {o.status:<11} {o.total:>10}  {o.created_at}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.option("--force", is_flag=True, default=False, help="Allow moving the status backwards.")
def order_status(order_id: int, new_status: str, force: bool) -> None:
    """Move an order to a new status."""
    dto = run_with_repositories(
        lambda repos: UpdateOrderStatusHandler(repos.orders).handle(
            order_id, new_status, force=force
        )
    )
    click.echo(f"Order {dto.order_number} is now {dto.status}.")
