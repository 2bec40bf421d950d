"""CLI command for the store dashboard."""

from __future__ import annotations

import click

from storeops.application.show_dashboard import ShowDashboardHandler
from storeops.infrastructure.cli.runtime import run_with_repositories


@click.command("dashboard")
def dashboard() -> None:
    """Summarise revenue, today's orders and stock health."""
    dto = run_with_repositories(
        lambda repos: ShowDashboardHandler(repos.products, repos.orders).handle()
    )

    click.echo(f"Total revenue:   {dto.total_revenue}")
    click.echo(f"Orders today:    {dto.orders_today}")
    click.echo(f"Low-stock items: {dto.low_stock_count}")
    click.echo(f"Products:        {dto.product_count}")

    click.echo()
    click.echo("Top products by stock:")
    if not dto.top_products:
        click.echo("  (none)")
    for p in dto.top_products:
        click.echo(f"  {p.name:<20} {p.stock:>7}  [{p.stock_level}]")

    click.echo()
    click.echo("Recent orders:")
    if not dto.recent_orders:
        click.echo("  (none)")
    for o in dto.recent_orders:
        click.echo(f"  {o.order_number:<10} {o.customer_name:<20} {o.status:<11} {o.total:>10}")
