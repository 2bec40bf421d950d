"""CLI commands for inventory management."""

from __future__ import annotations

import click

from storeops.application.adjust_stock import AdjustStockHandler, RetryStockWriteHandler
from storeops.application.dto import AdjustmentResultDTO
from storeops.application.recent_adjustments import RecentAdjustmentsHandler
from storeops.application.show_inventory import ShowInventoryHandler
from storeops.domain.exceptions import PartialApplyError
from storeops.domain.model.stock_adjustment import AdjustmentReason
from storeops.domain.service.stock_ledger import StockLevel
from storeops.infrastructure.cli.runtime import run_with_repositories


def _report_adjustment(dto: AdjustmentResultDTO) -> None:
    adj = dto.adjustment
    click.echo(
        f"Adjustment #{adj.id}: {adj.product_name} {adj.quantity:+d} ({adj.reason}); "
        f"stock {dto.previous_stock} -> {dto.new_stock} [{dto.stock_level}]"
    )
    if dto.stock_went_negative:
        click.secho(
            f"Warning: stock for '{adj.product_name}' is now negative ({dto.new_stock}).",
            fg="yellow",
            err=True,
        )


@click.command("show")
@click.option("--search", default="", help="Filter by name or SKU.")
@click.option(
    "--level",
    default=None,
    type=click.Choice([lvl.value for lvl in StockLevel]),
    help="Only show products at this stock level.",
)
def inventory_show(search: str, level: str | None) -> None:
    """Show current stock levels."""
    report = run_with_repositories(
        lambda repos: ShowInventoryHandler(repos.products).handle(search=search, level=level)
    )

    if not report.lines:
        click.echo("No products found.")
    else:
        click.echo(f"{'ID':<6} {'Product':<20} {'Stock':>8} {'Threshold':>10} {'Level':>8}")
        click.echo("-" * 56)
        for line in report.lines:
            click.echo(
                f"{line.product_id:<6} {line.product_name:<20} {line.stock:>8} "
                f"{line.low_stock_threshold:>10} {line.stock_level:>8}"
            )
    click.echo()
    click.echo(f"Low-stock products: {report.low_stock_count}")
    click.echo(f"Inventory value:    {report.total_value}")


@click.command("adjust")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option(
    "--quantity",
    required=True,
    type=int,
    help="Signed change: positive adds stock, negative removes it.",
)
@click.option(
    "--reason",
    required=True,
    type=click.Choice([r.value for r in AdjustmentReason]),
    help="Why the stock changed.",
)
def inventory_adjust(product_id: int, quantity: int, reason: str) -> None:
    """Record a stock adjustment and apply it to the product."""
    try:
        dto = run_with_repositories(
            lambda repos: AdjustStockHandler(repos.products, repos.adjustments).handle(
                product_id, quantity, reason
            )
        )
    except click.ClickException as exc:
        cause = exc.__cause__
        if isinstance(cause, PartialApplyError):
            raise click.ClickException(
                f"{cause}\nRetry the stock update with: "
                f"storeops inventory retry --adjustment {cause.adjustment_id}"
            )
        raise

    _report_adjustment(dto)


@click.command("retry")
@click.option("--adjustment", "adjustment_id", required=True, type=int, help="Adjustment ID.")
@click.confirmation_option(
    prompt="Only retry adjustments whose stock update failed. Continue?"
)
def inventory_retry(adjustment_id: int) -> None:
    """Apply the stock change of an already recorded adjustment."""
    dto = run_with_repositories(
        lambda repos: RetryStockWriteHandler(repos.products, repos.adjustments).handle(
            adjustment_id
        )
    )
    _report_adjustment(dto)


@click.command("history")
@click.option("--product", "product_id", default=None, type=int, help="Only this product.")
@click.option("--limit", default=5, show_default=True, type=int, help="How many entries.")
def inventory_history(product_id: int | None, limit: int) -> None:
    """Show recent stock adjustments, newest first."""
    adjustments = run_with_repositories(
        lambda repos: RecentAdjustmentsHandler(repos.adjustments, repos.products).handle(
            limit=limit, product_id=product_id
        )
    )

    if not adjustments:
        click.echo("No stock adjustments found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Change':>7} {'Reason':<11} When")
    click.echo("-" * 66)
    for a in adjustments:
        click.echo(
            f"{a.id:<6} {a.product_name:<20} {a.quantity:>+7d} {a.reason:<11} {a.timestamp}"
            + ("" if a.stock_applied else "  (stock not applied)")
        )
