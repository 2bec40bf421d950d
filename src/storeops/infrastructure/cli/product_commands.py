"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storeops.application.add_product import AddProductHandler
from storeops.application.delete_product import DeleteProductHandler
from storeops.application.list_products import ListProductsHandler
from storeops.application.update_product import UpdateProductHandler
from storeops.infrastructure.cli.runtime import run_with_repositories


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--threshold", default=10, show_default=True, type=int, help="Low-stock threshold.")
@click.option("--image-url", default=None, help="Product image URL.")
def product_add(
    name: str, sku: str, price: str, stock: int, threshold: int, image_url: str | None
) -> None:
    """Add a new product to the catalog."""
    dto = run_with_repositories(
        lambda repos: AddProductHandler(repos.products).handle(
            name=name,
            sku=sku,
            price=price,
            stock=stock,
            low_stock_threshold=threshold,
            image_url=image_url,
        )
    )
    click.echo(f"Product #{dto.id} '{dto.name}' ({dto.sku}) added at {dto.price}")


@click.command("list")
@click.option("--search", default="", help="Filter by name or SKU.")
def product_list(search: str) -> None:
    """List products in the catalog."""
    products = run_with_repositories(
        lambda repos: ListProductsHandler(repos.products).handle(search=search)
    )

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'SKU':<12} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 59)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.sku:<12} {p.price:>10} {p.stock:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--sku", default=None, help="New SKU.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--threshold", default=None, type=int, help="New low-stock threshold.")
@click.option("--image-url", default=None, help="New image URL (empty to clear).")
def product_update(
    product_id: int,
    name: str | None,
    sku: str | None,
    price: str | None,
    threshold: int | None,
    image_url: str | None,
) -> None:
    """Update catalog fields of a product (use 'inventory adjust' for stock)."""
    dto = run_with_repositories(
        lambda repos: UpdateProductHandler(repos.products).handle(
            product_id=product_id,
            name=name,
            sku=sku,
            price=price,
            low_stock_threshold=threshold,
            image_url=image_url,
        )
    )
    click.echo(f"Product #{dto.id} '{dto.name}' updated ({dto.sku}, {dto.price})")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
def product_delete(product_id: int) -> None:
    """Delete a product (existing orders and adjustments are kept)."""
    run_with_repositories(
        lambda repos: DeleteProductHandler(repos.products).handle(product_id)
    )
    click.echo(f"Product #{product_id} deleted.")
