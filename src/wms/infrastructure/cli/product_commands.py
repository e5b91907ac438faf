"""CLI commands for the product catalog."""

from __future__ import annotations

from pathlib import Path

import click

from wms.application.import_catalog import ImportCatalogHandler
from wms.application.search_products import SearchProductsHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import Container


@click.command("search")
@click.argument("term", required=False)
@click.option("--in-stock", is_flag=True, default=False, help="Only products with stock on hand.")
@click.pass_obj
def product_search(container: Container, term: str | None, in_stock: bool) -> None:
    """Search the catalog by name, product code or barcode."""
    try:
        handler = SearchProductsHandler(
            container.product_repository(), limit=container.config.SEARCH_LIMIT
        )
        products = handler.handle(term, in_stock_only=in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<14} {'Name':<30} {'Code':<12} {'Barcode':<15} {'Price':>10} {'Qty':>6}")
    click.echo("-" * 92)
    for p in products:
        click.echo(
            f"{p.id:<14} {p.name[:30]:<30} {p.product_code:<12} {p.barcode:<15} "
            f"{p.price:>10.2f} {p.quantity:>6}"
        )


@click.command("import")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.pass_obj
def product_import(container: Container, files: tuple[Path, ...]) -> None:
    """Replace the catalog with the products in CSV FILES.

    Without FILES the configured catalog files in the data directory are used.
    """
    paths = list(files) or [container.data_dir / name for name in container.config.CATALOG_FILES]
    try:
        handler = ImportCatalogHandler(container.product_repository())
        count = handler.handle(paths)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if count:
        click.echo(f"Imported {count} products.")
    else:
        click.echo("No products found to import; catalog unchanged.")
