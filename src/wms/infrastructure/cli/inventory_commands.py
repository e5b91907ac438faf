"""CLI commands for inventory counts (stocktakes)."""

from __future__ import annotations

import click

from wms.application.dto import CountLineSpec, InventoryCountDTO
from wms.application.save_inventory_count import SaveInventoryCountHandler
from wms.application.show_inventory_count import (
    DeleteInventoryCountHandler,
    ListInventoryCountsHandler,
    ShowInventoryCountHandler,
)
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import Container
from wms.infrastructure.cli.parsing import parse_pairs


def _display_count(dto: InventoryCountDTO, discrepancies_only: bool = False) -> None:
    click.echo(f"Inventory count {dto.id}  '{dto.name}'")
    if dto.author:
        click.echo(f"Author:  {dto.author}")
    click.echo(f"Created: {dto.created_at:%Y-%m-%d %H:%M} UTC")
    click.echo()

    lines = dto.discrepancies if discrepancies_only else dto.lines
    if not lines:
        click.echo("No discrepancies." if discrepancies_only else "No lines.")
        return

    click.echo(f"  {'Product':<30} {'Barcode':<15} {'Counted':>8} {'Expected':>9} {'Diff':>6}")
    click.echo(f"  {'-'*72}")
    for line in lines:
        click.echo(
            f"  {line.name[:30]:<30} {line.barcode:<15} {line.counted:>8} "
            f"{line.expected:>9} {line.difference:>+6}"
        )


@click.command("save")
@click.option("--name", required=True, help="Name of the count.")
@click.option("--items", default=None, help="Counted products as 'ProductId:Qty,...'.")
@click.option("--custom", default=None, help="Counted unknown barcodes as 'Barcode:Qty,...'.")
@click.option("--id", "count_id", default=None, help="Existing count to overwrite.")
@click.option("--author", default=None, help="User who counted.")
@click.pass_obj
def count_save(
    container: Container,
    name: str,
    items: str | None,
    custom: str | None,
    count_id: str | None,
    author: str | None,
) -> None:
    """Save a new inventory count or overwrite an existing one."""
    specs = [CountLineSpec(counted=qty, product_id=pid) for pid, qty in parse_pairs(items)]
    specs += [CountLineSpec(counted=qty, barcode=code) for code, qty in parse_pairs(custom)]

    try:
        handler = SaveInventoryCountHandler(
            container.inventory_count_repository(), container.product_repository()
        )
        dto = handler.handle(name, specs, count_id=count_id, author=author)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory count {dto.id} saved ({len(dto.discrepancies)} discrepancies).")


@click.command("show")
@click.option("--id", "count_id", required=True, help="Count ID to display.")
@click.option("--discrepancies", is_flag=True, default=False, help="Only lines that differ.")
@click.pass_obj
def count_show(container: Container, count_id: str, discrepancies: bool) -> None:
    """Show an inventory count."""
    try:
        dto = ShowInventoryCountHandler(container.inventory_count_repository()).handle(count_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_count(dto, discrepancies_only=discrepancies)


@click.command("list")
@click.pass_obj
def count_list(container: Container) -> None:
    """List saved inventory counts, newest first."""
    try:
        counts = ListInventoryCountsHandler(container.inventory_count_repository()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not counts:
        click.echo("No inventory counts found.")
        return

    for c in counts:
        click.echo(
            f"{c.id:<20} {c.created_at:%Y-%m-%d %H:%M} {c.name[:30]:<30} "
            f"{len(c.lines):>5} lines {len(c.discrepancies):>5} discrepancies"
        )


@click.command("delete")
@click.option("--id", "count_id", required=True, help="Count ID to delete.")
@click.pass_obj
def count_delete(container: Container, count_id: str) -> None:
    """Delete an inventory count."""
    try:
        DeleteInventoryCountHandler(container.inventory_count_repository()).handle(count_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory count {count_id} deleted.")
