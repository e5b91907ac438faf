"""CLI commands for orders and picking."""

from __future__ import annotations

import click

from wms.application.complete_order import CompleteOrderHandler
from wms.application.dashboard_stats import DashboardStatsHandler
from wms.application.dto import OrderDTO, OrderLineSpec
from wms.application.list_orders import ListOrdersHandler
from wms.application.save_order import SaveOrderHandler
from wms.application.shortage_report import ShortageReportHandler
from wms.application.show_order import ShowOrderHandler
from wms.domain.exceptions import DomainException
from wms.domain.service.picking_reconciler import PickingSession
from wms.infrastructure.bootstrap import Container
from wms.infrastructure.cli.parsing import parse_pairs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M} UTC")
    click.echo()
    click.echo(f"  {'Line':<20} {'Product':<28} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*77}")
    for line in dto.lines:
        marker = "*" if line.is_custom else " "
        click.echo(
            f" {marker}{line.line_id[:20]:<20} {line.name[:28]:<28} {line.quantity:>5} "
            f"{line.unit_price:>10.2f} {line.line_total:>10.2f}"
        )
        if line.note:
            click.echo(f"    note: {line.note}")
    click.echo(f"  {'-'*77}")
    click.echo(f"  {'Order Total':<27} {dto.total:>50.2f}")

    if dto.pick_records:
        click.echo()
        click.echo("Picked:")
        for r in dto.pick_records:
            flag = "  MISMATCH" if r.mismatch else ""
            click.echo(f"  {r.line_id:<20} {r.picked_quantity:>5} of {r.original_quantity:<5}{flag}")


@click.command("save")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", default=None, help="Catalog lines as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--custom", default=None, help="Custom lines as 'Barcode:Qty,Barcode:Qty'.")
@click.option("--id", "order_id", default=None, help="Existing order to overwrite.")
@click.option("--author", default=None, help="User saving the order.")
@click.pass_obj
def order_save(
    container: Container,
    customer: str,
    items: str | None,
    custom: str | None,
    order_id: str | None,
    author: str | None,
) -> None:
    """Save a new order or overwrite an existing one."""
    specs = [OrderLineSpec(quantity=qty, product_id=pid) for pid, qty in parse_pairs(items)]
    specs += [
        OrderLineSpec(quantity=qty, barcode=code)
        for code, qty in parse_pairs(custom, what="custom line")
    ]

    try:
        handler = SaveOrderHandler(container.order_repository(), container.product_repository())
        dto = handler.handle(customer, specs, order_id=order_id, author=author)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} saved.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        handler = ShowOrderHandler(container.order_repository())
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only orders with this status (Saved, Completed).")
@click.pass_obj
def order_list(container: Container, status: str | None) -> None:
    """List orders, newest first."""
    try:
        handler = ListOrdersHandler(container.order_repository())
        orders = handler.handle(status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<22} {'Date':<17} {'Customer':<24} {'Status':<10} {'Total':>10}")
    click.echo("-" * 87)
    for o in orders:
        click.echo(
            f"{o.id:<22} {o.created_at:%Y-%m-%d %H:%M} {o.customer_name[:24]:<24} "
            f"{o.status:<10} {o.total:>10.2f}"
        )


@click.command("complete")
@click.option("--id", "order_id", required=True, help="Order ID to complete.")
@click.option("--picks", default=None, help="Picked quantities as 'LineId:Qty,LineId:Qty'.")
@click.pass_obj
def order_complete(container: Container, order_id: str, picks: str | None) -> None:
    """Complete an order with the given picked quantities.

    Lines not listed count as not picked; completing with shortages is allowed.
    """
    try:
        order_repo = container.order_repository()
        session = PickingSession.start(ShowOrderHandler(order_repo).load(order_id))
        for line_id, qty in parse_pairs(picks, what="pick"):
            session.pick(line_id, qty)
        dto = CompleteOrderHandler(order_repo).handle(order_id, list(session.pick_records))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} completed.")
    _echo_discrepancies(session)


def _echo_discrepancies(session: PickingSession) -> None:
    discrepancies = session.discrepancies()
    if not discrepancies:
        click.echo("All lines picked as requested.")
        return
    click.echo(f"{'Line':<20} {'Name':<28} {'Requested':>9} {'Picked':>7} {'Diff':>6}")
    for d in discrepancies:
        click.echo(
            f"{d.line_id[:20]:<20} {d.name[:28]:<28} {d.requested_quantity:>9} "
            f"{d.picked_quantity:>7} {d.difference:>+6}"
        )


@click.command("pick")
@click.option("--id", "order_id", required=True, help="Order ID to pick.")
@click.pass_obj
def order_pick(container: Container, order_id: str) -> None:
    """Pick an order interactively.

    Scan or type a barcode, product code or name, then enter the picked
    quantity. 'undo CODE' puts a line back, 'done' finishes the session.
    """
    try:
        order_repo = container.order_repository()
        order = ShowOrderHandler(order_repo).load(order_id)
        if order.is_completed:
            raise click.ClickException(f"Order {order_id} is already completed")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    session = PickingSession.start(order)
    click.echo(f"Picking order {order.id} for {order.customer_name}")

    while not session.is_complete:
        _echo_remaining(session)
        entry = click.prompt("Scan", default="done", show_default=False).strip()
        if entry == "done":
            break
        if entry.startswith("undo "):
            try:
                session.undo(entry[5:].strip())
            except DomainException as exc:
                click.echo(f"Error: {exc}", err=True)
            continue

        matches = session.find_waiting(entry)
        if not matches:
            click.echo(f"No waiting line matches '{entry}'.", err=True)
            continue
        if len(matches) > 1:
            click.echo("Several lines match: " + ", ".join(m.line_id for m in matches), err=True)
            continue

        line = matches[0]
        qty = click.prompt(
            f"Picked quantity of {line.name}", type=click.IntRange(min=0),
            default=line.requested_quantity,
        )
        try:
            session.pick(line.line_id, qty)
        except DomainException as exc:
            click.echo(f"Error: {exc}", err=True)

    if not session.pick_records:
        click.echo("Nothing picked; order left unchanged.")
        return

    _echo_discrepancies(session)
    if not click.confirm("Complete the order?", default=True):
        click.echo("Session discarded; order left unchanged.")
        return

    try:
        CompleteOrderHandler(order_repo).handle(order_id, list(session.pick_records))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Order {order_id} completed.")


def _echo_remaining(session: PickingSession) -> None:
    click.echo("To pick:")
    for line in session.remaining_lines:
        click.echo(f"  {line.line_id:<20} {line.name[:30]:<30} {line.barcode:<15} {line.requested_quantity:>5}")


@click.command("shortages")
@click.pass_obj
def report_shortages(container: Container) -> None:
    """List lines of completed orders that were picked short."""
    try:
        handler = ShortageReportHandler(container.order_repository())
        rows = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No shortages.")
        return

    click.echo(f"{'Order':<22} {'Customer':<20} {'Product':<28} {'Req':>5} {'Picked':>7} {'Missing':>8}")
    click.echo("-" * 95)
    for r in rows:
        click.echo(
            f"{r.order_id:<22} {r.customer_name[:20]:<20} {r.name[:28]:<28} "
            f"{r.requested:>5} {r.picked:>7} {r.missing:>8}"
        )


@click.command("stats")
@click.pass_obj
def report_stats(container: Container) -> None:
    """Catalog size, order counts, top products and top customers."""
    try:
        handler = DashboardStatsHandler(
            container.order_repository(), container.product_repository()
        )
        stats = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products in catalog: {stats.product_count}")
    click.echo(f"Orders to pick:      {stats.pending_orders}")
    click.echo(f"Orders completed:    {stats.completed_orders}")
    click.echo()
    click.echo("Top products (units ordered):")
    for entry in stats.top_products:
        click.echo(f"  {entry.name[:40]:<40} {entry.count:>6}")
    click.echo("Top customers (orders):")
    for entry in stats.top_customers:
        click.echo(f"  {entry.name[:40]:<40} {entry.count:>6}")
