"""CLI commands for orders: price preview, commit and lookups."""

from __future__ import annotations

import click

from orderflow.application.dto import OrderDTO, PricingBreakdownDTO, TotalsDTO
from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import (
    calculate_order_handler,
    create_order_handler,
    list_orders_handler,
    show_order_handler,
    top_orders_handler,
)
from orderflow.infrastructure.cli.checkout_options import checkout_options, checkout_request
from orderflow.infrastructure.config import Settings


def display_totals(totals: TotalsDTO, width: int) -> None:
    click.echo(f"  {'Subtotal':<27} {totals.subtotal:>{width - 28}}")
    click.echo(f"  {'Taxes (' + totals.tax_rate + ')':<27} {totals.taxes:>{width - 28}}")
    click.echo(f"  {'Shipping':<27} {totals.shipping:>{width - 28}}")
    if totals.discount != "$0.00":
        click.echo(f"  {'Discount':<27} {'-' + totals.discount:>{width - 28}}")
    click.echo(f"  {'Order Total':<27} {totals.total:>{width - 28}}")


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.code}  (status={dto.status}, key={dto.key})")
    if dto.customer_name:
        click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.invoice_number:
        click.echo(f"Invoice:  {dto.invoice_number}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    display_totals(dto.totals, 49)


def _display_breakdown(dto: PricingBreakdownDTO) -> None:
    click.echo(f"  {'Product':<20} {'Qty':>5} {'List':>10} {'Disc%':>6} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*66}")
    for line in dto.items:
        name = line.product_name if line.resolved else f"{line.product_name} (?)"
        click.echo(
            f"  {name:<20} {line.quantity:>5} {line.list_price:>10} "
            f"{line.discount_pct:>6} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*66}")
    display_totals(dto.totals, 68)
    click.echo(f"  Units: {dto.total_units}   Savings: {dto.discount_total}   Currency: {dto.currency}")


@click.command("calculate")
@checkout_options
@click.pass_obj
def order_calculate(settings: Settings, **options) -> None:
    """Price a cart without touching stock."""
    handler = calculate_order_handler(settings)

    try:
        dto = handler.handle(checkout_request(**options))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_breakdown(dto)


@click.command("create")
@checkout_options
@click.pass_obj
def order_create(settings: Settings, **options) -> None:
    """Commit a cart as a confirmed order (reserves stock)."""
    handler = create_order_handler(settings)

    try:
        dto = handler.handle(checkout_request(**options))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.code} created  (status={dto.status})")
    click.echo()
    display_order(dto)


@click.command("show")
@click.argument("order_ref")
@click.pass_obj
def order_show(settings: Settings, order_ref: str) -> None:
    """Show an order by key or by order number."""
    handler = show_order_handler(settings)

    try:
        dto = handler.handle(order_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


def _display_rows(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    click.echo(f"{'Order':>6}  {'Created':<22} {'Customer':<24} {'Status':<11} {'Total':>10}")
    click.echo("-" * 77)
    for dto in orders:
        click.echo(
            f"{dto.code or '-':>6}  {dto.created_at:<22} {dto.customer_name:<24} "
            f"{dto.status:<11} {dto.total:>10}"
        )


@click.command("list")
@click.option("--user-id", default=None, help="Only this user's orders.")
@click.option("--limit", default=200, type=click.IntRange(min=1, max=200), help="Maximum rows.")
@click.pass_obj
def order_list(settings: Settings, user_id: str | None, limit: int) -> None:
    """List the most recent orders."""
    handler = list_orders_handler(settings)

    try:
        orders = handler.handle(user_id=user_id, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_rows(orders)


@click.command("top")
@click.option("--limit", default=10, type=int, help="Number of orders (1-100).")
@click.pass_obj
def order_top(settings: Settings, limit: int) -> None:
    """List the largest orders by total."""
    handler = top_orders_handler(settings)

    try:
        orders = handler.handle(limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_rows(orders)
