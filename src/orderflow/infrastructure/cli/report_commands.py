"""CLI command for sales reports."""

from __future__ import annotations

import json

import click

from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import generate_report_handler
from orderflow.infrastructure.config import Settings


@click.command("generate")
@click.option("--save/--no-save", default=True, help="Store the report as an audit record.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw JSON report.")
@click.pass_obj
def report_generate(settings: Settings, save: bool, as_json: bool) -> None:
    """Build a sales snapshot from every order."""
    handler = generate_report_handler(settings)

    try:
        snapshot = handler.handle(save=save)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        click.echo(json.dumps(snapshot.to_payload(), indent=2))
        return

    click.echo(f"Sales report  ({snapshot.generated_at:%Y-%m-%d %H:%M})")
    click.echo(f"  Orders: {snapshot.total_orders}   Units: {snapshot.total_units_sold}")
    click.echo(f"  Total sales: ${snapshot.total_sales:.2f}")
    click.echo(
        f"  Today: ${snapshot.sales_today:.2f} ({snapshot.orders_today})   "
        f"Week: ${snapshot.sales_week:.2f} ({snapshot.orders_week})   "
        f"Month: ${snapshot.sales_month:.2f} ({snapshot.orders_month})"
    )
    click.echo()
    click.echo(f"  {'Top products':<24} {'Units':>6} {'Revenue':>12}")
    click.echo(f"  {'-'*44}")
    for top in snapshot.top_products:
        click.echo(f"  {top.name:<24} {top.units_sold:>6} {'$' + format(top.revenue, '.2f'):>12}")
    if snapshot.sales_by_category:
        click.echo()
        click.echo(f"  {'Category':<24} {'Sales':>19}")
        click.echo(f"  {'-'*44}")
        for category, amount in snapshot.sales_by_category.items():
            click.echo(f"  {category:<24} {'$' + format(amount, '.2f'):>19}")
