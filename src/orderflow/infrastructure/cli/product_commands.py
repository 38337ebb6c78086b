"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import add_product_handler, unit_of_work_factory
from orderflow.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="List price (e.g. 15.00).")
@click.option("--stock", default=0, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--discount", default="0", help="Discount percentage, 0-100.")
@click.option("--category", default="other", help="Category used in sales reports.")
@click.option("--code", default=None, help="Alternate catalog code (e.g. 1042).")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    price: str,
    stock: int,
    discount: str,
    category: str,
    code: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = add_product_handler(settings)

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            discount_pct=discount,
            category=category,
            code=code,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    with unit_of_work_factory(settings)() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<24} {'Code':>6} {'Name':<20} {'Price':>10} {'Disc%':>6} {'Stock':>6}")
    click.echo("-" * 77)
    for p in products:
        code = "" if p.code is None else str(p.code)
        click.echo(
            f"{p.id:<24} {code:>6} {p.name:<20} {str(p.price):>10} "
            f"{str(p.discount_pct):>6} {p.stock:>6}"
        )
