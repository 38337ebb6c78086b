"""CLI command for invoicing."""

from __future__ import annotations

import click

from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import generate_invoice_handler, notifier
from orderflow.infrastructure.cli.checkout_options import checkout_options, checkout_request
from orderflow.infrastructure.cli.order_commands import display_totals
from orderflow.infrastructure.config import Settings


@click.command("generate")
@checkout_options
@click.pass_obj
def invoice_generate(settings: Settings, **options) -> None:
    """Commit a cart as an order and issue its invoice.

    The buyer is e-mailed in the background; the command waits for the
    e-mail before exiting but its outcome does not change the result.
    """
    post_commit = notifier(settings)
    handler = generate_invoice_handler(settings, post_commit)

    try:
        result = handler.handle(checkout_request(**options))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    finally:
        post_commit.shutdown(wait=True)

    inv = result.invoice
    click.echo(f"Invoice {inv.number}  (order #{inv.order_code}, key={inv.order_key})")
    click.echo(f"Issued:  {inv.issued_at}")
    if inv.buyer_name or inv.buyer_email:
        click.echo(f"Billed:  {inv.buyer_name} <{inv.buyer_email}>")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in inv.items:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    display_totals(inv.totals, 49)
