"""Shared options that turn command-line input into a checkout payload.

The payload is the same raw mapping an HTTP client would send, so it
goes through ``normalize_checkout`` like any other input.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import click

from orderflow.application.dto import CheckoutRequest
from orderflow.application.normalize import normalize_checkout


def parse_items(raw: str) -> list[dict[str, str]]:
    """Parse 'REF:QTY,REF:QTY' into raw cart items."""
    items: list[dict[str, str]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductRef:Quantity'.",
                param_hint="--items",
            )
        ref, qty = pair.rsplit(":", 1)
        items.append({"productId": ref.strip(), "quantity": qty.strip()})
    return items


def checkout_options(command: Callable) -> Callable:
    """Decorate *command* with the cart, buyer, shipping and payment options."""
    options = [
        click.option("--items", default=None, help="Items as 'ProductRef:Qty,ProductRef:Qty'."),
        click.option(
            "--payload",
            type=click.File("r", encoding="utf-8"),
            default=None,
            help="JSON file with a full checkout payload.",
        ),
        click.option("--user-id", default=None, help="Buyer account id."),
        click.option("--name", default=None, help="Buyer first name (no account)."),
        click.option("--last-name", default=None, help="Buyer last name."),
        click.option("--email", default=None, help="Buyer e-mail."),
        click.option("--tax-rate", default=None, help="Tax rate override, e.g. 0.12."),
        click.option("--discount", default=None, help="Order-level discount amount."),
        click.option("--currency", default=None, help="Currency code."),
        click.option("--shipping-cost", default=None, help="Explicit shipping cost."),
        click.option("--address", default=None, help="Delivery address."),
        click.option("--payment-method", default=None, help="Payment method."),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_payload(
    items: str | None = None,
    payload: Any = None,
    user_id: str | None = None,
    name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    tax_rate: str | None = None,
    discount: str | None = None,
    currency: str | None = None,
    shipping_cost: str | None = None,
    address: str | None = None,
    payment_method: str | None = None,
) -> dict[str, Any]:
    """Merge the payload file (if any) with the individual options; options win."""
    body: dict[str, Any] = {}
    if payload is not None:
        try:
            body = json.load(payload)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--payload")
        if not isinstance(body, dict):
            raise click.BadParameter("Payload must be a JSON object", param_hint="--payload")

    if items:
        body["items"] = parse_items(items)
    elif payload is None:
        raise click.UsageError("Provide --items or --payload.")

    if user_id:
        body["userId"] = user_id
    if name or email or last_name:
        user = dict(body.get("user") or {})
        user.update(
            {k: v for k, v in (("name", name), ("lastName", last_name), ("email", email)) if v}
        )
        body["user"] = user
    if tax_rate is not None:
        body["taxRate"] = tax_rate
    if discount is not None:
        body["discount"] = discount
    if currency:
        body["currency"] = currency
    if shipping_cost is not None or address:
        shipping = dict(body.get("shipping") or {})
        if shipping_cost is not None:
            shipping["cost"] = shipping_cost
        if address:
            shipping["address"] = address
        body["shipping"] = shipping
    if payment_method:
        body["payment"] = {**(body.get("payment") or {}), "method": payment_method}
    return body


def checkout_request(**options: Any) -> CheckoutRequest:
    return normalize_checkout(build_payload(**options))
