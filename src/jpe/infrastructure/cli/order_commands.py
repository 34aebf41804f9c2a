"""CLI commands for checkout and placed orders."""

from __future__ import annotations

import click

from jpe.application.dto import CartLineSpec, OrderDTO
from jpe.application.place_order import place_order_with_retry
from jpe.application.show_order import ShowOrderHandler
from jpe.domain.exceptions import ConfigurationError, DomainException
from jpe.infrastructure.bootstrap import order_repository, order_writer
from jpe.infrastructure.cli.price_commands import parse_selections
from jpe.infrastructure.config import get_settings


def _parse_item(raw: str) -> CartLineSpec:
    """Parse 'ring-1:2:Size=v-7;Add Ons=a1,a2' into a CartLineSpec."""
    parts = raw.split(":", 2)
    if len(parts) < 2:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'ProductId:Quantity[:Group=Id;...]'."
        )
    product_id, qty_str = parts[0].strip(), parts[1].strip()
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{product_id}'."
        )
    pairs = parts[2].split(";") if len(parts) == 3 and parts[2].strip() else []
    return CartLineSpec(
        product_id=product_id,
        quantity=qty,
        selections=parse_selections(pairs),
    )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  ({dto.order_number})")
    click.echo(f"Customer:  {dto.customer_name}")
    click.echo(f"Created:   {dto.created_at}")
    click.echo(f"Gold rate: ₹{dto.gold_rate_at_order}/g (22k)")
    click.echo()
    click.echo(f"  {'Product':<28} {'Qty':>5} {'Weight':>8} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*69}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<28} {item.quantity:>5} {item.weight_grams:>8} "
            f"{item.unit_price:>12} {item.total_price:>12}"
        )
        for variation in item.variations:
            click.echo(f"    + {variation}")
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Subtotal':<42} {dto.subtotal:>27}")
    click.echo(f"  {'GST':<42} {dto.gst_amount:>27}")
    click.echo(f"  {'Order Total':<42} {dto.total:>27}")


@click.command("place")
@click.option("--customer", required=True, help="Customer name.")
@click.option(
    "--item", "items", required=True, multiple=True,
    help="Cart line as 'ProductId:Qty[:Group=VariationId;...]' (repeatable).",
)
def order_place(customer: str, items: tuple[str, ...]) -> None:
    """Place an order at the gold rate current at checkout."""
    lines = [_parse_item(raw) for raw in items]

    try:
        dto = place_order_with_retry(
            order_writer(),
            customer_name=customer,
            lines=lines,
            max_attempts=get_settings().checkout_max_attempts,
        )
    except ConfigurationError as exc:
        raise click.ClickException(f"Pricing unavailable: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
