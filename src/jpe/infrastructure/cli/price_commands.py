"""CLI commands for live price display."""

from __future__ import annotations

from collections.abc import Iterable

import click

from jpe.domain.exceptions import ConfigurationError, DomainException
from jpe.infrastructure.bootstrap import live_sync, product_repository


def parse_selections(pairs: Iterable[str]) -> dict[str, tuple[str, ...]]:
    """Parse ['Size=v-7', 'Add Ons=a1,a2'] into {group: (ids...)}.

    Repeating a group appends to it, so multi-select groups can be given
    either way.
    """
    selections: dict[str, tuple[str, ...]] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid selection '{pair}'. Expected 'Group=VariationId'."
            )
        group, ids = pair.split("=", 1)
        group = group.strip()
        picked = tuple(i.strip() for i in ids.split(",") if i.strip())
        if not group or not picked:
            raise click.BadParameter(
                f"Invalid selection '{pair}'. Expected 'Group=VariationId'."
            )
        selections[group] = selections.get(group, ()) + picked
    return selections


@click.command("quote")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option(
    "--select", "selects", multiple=True,
    help="Variation pick as 'Group=VariationId' (repeatable).",
)
def price_quote(product_id: str, selects: tuple[str, ...]) -> None:
    """Show the live price of a product with the given variations."""
    selections = parse_selections(selects)
    coordinator = live_sync()

    try:
        quote = coordinator.price_for(product_id, selections)
    except ConfigurationError as exc:
        raise click.ClickException(f"Pricing unavailable: {exc}")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{quote.product_name}  ({quote.product_id})")
    click.echo(f"Gold rate #{quote.gold_rate_id}: ₹{quote.gold_rate_applied}/g")
    for line in quote.selected:
        click.echo(f"  + {line}")
    click.echo()
    click.echo(f"  {'Weight':<16} {quote.weight_grams + ' g':>14}")
    click.echo(f"  {'Gold value':<16} {quote.gold_value:>14}")
    click.echo(f"  {'Making charges':<16} {quote.making_charges:>14}")
    click.echo(f"  {'Subtotal':<16} {quote.subtotal:>14}")
    click.echo(f"  {'GST':<16} {quote.gst:>14}")
    click.echo(f"  {'-'*31}")
    click.echo(f"  {'Total':<16} {quote.total:>14}")
    for warning in quote.warnings:
        click.echo(f"Warning: {warning}", err=True)


@click.command("list")
def product_list() -> None:
    """List active products with their live default price."""
    products = [p for p in product_repository().list_all() if p.is_active]

    if not products:
        click.echo("No products found.")
        return

    coordinator = live_sync()

    click.echo(f"{'ID':<12} {'Name':<28} {'Metal':<10} {'Weight':>8} {'Price':>14}")
    click.echo("-" * 76)
    for p in products:
        try:
            price = coordinator.price_for(p.id).total
        except DomainException:
            price = "unavailable"
        click.echo(
            f"{p.id:<12} {p.name:<28} {p.metal_type.value:<10} "
            f"{str(p.weight_grams):>8} {price:>14}"
        )
