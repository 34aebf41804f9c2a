"""CLI commands for category making charges."""

from __future__ import annotations

import click

from jpe.application.set_making_charge import SetMakingChargeHandler
from jpe.domain.exceptions import DomainException
from jpe.infrastructure.bootstrap import channel, making_charge_repository


@click.command("set")
@click.option("--category", required=True, help="Product category (e.g. rings).")
@click.option("--percent", required=True, help="Making charge as % of gold value.")
@click.option("--min", "minimum", default="0", show_default=True,
              help="Minimum making charge in rupees.")
def making_charge_set(category: str, percent: str, minimum: str) -> None:
    """Set the making charge policy for a category."""
    handler = SetMakingChargeHandler(
        charge_repo=making_charge_repository(),
        publisher=channel(),
    )

    try:
        charge = handler.handle(category=category, percent=percent, minimum=minimum)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Making charge for '{charge.category}' set to {charge.making_charge_percent}% "
        f"(min ₹{charge.min_making_charge})"
    )


@click.command("list")
def making_charge_list() -> None:
    """List making charge policies by category."""
    charges = making_charge_repository().list_all()

    if not charges:
        click.echo("No making charges configured.")
        return

    click.echo(f"{'Category':<20} {'Percent':>8} {'Minimum':>12}")
    click.echo("-" * 42)
    for c in sorted(charges, key=lambda c: c.category):
        click.echo(
            f"{c.category:<20} {str(c.making_charge_percent) + '%':>8} "
            f"{'₹' + str(c.min_making_charge):>12}"
        )
