import logging

import click

from jpe.infrastructure.cli.making_charge_commands import making_charge_list, making_charge_set
from jpe.infrastructure.cli.order_commands import order_place, order_show
from jpe.infrastructure.cli.price_commands import price_quote, product_list
from jpe.infrastructure.cli.rate_commands import rate_history, rate_set, rate_show
from jpe.infrastructure.cli.tax_commands import tax_set, tax_show
from jpe.infrastructure.config import get_settings


@click.group()
def cli() -> None:
    """JPE — Jewellery Pricing Engine"""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def rate() -> None:
    """Manage gold rates."""


@cli.group("making-charge")
def making_charge() -> None:
    """Manage category making charges."""


@cli.group()
def tax() -> None:
    """Manage the GST rate."""


@cli.group()
def price() -> None:
    """Show live prices."""


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def order() -> None:
    """Place and view orders."""


# Register subcommands
rate.add_command(rate_set)
rate.add_command(rate_show)
rate.add_command(rate_history)
making_charge.add_command(making_charge_set)
making_charge.add_command(making_charge_list)
tax.add_command(tax_set)
tax.add_command(tax_show)
price.add_command(price_quote)
product.add_command(product_list)
order.add_command(order_place)
order.add_command(order_show)
