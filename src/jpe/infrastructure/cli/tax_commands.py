"""CLI commands for the GST rate."""

from __future__ import annotations

import click

from jpe.application.tax_settings import SetGstRateHandler, resolve_gst_percent
from jpe.domain.exceptions import DomainException
from jpe.infrastructure.bootstrap import channel, settings_repository
from jpe.infrastructure.config import get_settings


@click.command("set")
@click.option("--rate", required=True, help="GST percentage (e.g. 3).")
def tax_set(rate: str) -> None:
    """Set the GST rate applied to jewellery."""
    handler = SetGstRateHandler(settings_repo=settings_repository(), publisher=channel())

    try:
        value = handler.handle(rate)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"GST rate set to {value}%")


@click.command("show")
def tax_show() -> None:
    """Show the GST rate in effect."""
    repo = settings_repository()
    stored = repo.get_gst_rate_percent()
    value = resolve_gst_percent(repo, get_settings().gst_rate_percent)
    origin = "stored" if stored is not None else "default"
    click.echo(f"GST rate: {value}% ({origin})")
