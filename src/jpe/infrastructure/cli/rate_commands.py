"""CLI commands for gold rate administration."""

from __future__ import annotations

import click

from jpe.application.set_gold_rate import SetGoldRateHandler
from jpe.application.show_gold_rate import ShowGoldRateHandler
from jpe.domain.exceptions import DomainException
from jpe.domain.model.gold_rate import GoldRate
from jpe.infrastructure.bootstrap import channel, rate_store


def _per_gram(value) -> str:
    return "-" if value is None else f"₹{value}"


def _display_rate(rate: GoldRate) -> None:
    flag = "current" if rate.is_current else "superseded"
    click.echo(f"Gold rate #{rate.id}  ({flag}, effective {rate.effective_date})")
    click.echo(f"  {'22k':<8} {_per_gram(rate.rate_22k):>12} /g")
    click.echo(f"  {'24k':<8} {_per_gram(rate.rate_24k):>12} /g")
    click.echo(f"  {'18k':<8} {_per_gram(rate.rate_18k):>12} /g")
    click.echo(f"  {'Silver':<8} {_per_gram(rate.silver_rate):>12} /g")
    click.echo(f"Source: {rate.source}")


@click.command("set")
@click.option("--22k", "rate_22k", required=True, help="22 karat rate per gram (e.g. 6000).")
@click.option("--24k", "rate_24k", required=True, help="24 karat rate per gram.")
@click.option("--18k", "rate_18k", default=None, help="18 karat rate per gram.")
@click.option("--silver", "silver_rate", default=None, help="Silver rate per gram.")
@click.option("--source", default="manual", show_default=True, help="Where the rate came from.")
@click.option(
    "--effective-date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
    help="Effective date (default: today).",
)
def rate_set(rate_22k, rate_24k, rate_18k, silver_rate, source, effective_date) -> None:
    """Store a new current gold rate."""
    handler = SetGoldRateHandler(rate_store=rate_store(), publisher=channel())

    try:
        rate = handler.handle(
            rate_22k=rate_22k,
            rate_24k=rate_24k,
            rate_18k=rate_18k,
            silver_rate=silver_rate,
            source=source,
            effective_date=effective_date.date() if effective_date else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Gold rate #{rate.id} is now current (22k ₹{rate.rate_22k}/g)")


@click.command("show")
@click.option(
    "--as-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
    help="Show the rate that was effective on this date instead.",
)
def rate_show(as_of) -> None:
    """Show the current gold rate."""
    handler = ShowGoldRateHandler(rate_store=rate_store())

    try:
        rate = handler.as_of(as_of.date()) if as_of else handler.current()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if rate is None:
        click.echo(f"No gold rate was effective on {as_of.date()}.")
        return
    _display_rate(rate)


@click.command("history")
@click.option("--days", default=30, show_default=True, type=click.IntRange(min=0),
              help="How many days back to list.")
def rate_history(days: int) -> None:
    """List gold rates of the last N days."""
    handler = ShowGoldRateHandler(rate_store=rate_store())
    rates = handler.history(days=days)

    if not rates:
        click.echo("No gold rates found.")
        return

    click.echo(f"{'ID':<6} {'Effective':<12} {'22k':>10} {'24k':>10} {'Source':<10} {'':<7}")
    click.echo("-" * 60)
    for r in rates:
        marker = "current" if r.is_current else ""
        click.echo(
            f"{r.id:<6} {r.effective_date.isoformat():<12} {str(r.rate_22k):>10} "
            f"{str(r.rate_24k):>10} {r.source:<10} {marker:<7}"
        )
