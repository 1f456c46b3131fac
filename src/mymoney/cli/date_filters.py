"""CLI helpers for date range resolution."""

from datetime import date

import click

from mymoney.utils.date_parser import get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Resolve a filter range from --period or explicit --start-date/--end-date."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)

    bounds: list[date | None] = []
    for label, value in (("start", start_date), ("end", end_date)):
        if not value:
            bounds.append(None)
            continue
        try:
            bounds.append(parse_date(value))
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)

    return bounds[0], bounds[1]
