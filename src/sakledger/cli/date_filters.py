"""CLI helpers for reporting period resolution."""

from datetime import date

import click

from sakledger.utils.date_parser import get_date_range, parse_date

PERIOD_FLAGS = ("this-month", "this-year", "last-month", "last-year")


def period_options(func):
    """Attach --start-date/--end-date and the period flags to a command."""
    for period in reversed(PERIOD_FLAGS):
        func = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Report for {period.replace('-', ' ')}",
        )(func)
    func = click.option("--end-date", help="Period end date (inclusive)")(func)
    func = click.option("--start-date", help="Period start date (inclusive)")(func)
    return func


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date, date]:
    """Resolve CLI period from period flags or explicit dates.

    Defaults to the current month when nothing is given. A missing start
    date means the first day of the end date's year; a missing end date
    means today.
    """
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                return get_date_range(period)

    if not start_date and not end_date:
        return get_date_range("this-month")

    end = date.today()
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    start = end.replace(month=1, day=1)
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end


def period_flags_from(kwargs: dict) -> dict[str, bool]:
    """Collect the period flag values from command keyword arguments."""
    return {period: kwargs.get(period.replace("-", "_"), False) for period in PERIOD_FLAGS}
