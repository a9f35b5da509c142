"""Trial balance and financial statement commands."""

from decimal import Decimal
from typing import Any

import click
from sakledger.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from sakledger.cli.error_handling import handle_domain_error
from sakledger.domain.entities import StatementType
from sakledger.domain.errors import DomainError
from sakledger.domain.statements import (
    STATEMENT_TYPE_ALIASES,
    FinancialStatementService,
)
from sakledger.domain.trial_balance import TrialBalanceService
from sakledger.utils.amount_parser import format_rupiah

STATEMENT_CHOICES = [t.value for t in StatementType] + list(STATEMENT_TYPE_ALIASES)


def _label(key: str) -> str:
    return key.replace("_", " ").capitalize()


def render_statement_data(data: dict[str, Any], indent: int = 0) -> None:
    """Echo nested statement data as an indented report."""
    pad = "  " * indent
    for key, value in data.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{_label(key)}")
            render_statement_data(value, indent + 1)
        elif isinstance(value, list):
            click.echo(f"{pad}{_label(key)}")
            for line in value:
                click.echo(
                    f"{pad}  {line['account_code']:8s} {line['account_name']:32s} "
                    f"{format_rupiah(line['ending_balance']):>22s}"
                )
        elif isinstance(value, Decimal):
            click.echo(f"{pad}{_label(key) + ':':42s} {format_rupiah(value):>22s}")


@click.command("trial-balance")
@period_options
@click.pass_context
def trial_balance(ctx, start_date: str | None, end_date: str | None, **kwargs):
    """Show the trial balance for a period (defaults to this month).

    Examples:
        sakledger trial-balance --this-month
        sakledger trial-balance --start-date 2024-01-01 --end-date 2024-03-31
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(kwargs),
    )
    result = TrialBalanceService(ctx.obj["store"]).compute(start, end)

    click.echo(f"\nTrial Balance {result.period_start} to {result.period_end}")
    click.echo("-" * 96)
    if not result.accounts:
        click.echo("No posted entries in this period.")
    for line in result.accounts:
        click.echo(
            f"{line.account_code:8s} {line.account_name:30s} "
            f"{format_rupiah(line.total_debit):>18s} {format_rupiah(line.total_credit):>18s} "
            f"{format_rupiah(line.ending_balance):>18s}"
        )
    click.echo("-" * 96)
    click.echo(
        f"{'Total':39s} {format_rupiah(result.total_debit):>18s} "
        f"{format_rupiah(result.total_credit):>18s}"
    )
    click.echo("Balanced" if result.is_balanced else "NOT BALANCED")


@click.command("statement")
@click.argument("statement_type", type=click.Choice(STATEMENT_CHOICES), metavar="TYPE")
@period_options
@click.pass_context
def statement(ctx, statement_type: str, start_date: str | None, end_date: str | None, **kwargs):
    """Generate a financial statement for a period.

    TYPE is one of balance_sheet, income_statement, cash_flow_statement,
    equity_statement (or neraca, laba_rugi, arus_kas, perubahan_ekuitas).

    Examples:
        sakledger statement balance_sheet --this-year
        sakledger statement laba_rugi --last-month
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(kwargs),
    )
    try:
        result = FinancialStatementService(ctx.obj["store"]).generate(statement_type, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\n{_label(result.type.value)} {result.period_start} to {result.period_end}")
    click.echo("-" * 72)
    render_statement_data(result.data)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(trial_balance)
    cli.add_command(statement)
