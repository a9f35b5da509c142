"""Journal entry commands."""

import click
from sakledger.cli.error_handling import handle_domain_error
from sakledger.domain.chart_of_accounts import ChartOfAccountsService
from sakledger.domain.entities import JournalStatus
from sakledger.domain.errors import DomainError
from sakledger.domain.journal import JournalService
from sakledger.utils.amount_parser import format_rupiah, parse_amount
from sakledger.utils.date_parser import parse_date


def parse_line_spec(spec: str, chart: ChartOfAccountsService) -> dict:
    """Parse an ACCOUNT:DEBIT:CREDIT line option.

    ACCOUNT may be an account code (1-1000) or ID (acc_1000).

    Raises:
        ValueError: If the spec is malformed or the account is unknown
    """
    parts = spec.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(f"Invalid line '{spec}': expected ACCOUNT:DEBIT:CREDIT")

    account_ref, debit, credit = (part.strip() for part in parts)
    account = chart.get_account_by_code(account_ref) or chart.get_account(account_ref)
    if account is None:
        raise ValueError(f"Account '{account_ref}' not found")

    return {
        "account_id": account.id,
        "debit": parse_amount(debit) if debit else 0,
        "credit": parse_amount(credit) if credit else 0,
    }


@click.group()
def journal_group():
    """Create, post and inspect journal entries."""
    pass


@journal_group.command("create")
@click.option(
    "--date",
    "entry_date",
    required=True,
    help="Entry date (YYYY-MM-DD or 'today', 'yesterday')",
)
@click.option(
    "--line",
    "line_specs",
    multiple=True,
    required=True,
    help="Journal line as ACCOUNT:DEBIT:CREDIT, e.g. 1-1000:1000000:0",
)
@click.option("--reference", help="Reference number (generated if not provided)")
@click.option("--description", default="", help="Entry description")
@click.option("--created-by", default="system", help="User recording the entry")
@click.option("--post", "post_now", is_flag=True, help="Post the entry right away")
@click.pass_context
def create_entry(
    ctx,
    entry_date: str,
    line_specs: tuple[str, ...],
    reference: str | None,
    description: str,
    created_by: str,
    post_now: bool,
):
    """Create a draft journal entry.

    Examples:
        sakledger journal create --date 2024-01-15 --line 1-1000:1000000:0 --line 4-4000:0:1000000
        sakledger journal create --date today --description "Cash sale" --line 1-1000:500000:0 --line 4-4000:0:500000 --post
    """
    store = ctx.obj["store"]
    chart = ChartOfAccountsService(store)
    service = JournalService(store)

    try:
        parsed_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        lines = [parse_line_spec(spec, chart) for spec in line_specs]
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        entry = service.create_entry(
            date=parsed_date,
            lines=lines,
            reference=reference,
            description=description,
            created_by=created_by,
        )
        click.echo(f"Created journal entry {entry.id} ({entry.reference})")
        click.echo(f"  Date: {entry.date}")
        click.echo(f"  Total: {format_rupiah(entry.total_debit)}")
        if post_now:
            service.post(entry.id)
            click.echo("  Status: posted")
        else:
            click.echo("  Status: draft")
    except DomainError as e:
        handle_domain_error(ctx, e)


@journal_group.command("post")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def post_entry(ctx, entry_id: str):
    """Post a draft journal entry."""
    service = JournalService(ctx.obj["store"])
    try:
        entry = service.post(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Posted journal entry {entry.id}")


@journal_group.command("list")
@click.option(
    "--status",
    type=click.Choice([status.value for status in JournalStatus]),
    help="Only show entries with this status",
)
@click.pass_context
def list_entries(ctx, status: str | None):
    """List journal entries."""
    service = JournalService(ctx.obj["store"])

    entries = service.list_all()
    if status is not None:
        entries = [entry for entry in entries if entry.status.value == status]
    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo("\nJournal Entries:")
    click.echo("-" * 96)
    for entry in entries:
        click.echo(
            f"{entry.date} | {entry.id:40s} | {entry.status.value:8s} | "
            f"{format_rupiah(entry.total_debit):>22s} | {entry.description}"
        )


@journal_group.command("show")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def show_entry(ctx, entry_id: str):
    """Show a journal entry with its lines."""
    service = JournalService(ctx.obj["store"])

    entry = service.get_entry(entry_id)
    if entry is None:
        click.echo(f"Error: Journal entry '{entry_id}' not found", err=True)
        ctx.exit(1)

    click.echo(f"Entry:       {entry.id}")
    click.echo(f"Reference:   {entry.reference}")
    click.echo(f"Date:        {entry.date}")
    click.echo(f"Status:      {entry.status.value}")
    click.echo(f"Created by:  {entry.created_by}")
    if entry.description:
        click.echo(f"Description: {entry.description}")
    click.echo("-" * 84)
    for line in entry.lines:
        click.echo(
            f"{line.account_code:8s} {line.account_name:30s} "
            f"{format_rupiah(line.debit):>21s} {format_rupiah(line.credit):>21s}"
        )
    click.echo("-" * 84)
    click.echo(
        f"{'Total':39s} {format_rupiah(entry.total_debit):>21s} "
        f"{format_rupiah(entry.total_credit):>21s}"
    )


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
