"""Chart of accounts commands."""

import click
from sakledger.domain.chart_of_accounts import ChartOfAccountsService


@click.group()
def accounts_group():
    """Manage the SAK ETAP chart of accounts."""
    pass


@accounts_group.command("init")
@click.option("--force", is_flag=True, help="Replace an existing chart of accounts")
@click.pass_context
def init_accounts(ctx, force: bool):
    """Seed the default SAK ETAP chart of accounts."""
    service = ChartOfAccountsService(ctx.obj["store"])

    if service.list_accounts() and not force:
        click.echo("Chart of accounts already exists. Use --force to replace it.")
        return

    seeded = service.initialize()
    click.echo(f"Seeded {len(seeded)} accounts.")


@accounts_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = ChartOfAccountsService(ctx.obj["store"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found. Run 'sakledger accounts init' first.")
        return

    click.echo("\nChart of Accounts:")
    click.echo("-" * 78)
    for acc in accounts:
        click.echo(
            f"{acc.code:8s} | {acc.name_indonesian:32s} | "
            f"{acc.category.value:9s} | {acc.normal_balance.value}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(accounts_group, name="accounts")
