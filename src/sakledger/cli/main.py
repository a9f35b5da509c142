"""Main CLI entry point."""

import logging

import click

from sakledger.database.factories import create_sqlite_store
from sakledger.logging_config import configure_logging

# Import and register all commands at module level
from sakledger.cli.commands import (
    accounts,
    journal,
    reports,
    tax,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SAKLEDGER_DB_PATH environment variable)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log bookkeeping activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """sakledger - SAK ETAP bookkeeping and Indonesian tax.

    Record journal entries against a SAK ETAP chart of accounts, produce
    trial balances and financial statements, and calculate PPN and PPh21.
    """
    ctx.ensure_object(dict)
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
accounts.register_commands(cli)
journal.register_commands(cli)
reports.register_commands(cli)
tax.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
