"""Tax commands."""

import click
from sakledger.cli.error_handling import handle_domain_error
from sakledger.domain.entities import MaritalStatus, TaxType
from sakledger.domain.errors import DomainError
from sakledger.domain.tax import TaxService
from sakledger.utils.amount_parser import format_rupiah, parse_amount


@click.group()
def tax_group():
    """Indonesian tax configuration and calculators."""
    pass


@tax_group.command("init")
@click.option("--force", is_flag=True, help="Replace existing tax rates")
@click.pass_context
def init_taxes(ctx, force: bool):
    """Seed the default PPN, PPh21 and PPh23 rates."""
    service = TaxService(ctx.obj["store"])

    if service.list_rates() and not force:
        click.echo("Tax rates already exist. Use --force to replace them.")
        return

    seeded = service.initialize()
    click.echo(f"Seeded {len(seeded)} tax rates.")


@tax_group.command("rates")
@click.pass_context
def list_rates(ctx):
    """List configured tax rates."""
    rates = TaxService(ctx.obj["store"]).list_rates()
    if not rates:
        click.echo("No tax rates found. Run 'sakledger tax init' first.")
        return

    click.echo("\nTax Rates:")
    click.echo("-" * 78)
    for rate in rates:
        status = "active" if rate.is_active else "inactive"
        click.echo(
            f"{rate.type.value:6s} | {rate.name_indonesian:30s} | {rate.rate:>5}% | "
            f"{rate.calculation_method.value:11s} | from {rate.applicable_from} | {status}"
        )


@tax_group.command("ppn")
@click.argument("amount")
@click.option("--includes-tax", is_flag=True, help="AMOUNT already includes PPN")
@click.pass_context
def ppn(ctx, amount: str, includes_tax: bool):
    """Calculate PPN for AMOUNT.

    Examples:
        sakledger tax ppn 100000
        sakledger tax ppn 111000 --includes-tax
    """
    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        tax = TaxService(ctx.obj["store"]).calculate_ppn(value, includes_tax=includes_tax)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if includes_tax:
        click.echo(f"PPN included: {format_rupiah(tax)}")
        click.echo(f"Net amount:   {format_rupiah(value - tax)}")
    else:
        click.echo(f"PPN:          {format_rupiah(tax)}")
        click.echo(f"Gross amount: {format_rupiah(value + tax)}")


@tax_group.command("pph21")
@click.argument("monthly_salary")
@click.option(
    "--status",
    "marital_status",
    type=click.Choice([status.value for status in MaritalStatus]),
    default=MaritalStatus.SINGLE.value,
    show_default=True,
    help="Marital status",
)
@click.option("--dependents", type=click.IntRange(min=0), default=0, show_default=True)
@click.pass_context
def pph21(ctx, monthly_salary: str, marital_status: str, dependents: int):
    """Calculate PPh21 for a gross MONTHLY_SALARY.

    Examples:
        sakledger tax pph21 10000000 --status married --dependents 2
    """
    try:
        salary = parse_amount(monthly_salary)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    result = TaxService(ctx.obj["store"]).calculate_pph21(salary, marital_status, dependents)
    click.echo(f"Annual gross: {format_rupiah(result.annual_gross)}")
    click.echo(f"PTKP:         {format_rupiah(result.ptkp)}")
    click.echo(f"PKP:          {format_rupiah(result.pkp)}")
    click.echo(f"Annual tax:   {format_rupiah(result.annual_tax)}")
    click.echo(f"Monthly tax:  {format_rupiah(result.monthly_tax)}")


@tax_group.command("withhold")
@click.argument("tax_type", type=click.Choice([t.value for t in TaxType]))
@click.argument("amount")
@click.pass_context
def withhold(ctx, tax_type: str, amount: str):
    """Calculate a flat-rate withholding (e.g. pph23) on AMOUNT."""
    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        tax = TaxService(ctx.obj["store"]).calculate_withholding(tax_type, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"{tax_type.upper()} withheld: {format_rupiah(tax)}")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_group, name="tax")
