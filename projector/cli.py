"""Typer CLI interface for the asset projector."""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from projector.exceptions import ProjectionError

app = typer.Typer(
    name="projector",
    help="Asset projector: multi-year investment and property projections with sale taxes.",
)

STATUS_MAP = {"SINGLE": "single", "MFJ": "married_joint", "MFS": "married_separate", "HOH": "head_of_household"}


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Asset projector: multi-year investment and property projections with sale taxes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that serializes Decimal as string."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _fmt(amount: Decimal) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def _load(file_path: Path):
    """Read and migrate a portfolio file, exiting with an error message on failure."""
    from projector.ingestion import load_portfolio

    try:
        record = json.loads(file_path.read_text())
        return load_portfolio(record)
    except (OSError, json.JSONDecodeError, ProjectionError) as exc:
        typer.echo(f"Error: Could not load {file_path}: {exc}", err=True)
        raise typer.Exit(1)


def _parse_filing_status(filing_status: str):
    from projector.models.enums import FilingStatus

    key = filing_status.upper()
    try:
        return FilingStatus(STATUS_MAP.get(key, filing_status.lower()))
    except ValueError:
        valid = ", ".join(STATUS_MAP.keys())
        typer.echo(f"Error: Invalid filing status '{filing_status}'. Valid: {valid}", err=True)
        raise typer.Exit(1)


def _money_option(value: str, name: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        typer.echo(f"Error: {name} must be a number, got '{value}'", err=True)
        raise typer.Exit(1)


@app.command()
def project(
    file_path: Path = typer.Argument(..., help="Portfolio JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Project every asset in a portfolio file and print year-by-year tables."""
    portfolio = _load(file_path)

    if json_output:
        payload = {
            "investments": {
                inv.name: [r.model_dump() for r in portfolio.investment_results(inv)]
                for inv in portfolio.investments
                if inv.enabled
            },
            "properties": {
                prop.name: [r.model_dump() for r in prop.results]
                for prop in portfolio.properties
                if prop.enabled
            },
            "combined": [r.model_dump() for r in portfolio.combined_results()],
        }
        typer.echo(json.dumps(payload, cls=_DecimalEncoder, indent=2))
        return

    console = Console()
    for inv in portfolio.investments:
        if not inv.enabled:
            continue
        tbl = Table(title=f"Investment: {inv.name}", show_header=True)
        for column in ("Year", "Balance", "Real Balance", "Contribution", "Property CF", "Earnings"):
            tbl.add_column(column, justify="right")
        for r in portfolio.investment_results(inv):
            tbl.add_row(
                str(r.actual_year),
                _fmt(r.balance),
                _fmt(r.real_balance),
                _fmt(r.annual_contribution),
                _fmt(r.property_cash_flow),
                _fmt(r.total_earnings),
            )
        console.print(tbl)

    for prop in portfolio.properties:
        if not prop.enabled:
            continue
        tbl = Table(title=f"Property: {prop.name}", show_header=True)
        for column in ("Year", "Value", "Mortgage", "Payment", "Rent", "Expenses", "Cash Flow", "Status"):
            tbl.add_column(column, justify="right")
        for r in prop.results:
            status = "sold" if r.is_sale_year else "post-sale" if r.is_post_sale else ""
            tbl.add_row(
                str(r.actual_year),
                _fmt(r.balance),
                _fmt(r.mortgage_balance),
                _fmt(r.monthly_payment),
                _fmt(r.annual_rental_income),
                _fmt(r.total_rental_expenses),
                _fmt(r.annual_cash_flow),
                status,
            )
        console.print(tbl)

    tbl = Table(title="Combined Portfolio", show_header=True)
    for column in ("Year", "Net Worth", "Real Net Worth", "Investments", "Property Equity"):
        tbl.add_column(column, justify="right")
    for r in portfolio.combined_results():
        tbl.add_row(
            str(r.actual_year),
            _fmt(r.balance),
            _fmt(r.real_balance),
            _fmt(r.total_investment_balance),
            _fmt(r.total_property_equity),
        )
    console.print(tbl)
    typer.echo(f"Total initial investment: {_fmt(portfolio.total_initial_investment())}")
    typer.echo(f"Total return: {portfolio.total_return_percentage():.2f}%")


@app.command()
def validate(
    file_path: Path = typer.Argument(..., help="Portfolio JSON file"),
) -> None:
    """List advisory validation messages for every asset. Never fails on findings."""
    portfolio = _load(file_path)
    messages = portfolio.validation_messages()
    if not messages:
        typer.echo("No validation issues found.")
        return
    for name, items in messages.items():
        typer.echo(f"{name}:")
        for message in items:
            typer.echo(f"  - {message}")


@app.command()
def report(
    file_path: Path = typer.Argument(..., help="Portfolio JSON file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Render a plain-text projection report."""
    from projector.reports import ProjectionReportGenerator

    portfolio = _load(file_path)
    text = ProjectionReportGenerator().render(portfolio)
    if output is None:
        typer.echo(text)
        return
    output.write_text(text)
    typer.echo(f"Report written to {output}")


@app.command(name="sale-tax")
def sale_tax(
    sale_price: str = typer.Option(..., "--sale-price", help="Sale price"),
    purchase_price: str = typer.Option(..., "--purchase-price", help="Original purchase price"),
    mortgage_balance: str = typer.Option("0", "--mortgage-balance", help="Loan balance paid off at sale"),
    selling_costs: str = typer.Option("7", "--selling-costs", help="Selling costs, percent of price"),
    improvements: str = typer.Option("0", "--improvements", help="Capital improvements"),
    buying_costs: str = typer.Option("0", "--buying-costs", help="Original buying costs"),
    income: str = typer.Option("0", "--income", help="Annual income"),
    filing_status: str = typer.Option(
        "SINGLE",
        "--filing-status",
        "-s",
        help="Filing status: SINGLE, MFJ, MFS, HOH",
    ),
    state: str = typer.Option("", "--state", help="Two-letter state code"),
    primary_residence: bool = typer.Option(False, "--primary-residence", help="Home was the primary residence"),
    years_owned: str = typer.Option("0", "--years-owned", help="Years owned"),
    years_lived: str = typer.Option("0", "--years-lived", help="Years lived in the home"),
    depreciation: str = typer.Option("0", "--depreciation", help="Total depreciation taken"),
) -> None:
    """Run the sale tax waterfall for a single sale."""
    from projector.engines.sale import SaleTaxCalculator
    from projector.models.inputs import SaleConfig

    depreciation_taken = _money_option(depreciation, "--depreciation")
    sale = SaleConfig(
        is_planned_for_sale=True,
        use_projected_value=False,
        expected_sale_price=_money_option(sale_price, "--sale-price"),
        selling_costs_percentage=_money_option(selling_costs, "--selling-costs"),
        capital_improvements=_money_option(improvements, "--improvements"),
        original_buying_costs=_money_option(buying_costs, "--buying-costs"),
        filing_status=_parse_filing_status(filing_status),
        annual_income=_money_option(income, "--income"),
        state=state,
        is_primary_residence=primary_residence,
        years_owned=_money_option(years_owned, "--years-owned"),
        years_lived=_money_option(years_lived, "--years-lived"),
        enable_depreciation_recapture=depreciation_taken > 0,
        total_depreciation_taken=depreciation_taken,
    )
    breakdown = SaleTaxCalculator().calculate(
        _money_option(purchase_price, "--purchase-price"),
        sale,
        sale.expected_sale_price,
        _money_option(mortgage_balance, "--mortgage-balance"),
    )

    typer.echo("")
    typer.echo("=== Sale Tax Estimate ===")
    typer.echo(f"  Sale price:          {_fmt(breakdown.effective_sale_price)}")
    typer.echo(f"  Selling costs:       {_fmt(breakdown.selling_costs)}")
    typer.echo(f"  Cost basis:          {_fmt(breakdown.adjusted_cost_basis)}")
    typer.echo(f"  Capital gain:        {_fmt(breakdown.capital_gain)}")
    if breakdown.section_121 is not None:
        if breakdown.section_121.is_eligible:
            typer.echo(f"  Section 121:         -{_fmt(breakdown.section_121.applied_exclusion)}")
        elif sale.is_primary_residence:
            typer.echo(f"  Section 121:         {breakdown.section_121.reason}")
    typer.echo(f"  Taxable gain:        {_fmt(breakdown.taxable_gain)}")
    typer.echo(f"  Federal tax:         {_fmt(breakdown.federal_tax)} ({breakdown.federal.tax_rate * 100:.0f}%)")
    typer.echo(f"  State tax:           {_fmt(breakdown.state_tax)}")
    if breakdown.recapture is not None:
        typer.echo(f"  Recapture tax:       {_fmt(breakdown.recapture_tax)}")
    typer.echo(f"  Total tax:           {_fmt(breakdown.total_tax)}")
    typer.echo(f"  Net proceeds:        {_fmt(breakdown.net_sale_proceeds)}")
    typer.echo(f"  After-tax proceeds:  {_fmt(breakdown.net_after_tax_proceeds)}")


@app.command()
def states() -> None:
    """List the state capital gains rates used for sale estimates."""
    from projector.engines.brackets import STATE_TAX_RATES

    tbl = Table(title="State Capital Gains Rates", show_header=True)
    tbl.add_column("Code", style="cyan")
    tbl.add_column("State")
    tbl.add_column("Rate", justify="right")
    tbl.add_column("Notes")
    for code, info in sorted(STATE_TAX_RATES.items()):
        tbl.add_row(code, info.name, f"{info.rate * 100:.2f}%", info.notes)
    Console().print(tbl)


if __name__ == "__main__":
    app()
