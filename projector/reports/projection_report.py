"""Plain-text portfolio projection report generator."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from projector.portfolio import Portfolio

TEMPLATE_DIR = Path(__file__).parent / "templates"


def money(amount: Decimal | None) -> str:
    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def percent(rate: Decimal, scale: int = 1) -> str:
    return f"{rate * scale:.2f}%"


class ProjectionReportGenerator:
    """Renders a portfolio projection as a human-readable text report."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), trim_blocks=True)
        self.env.filters["money"] = money
        self.env.filters["percent"] = percent

    def render(self, portfolio: Portfolio) -> str:
        """Render the projection report for every enabled asset and the combined totals."""
        investments = [
            {
                "asset": inv,
                "results": portfolio.investment_results(inv),
                "summary": inv.summary(portfolio.linked_cash_flows(inv.id)),
            }
            for inv in portfolio.investments
            if inv.enabled
        ]
        properties = [
            {
                "asset": prop,
                "results": prop.results,
                "summary": prop.summary(),
                "sale": next((r for r in prop.results if r.is_sale_year), None),
            }
            for prop in portfolio.properties
            if prop.enabled
        ]
        template = self.env.get_template("projection_summary.txt")
        return template.render(
            portfolio=portfolio,
            investments=investments,
            properties=properties,
            combined=portfolio.combined_results(),
            total_initial=portfolio.total_initial_investment(),
            total_return=portfolio.total_return_percentage(),
            messages=portfolio.validation_messages(),
        )
