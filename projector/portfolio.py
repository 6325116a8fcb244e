"""Portfolio aggregation across investments and properties.

Links between assets are resolved once per projection pass. Properties
project first; each investment then receives, per year, the operating cash
flow of every enabled property linked to it plus the after-tax sale proceeds
of every property that reinvests into it.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from projector.engines.compounding import compound, inflation_base
from projector.engines.rounding import ZERO, to_cents
from projector.entities import Investment, Property
from projector.exceptions import UnknownAssetError
from projector.models.enums import AssetType
from projector.models.results import AssetBreakdown, CombinedYearResult, InvestmentYearResult

logger = logging.getLogger(__name__)


class Portfolio:
    """A set of assets sharing a horizon, an inflation rate and a starting year."""

    def __init__(
        self,
        years: int = 15,
        inflation_rate: Decimal = Decimal("2.5"),
        starting_year: int | None = None,
    ) -> None:
        self.years = years
        self.inflation_rate = inflation_rate
        self.starting_year = starting_year or date.today().year
        self.investments: list[Investment] = []
        self.properties: list[Property] = []

    # --- Asset management ---

    @property
    def assets(self) -> list[Investment | Property]:
        return [*self.investments, *self.properties]

    def _shared_settings(self) -> dict[str, Any]:
        return {
            "years": self.years,
            "inflation_rate": self.inflation_rate,
            "starting_year": self.starting_year,
        }

    def add_investment(self, investment: Investment) -> Investment:
        investment.update_input(**self._shared_settings())
        self.investments.append(investment)
        return investment

    def add_property(self, prop: Property) -> Property:
        prop.update_input(**self._shared_settings())
        self.properties.append(prop)
        return prop

    def remove_asset(self, asset_id: str) -> None:
        """Remove an asset and clear any links that pointed at it."""
        asset = self.get_asset(asset_id)
        if isinstance(asset, Investment):
            self.investments.remove(asset)
            for prop in self.properties:
                if prop.inputs.linked_investment_id == asset_id:
                    prop.update_input(linked_investment_id="")
                if prop.sale_config.target_investment_id == asset_id:
                    prop.update_sale_config(target_investment_id=None)
        else:
            self.properties.remove(asset)

    def get_asset(self, asset_id: str) -> Investment | Property:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        raise UnknownAssetError(asset_id)

    def update_settings(
        self,
        years: int | None = None,
        inflation_rate: Decimal | None = None,
        starting_year: int | None = None,
    ) -> None:
        """Change shared settings and push them into every asset."""
        if years is not None:
            self.years = years
        if inflation_rate is not None:
            self.inflation_rate = inflation_rate
        if starting_year is not None:
            self.starting_year = starting_year
        for asset in self.assets:
            asset.update_input(**self._shared_settings())

    # --- Link resolution ---

    def linked_cash_flows(self, investment_id: str) -> list[Decimal]:
        """Per-year property cash flows into an investment (index 0 is year 1)."""
        flows = [ZERO] * self.years
        for prop in self.properties:
            if not prop.enabled:
                continue
            linked = prop.inputs.linked_investment_id == investment_id
            target = prop.sale_target_id == investment_id
            if not (linked or target):
                continue
            for result in prop.results[1 : self.years + 1]:
                if linked:
                    flows[result.year - 1] += result.operating_cash_flow
                if target and result.is_sale_year:
                    flows[result.year - 1] += result.sale_proceeds
        return flows

    def _check_links(self) -> None:
        known = {inv.id for inv in self.investments}
        for prop in self.properties:
            for link in (prop.inputs.linked_investment_id, prop.sale_target_id):
                if link and link not in known:
                    logger.warning("Property %s links to unknown investment %s", prop.name, link)

    def investment_results(self, investment: Investment) -> list[InvestmentYearResult]:
        return investment.project(self.linked_cash_flows(investment.id))

    # --- Combined views ---

    def combined_results(self) -> list[CombinedYearResult]:
        """Portfolio totals per year: investment balances plus property equity."""
        self._check_links()
        investments = [
            (inv, self.investment_results(inv)) for inv in self.investments if inv.enabled
        ]
        properties = [(prop, prop.results) for prop in self.properties if prop.enabled]
        inflation = inflation_base(self.inflation_rate)

        combined: list[CombinedYearResult] = []
        for year in range(self.years + 1):
            factor = compound(inflation, year)
            row: dict[str, Decimal] = {}
            breakdown: list[AssetBreakdown] = []

            def add(field: str, amount: Decimal) -> None:
                row[field] = row.get(field, ZERO) + amount

            for inv, results in investments:
                if year >= len(results):
                    continue
                result = results[year]
                add("total_investment_balance", result.balance)
                add("total_real_investment_balance", result.real_balance)
                add("total_annual_contribution", result.annual_contribution)
                add("total_real_annual_contribution", result.real_annual_contribution)
                add("total_earnings", result.total_earnings)
                add("total_real_earnings", result.real_total_earnings)
                add("total_property_cash_flow", result.property_cash_flow)
                breakdown.append(
                    AssetBreakdown(
                        asset_id=inv.id,
                        asset_name=inv.name,
                        asset_type=AssetType.INVESTMENT,
                        balance=result.balance,
                        real_balance=result.real_balance,
                        contribution=result.annual_contribution,
                    )
                )

            for prop, results in properties:
                if year >= len(results):
                    continue
                result = results[year]
                add("total_property_value", result.balance)
                add("total_real_property_value", result.real_balance)
                add("total_mortgage_balance", result.mortgage_balance)
                add("total_property_equity", result.equity)
                add("total_real_property_equity", to_cents(result.equity / factor))
                breakdown.append(
                    AssetBreakdown(
                        asset_id=prop.id,
                        asset_name=prop.name,
                        asset_type=AssetType.PROPERTY,
                        balance=result.balance,
                        real_balance=result.real_balance,
                        mortgage_balance=result.mortgage_balance,
                    )
                )

            balance = row.get("total_investment_balance", ZERO) + row.get(
                "total_property_equity", ZERO
            )
            real_balance = row.get("total_real_investment_balance", ZERO) + row.get(
                "total_real_property_equity", ZERO
            )
            previous = combined[-1] if combined else None
            combined.append(
                CombinedYearResult(
                    year=year,
                    actual_year=self.starting_year + year,
                    balance=balance,
                    real_balance=real_balance,
                    total_yearly_gain=balance - previous.balance if previous else ZERO,
                    total_real_yearly_gain=(
                        real_balance - previous.real_balance if previous else ZERO
                    ),
                    asset_breakdown=breakdown,
                    **row,
                )
            )
        return combined

    def total_initial_investment(self) -> Decimal:
        """Initial investment amounts plus property down payments."""
        total = sum((inv.inputs.initial_amount for inv in self.investments if inv.enabled), ZERO)
        total += sum((prop.down_payment_amount for prop in self.properties if prop.enabled), ZERO)
        return to_cents(total)

    def total_return_percentage(self) -> Decimal:
        initial = self.total_initial_investment()
        if initial <= 0:
            return ZERO
        final = self.combined_results()[-1]
        return to_cents((final.balance - initial) / initial * 100)

    def validation_messages(self) -> dict[str, list[str]]:
        """Advisory messages per asset name; assets without messages are omitted."""
        messages: dict[str, list[str]] = {}
        for prop in self.properties:
            errors = prop.validation_errors()
            if errors:
                messages[prop.name] = errors
        for inv in self.investments:
            warnings = inv.warnings(self.linked_cash_flows(inv.id))
            if warnings:
                messages[inv.name] = warnings
        return messages
