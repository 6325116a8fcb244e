"""Property sale tax waterfall.

sale price -> selling costs -> capital gain over adjusted cost basis
-> Section 121 exclusion -> other gains and carryover losses
-> federal tax -> state tax -> depreciation recapture -> after-tax proceeds
"""

from decimal import Decimal

from projector.engines.brackets import DEFAULT_TAX_YEAR
from projector.engines.federal import FederalTaxCalculator
from projector.engines.recapture import DepreciationRecaptureCalculator
from projector.engines.rounding import ZERO, to_cents
from projector.engines.section121 import Section121Calculator
from projector.engines.state import StateTaxCalculator
from projector.models.inputs import SaleConfig
from projector.models.tax import SaleTaxBreakdown, Section121Requirements


class SaleTaxCalculator:
    """Computes taxes and net proceeds for a planned property sale."""

    def __init__(self, tax_year: int = DEFAULT_TAX_YEAR) -> None:
        self.federal = FederalTaxCalculator(tax_year)
        self.state = StateTaxCalculator()
        self.section_121 = Section121Calculator()
        self.recapture = DepreciationRecaptureCalculator(tax_year)

    def effective_sale_price(self, sale: SaleConfig, projected_value: Decimal) -> Decimal:
        """Projected value, or the expected price when the user supplied one."""
        if sale.use_projected_value or sale.expected_sale_price is None:
            return to_cents(projected_value)
        return to_cents(sale.expected_sale_price)

    def calculate(
        self,
        purchase_price: Decimal,
        sale: SaleConfig,
        projected_value: Decimal,
        pre_sale_mortgage_balance: Decimal,
    ) -> SaleTaxBreakdown:
        sale_price = self.effective_sale_price(sale, projected_value)
        selling_costs = to_cents(sale_price * sale.selling_costs_percentage / 100)
        cost_basis = purchase_price + sale.capital_improvements + sale.original_buying_costs
        capital_gain = max(sale_price - selling_costs - cost_basis, ZERO)

        exclusion = None
        remaining_gain = capital_gain
        if sale.enable_section_121:
            exclusion = self.section_121.calculate_exclusion(
                capital_gain,
                sale.filing_status,
                Section121Requirements(
                    is_primary_residence=sale.is_primary_residence,
                    years_owned=sale.years_owned,
                    years_lived=sale.years_lived,
                    has_used_exclusion_in_last_two_years=sale.has_used_exclusion_in_last_two_years,
                ),
            )
            remaining_gain = exclusion.remaining_gain

        federal = self.federal.calculate_with_adjustments(
            remaining_gain,
            sale.annual_income,
            sale.filing_status,
            other_capital_gains=sale.other_capital_gains,
            carryover_losses=sale.carryover_losses,
        )
        taxable_gain = federal.taxable_gain

        if sale.enable_state_tax and sale.state:
            state = self.state.calculate_state_tax(taxable_gain, sale.state)
        else:
            state = self.state.disabled(sale.state)

        recapture = None
        if sale.enable_depreciation_recapture:
            recapture = self.recapture.calculate_recapture(
                sale.total_depreciation_taken, sale.annual_income, sale.filing_status
            )

        recapture_tax = recapture.recapture_tax if recapture else ZERO
        total_tax = federal.tax_amount + state.tax_amount + recapture_tax
        payoff = to_cents(pre_sale_mortgage_balance)
        net_sale_proceeds = sale_price - selling_costs - payoff

        return SaleTaxBreakdown(
            effective_sale_price=sale_price,
            selling_costs=selling_costs,
            adjusted_cost_basis=cost_basis,
            capital_gain=capital_gain,
            section_121=exclusion,
            taxable_gain=taxable_gain,
            federal=federal,
            state=state,
            recapture=recapture,
            federal_tax=federal.tax_amount,
            state_tax=state.tax_amount,
            recapture_tax=recapture_tax,
            total_tax=total_tax,
            pre_sale_mortgage_balance=payoff,
            net_sale_proceeds=net_sale_proceeds,
            net_after_tax_proceeds=net_sale_proceeds - total_tax,
        )
