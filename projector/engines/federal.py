"""Federal long-term capital gains tax.

Applies the single rate of the bracket that contains the filer's annual
income to the whole taxable gain. This is a flat-bracket estimate, not the
stacked computation of the Qualified Dividends and Capital Gain Tax Worksheet.
"""

from decimal import Decimal

from projector.engines.brackets import DEFAULT_TAX_YEAR, FEDERAL_LTCG_BRACKETS
from projector.engines.rounding import ZERO, to_cents
from projector.models.enums import FilingStatus
from projector.models.tax import FederalTaxCalculation, TaxBracket


class FederalTaxCalculator:
    """Looks up capital gains brackets and taxes a gain at the bracket rate."""

    def __init__(self, tax_year: int = DEFAULT_TAX_YEAR) -> None:
        self.tax_year = tax_year
        self.brackets = FEDERAL_LTCG_BRACKETS[tax_year]

    def get_tax_brackets(self, filing_status: FilingStatus) -> list[TaxBracket]:
        """Return the brackets for a filing status as half-open ranges."""
        result: list[TaxBracket] = []
        lower = ZERO
        for upper, rate in self.brackets[filing_status]:
            result.append(TaxBracket(min=lower, max=upper, rate=rate))
            if upper is not None:
                lower = upper
        return result

    def get_tax_bracket(self, annual_income: Decimal, filing_status: FilingStatus) -> TaxBracket:
        """Return the bracket containing ``annual_income`` (lower bound inclusive)."""
        brackets = self.get_tax_brackets(filing_status)
        for bracket in brackets:
            if annual_income >= bracket.min and (bracket.max is None or annual_income < bracket.max):
                return bracket
        # Only reachable for negative income
        return brackets[0]

    def get_capital_gains_rate(self, annual_income: Decimal, filing_status: FilingStatus) -> Decimal:
        return self.get_tax_bracket(annual_income, filing_status).rate

    def calculate_federal_tax(
        self,
        capital_gain: Decimal,
        annual_income: Decimal,
        filing_status: FilingStatus,
    ) -> FederalTaxCalculation:
        """Tax a gain at the flat rate of the income bracket. Losses are taxed as zero."""
        taxable_gain = max(capital_gain, ZERO)
        if taxable_gain == 0:
            return FederalTaxCalculation(
                taxable_gain=ZERO,
                tax_rate=ZERO,
                tax_amount=ZERO,
                bracket_info=TaxBracket(min=ZERO, max=ZERO, rate=ZERO),
            )

        bracket = self.get_tax_bracket(annual_income, filing_status)
        return FederalTaxCalculation(
            taxable_gain=taxable_gain,
            tax_rate=bracket.rate,
            tax_amount=to_cents(taxable_gain * bracket.rate),
            bracket_info=bracket,
        )

    def calculate_with_adjustments(
        self,
        capital_gain: Decimal,
        annual_income: Decimal,
        filing_status: FilingStatus,
        other_capital_gains: Decimal = ZERO,
        carryover_losses: Decimal = ZERO,
    ) -> FederalTaxCalculation:
        """Net other gains and carryover losses into the gain before taxing it.

        Carryover losses reduce the gain by their absolute value, so callers may
        pass them signed either way.
        """
        adjusted_gain = capital_gain - abs(carryover_losses) + other_capital_gains
        return self.calculate_federal_tax(adjusted_gain, annual_income, filing_status)
