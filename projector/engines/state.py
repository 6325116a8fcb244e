"""Simplified state capital gains tax (one flat rate per state)."""

from decimal import Decimal

from projector.engines.brackets import NO_TAX_STATES, STATE_TAX_RATES, StateTaxInfo
from projector.engines.rounding import ZERO, to_cents
from projector.models.tax import (
    CombinedTaxCalculation,
    NoTaxStateSavings,
    RelocationImpact,
    StateComparison,
    StateTaxCalculation,
)

MINIMAL_IMPACT_THRESHOLD = Decimal("1000")
MODEST_SAVINGS_THRESHOLD = Decimal("5000")
MODERATE_SAVINGS_THRESHOLD = Decimal("25000")


def _money(amount: Decimal) -> str:
    return f"${amount:,.0f}"


class StateTaxCalculator:
    """Applies a state's flat capital gains rate to a gain."""

    def get_state_info(self, state_code: str) -> StateTaxInfo | None:
        return STATE_TAX_RATES.get(state_code.strip().upper())

    def get_state_tax_rate(self, state_code: str) -> Decimal:
        info = self.get_state_info(state_code)
        return info.rate if info else ZERO

    def has_capital_gains_tax(self, state_code: str) -> bool:
        info = self.get_state_info(state_code)
        return info.has_capital_gains_tax if info else False

    def calculate_state_tax(self, capital_gain: Decimal, state_code: str) -> StateTaxCalculation:
        info = self.get_state_info(state_code)
        if info is None:
            return StateTaxCalculation(
                state_code=state_code.strip().upper(),
                state_name="Unknown State",
                tax_rate=ZERO,
                taxable_gain=ZERO,
                tax_amount=ZERO,
                has_capital_gains_tax=False,
                notes="State not found in tax database",
            )

        code = state_code.strip().upper()
        taxable_gain = max(capital_gain, ZERO)
        if not info.has_capital_gains_tax or taxable_gain == 0:
            return StateTaxCalculation(
                state_code=code,
                state_name=info.name,
                tax_rate=ZERO,
                taxable_gain=taxable_gain,
                tax_amount=ZERO,
                has_capital_gains_tax=info.has_capital_gains_tax,
                notes=info.notes,
            )

        return StateTaxCalculation(
            state_code=code,
            state_name=info.name,
            tax_rate=info.rate,
            taxable_gain=taxable_gain,
            tax_amount=to_cents(taxable_gain * info.rate),
            has_capital_gains_tax=True,
            notes=info.notes,
        )

    def disabled(self, state_code: str) -> StateTaxCalculation:
        """Zero-tax result for a sale whose state tax is switched off."""
        info = self.get_state_info(state_code)
        return StateTaxCalculation(
            state_code=state_code.strip().upper(),
            state_name=info.name if info else "",
            tax_rate=ZERO,
            taxable_gain=ZERO,
            tax_amount=ZERO,
            has_capital_gains_tax=info.has_capital_gains_tax if info else False,
            notes="State tax disabled or sale not configured",
        )

    def calculate_after_exclusion(
        self, total_capital_gain: Decimal, excluded_amount: Decimal, state_code: str
    ) -> StateTaxCalculation:
        remaining_gain = max(total_capital_gain - excluded_amount, ZERO)
        return self.calculate_state_tax(remaining_gain, state_code)

    def calculate_combined_tax(
        self, capital_gain: Decimal, state_code: str, federal_tax: Decimal
    ) -> CombinedTaxCalculation:
        state_calculation = self.calculate_state_tax(capital_gain, state_code)
        total_tax = federal_tax + state_calculation.tax_amount
        effective_rate = total_tax / capital_gain if capital_gain > 0 else ZERO
        return CombinedTaxCalculation(
            federal_tax=federal_tax,
            state_tax=state_calculation.tax_amount,
            total_tax=total_tax,
            effective_rate=effective_rate,
            state_calculation=state_calculation,
        )

    def compare_states(self, capital_gain: Decimal, state_codes: list[str]) -> list[StateComparison]:
        """Tax the same gain in several states; savings are relative to the costliest."""
        calculations = [self.calculate_state_tax(capital_gain, code) for code in state_codes]
        if not calculations:
            return []
        max_tax = max(calc.tax_amount for calc in calculations)
        return [
            StateComparison(**calc.model_dump(), savings=max_tax - calc.tax_amount)
            for calc in calculations
        ]

    def relocation_impact(
        self, capital_gain: Decimal, from_state: str, to_state: str
    ) -> RelocationImpact:
        from_calc = self.calculate_state_tax(capital_gain, from_state)
        to_calc = self.calculate_state_tax(capital_gain, to_state)
        difference = to_calc.tax_amount - from_calc.tax_amount

        if abs(difference) < MINIMAL_IMPACT_THRESHOLD:
            recommendation = "Tax impact is minimal between these states"
        elif difference > 0:
            recommendation = (
                f"Moving to {to_calc.state_name} would increase tax by {_money(abs(difference))}"
            )
        else:
            recommendation = (
                f"Moving to {to_calc.state_name} would save {_money(abs(difference))} in taxes"
            )

        return RelocationImpact(
            from_state_calculation=from_calc,
            to_state_calculation=to_calc,
            tax_difference=difference,
            savings=-difference,
            recommendation=recommendation,
        )

    def no_tax_states(self) -> list[str]:
        return list(NO_TAX_STATES)

    def no_tax_state_savings(self, capital_gain: Decimal, current_state: str) -> NoTaxStateSavings:
        current = self.calculate_state_tax(capital_gain, current_state)
        savings = current.tax_amount

        if savings == 0:
            recommendation = f"{current.state_name} already has no capital gains tax"
        elif savings < MODEST_SAVINGS_THRESHOLD:
            recommendation = "Tax savings from relocation may not justify moving costs"
        elif savings < MODERATE_SAVINGS_THRESHOLD:
            recommendation = (
                "Moderate tax savings possible, consider relocation costs and other factors"
            )
        else:
            recommendation = (
                "Significant tax savings possible, relocation may be worthwhile for large gains"
            )

        return NoTaxStateSavings(
            current_tax=current.tax_amount,
            potential_savings=savings,
            no_tax_states=self.no_tax_states(),
            recommendation=recommendation,
        )
