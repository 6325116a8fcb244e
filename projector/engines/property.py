"""Property projection engine.

Simulates a mortgaged property year by year: P&I amortization (after
fast-forwarding the years already owned), value appreciation under either
growth model, optional rental operation, and an optional sale that moves the
timeline through PRE_SALE -> SALE_YEAR -> POST_SALE.

A user-supplied monthly payment never amortizes the loan faster. The loan
always amortizes on the calculated P&I payment; anything above it is
reported as other fees (taxes, insurance, HOA).
"""

import logging
from decimal import Decimal

from projector.engines import amortization
from projector.engines.amortization import MONTHS_PER_YEAR
from projector.engines.compounding import compound, inflation_base, rate_base
from projector.engines.rounding import ZERO, to_cents
from projector.engines.sale import SaleTaxCalculator
from projector.models.enums import PropertyGrowthModel, SalePhase
from projector.models.inputs import PropertyInputs, SaleConfig
from projector.models.results import PropertySummary, PropertyYearResult

logger = logging.getLogger(__name__)

# Assumed months a unit sits empty between tenants when sizing listing turnover.
VACANT_MONTHS_PER_TURNOVER = Decimal("1.5")


def listing_events_per_year(vacancy_rate: Decimal) -> Decimal:
    """Tenant turnovers per year implied by a vacancy rate.

    Each turnover leaves the unit vacant for 1.5 months, and the occupied
    stretch between turnovers is sized so that vacancy makes up
    ``vacancy_rate`` percent of the cycle.
    """
    if vacancy_rate <= 0:
        return ZERO
    occupied_months = VACANT_MONTHS_PER_TURNOVER * (100 - vacancy_rate) / vacancy_rate
    return MONTHS_PER_YEAR / (occupied_months + VACANT_MONTHS_PER_TURNOVER)


class PropertyProjectionEngine:
    """Projects a property timeline, including the sale year tax waterfall."""

    def __init__(self, sale_tax: SaleTaxCalculator | None = None) -> None:
        self.sale_tax = sale_tax or SaleTaxCalculator()

    # --- Growth ---

    def property_value(self, inputs: PropertyInputs, year: int) -> Decimal:
        growth = rate_base(inputs.property_growth_rate)
        if inputs.property_growth_model == PropertyGrowthModel.CURRENT_VALUE:
            return inputs.current_estimated_value * compound(growth, year)
        return inputs.purchase_price * compound(growth, max(inputs.years_bought, 0) + year)

    def monthly_rent(self, inputs: PropertyInputs, year: int) -> Decimal:
        return inputs.monthly_rent * compound(rate_base(inputs.rent_growth_rate), year)

    def inflation_factor(self, inputs: PropertyInputs, year: int) -> Decimal:
        return compound(inflation_base(inputs.inflation_rate), year)

    # --- Mortgage ---

    def calculated_payment(self, inputs: PropertyInputs) -> Decimal:
        loan = amortization.loan_amount(inputs.purchase_price, inputs.down_payment_percentage)
        return amortization.principal_interest_payment(loan, inputs.interest_rate, inputs.loan_term)

    def starting_mortgage_balance(self, inputs: PropertyInputs) -> Decimal:
        """Loan balance after the payments made during ``years_bought``."""
        loan = amortization.loan_amount(inputs.purchase_price, inputs.down_payment_percentage)
        if inputs.years_bought <= 0:
            return loan
        period = amortization.amortize(
            loan,
            self.calculated_payment(inputs),
            amortization.monthly_rate(inputs.interest_rate),
            inputs.years_bought * MONTHS_PER_YEAR,
        )
        return period.ending_balance

    def _payment_breakdown(
        self, inputs: PropertyInputs, calculated_pi: Decimal, balance: Decimal
    ) -> tuple[Decimal, Decimal, Decimal]:
        """(total monthly payment, P&I portion, other fees) while ``balance`` is owed."""
        user_payment = max(inputs.user_monthly_payment, ZERO)
        if balance > 0:
            total = user_payment if user_payment > 0 else calculated_pi
            pi = calculated_pi
        else:
            total = user_payment
            pi = ZERO
        return total, pi, max(total - pi, ZERO)

    # --- Sale ---

    def sale_phase(self, inputs: PropertyInputs, sale: SaleConfig | None, year: int) -> SalePhase:
        sale_year = self.active_sale_year(inputs, sale)
        if sale_year is None or year < sale_year:
            return SalePhase.PRE_SALE
        if year == sale_year:
            return SalePhase.SALE_YEAR
        return SalePhase.POST_SALE

    def active_sale_year(self, inputs: PropertyInputs, sale: SaleConfig | None) -> int | None:
        """Sale year when a sale is planned inside the horizon, else None."""
        if sale is None or not sale.is_planned_for_sale or sale.sale_year is None:
            return None
        if not 1 <= sale.sale_year <= inputs.years:
            return None
        return sale.sale_year

    # --- Projection ---

    def project(
        self, inputs: PropertyInputs, sale: SaleConfig | None = None
    ) -> list[PropertyYearResult]:
        """Return ``years + 1`` results; index 0 is the state at projection start."""
        calculated_pi = self.calculated_payment(inputs)
        rate = amortization.monthly_rate(inputs.interest_rate)
        user_payment = max(inputs.user_monthly_payment, ZERO)
        balance = self.starting_mortgage_balance(inputs)

        logger.debug(
            "Projecting property: price=%s loan balance=%s P&I=%s",
            inputs.purchase_price, balance, calculated_pi,
        )

        value = self.property_value(inputs, 0)
        payment, pi, other_fees = self._payment_breakdown(inputs, calculated_pi, balance)
        results = [
            PropertyYearResult(
                year=0,
                actual_year=inputs.starting_year,
                balance=to_cents(value),
                real_balance=to_cents(value),
                mortgage_balance=to_cents(balance),
                monthly_payment=to_cents(payment),
                principal_interest_payment=to_cents(pi),
                other_fees_payment=to_cents(other_fees),
            )
        ]

        for year in range(1, inputs.years + 1):
            phase = self.sale_phase(inputs, sale, year)
            if phase == SalePhase.POST_SALE:
                results.append(
                    PropertyYearResult(
                        year=year,
                        actual_year=inputs.starting_year + year,
                        balance=ZERO,
                        real_balance=ZERO,
                        is_post_sale=True,
                    )
                )
                continue

            months = sale.sale_month if phase == SalePhase.SALE_YEAR else MONTHS_PER_YEAR
            months = min(max(months, 1), MONTHS_PER_YEAR)
            fraction = Decimal(months) / MONTHS_PER_YEAR

            opening_balance = balance
            period = amortization.amortize(balance, calculated_pi, rate, months)
            balance = period.ending_balance
            if opening_balance > 0 and balance == 0:
                logger.debug("Mortgage paid off in projection year %d", year)

            if user_payment > 0:
                mortgage_outflow = user_payment * months
            else:
                mortgage_outflow = period.principal_paid + period.interest_paid

            value = self.property_value(inputs, year)
            inflation_factor = self.inflation_factor(inputs, year)

            income = maintenance = listing = management = ZERO
            if inputs.is_rental_property:
                rent = self.monthly_rent(inputs, year)
                income = rent * MONTHS_PER_YEAR * (1 - inputs.vacancy_rate / 100) * fraction
                maintenance = value * inputs.maintenance_rate / 100 * fraction
                if inputs.property_management_enabled:
                    events = listing_events_per_year(inputs.vacancy_rate)
                    listing = events * rent * inputs.listing_fee_rate / 100 * fraction
                    management = income * inputs.monthly_management_fee_rate / 100
            expenses = maintenance + listing + management
            operating_cash_flow = income - expenses - mortgage_outflow

            payment, pi, other_fees = self._payment_breakdown(inputs, calculated_pi, balance)
            fields = dict(
                year=year,
                actual_year=inputs.starting_year + year,
                monthly_payment=to_cents(payment),
                principal_interest_payment=to_cents(pi),
                other_fees_payment=to_cents(other_fees),
                principal_paid=to_cents(period.principal_paid),
                interest_paid=to_cents(period.interest_paid),
                annual_rental_income=to_cents(income),
                maintenance_expenses=to_cents(maintenance),
                listing_expenses=to_cents(listing),
                monthly_management_expenses=to_cents(management),
                total_rental_expenses=to_cents(expenses),
                operating_cash_flow=to_cents(operating_cash_flow),
            )

            if phase == SalePhase.SALE_YEAR:
                breakdown = self.sale_tax.calculate(inputs.purchase_price, sale, value, balance)
                cash_flow = operating_cash_flow + breakdown.net_sale_proceeds
                logger.debug(
                    "Sale in year %d month %d: price=%s net=%s after tax=%s",
                    year, months, breakdown.effective_sale_price,
                    breakdown.net_sale_proceeds, breakdown.net_after_tax_proceeds,
                )
                results.append(
                    PropertyYearResult(
                        **fields,
                        balance=ZERO,
                        real_balance=ZERO,
                        mortgage_balance=ZERO,
                        annual_cash_flow=to_cents(cash_flow),
                        real_annual_cash_flow=to_cents(cash_flow / inflation_factor),
                        is_sale_year=True,
                        pre_sale_mortgage_balance=breakdown.pre_sale_mortgage_balance,
                        net_sale_proceeds=breakdown.net_sale_proceeds,
                        sale_proceeds=breakdown.net_after_tax_proceeds,
                        sale_tax=breakdown,
                    )
                )
                balance = ZERO
                continue

            results.append(
                PropertyYearResult(
                    **fields,
                    balance=to_cents(value),
                    real_balance=to_cents(value / inflation_factor),
                    mortgage_balance=to_cents(balance),
                    annual_cash_flow=to_cents(operating_cash_flow),
                    real_annual_cash_flow=to_cents(operating_cash_flow / inflation_factor),
                )
            )

        return results

    def summarize(
        self, inputs: PropertyInputs, results: list[PropertyYearResult]
    ) -> PropertySummary | None:
        """Loan and cash-flow overview; None when there is no purchase price."""
        if inputs.purchase_price <= 0 or not results:
            return None

        final = results[-1]
        loan = amortization.loan_amount(inputs.purchase_price, inputs.down_payment_percentage)
        calculated_pi = self.calculated_payment(inputs)
        total_paid = calculated_pi * MONTHS_PER_YEAR * inputs.loan_term
        current_cash_flow = final.annual_cash_flow

        return PropertySummary(
            purchase_price=inputs.purchase_price,
            down_payment_percentage=inputs.down_payment_percentage,
            down_payment_amount=to_cents(inputs.purchase_price - loan),
            loan_amount=to_cents(loan),
            interest_rate=inputs.interest_rate,
            loan_term=inputs.loan_term,
            monthly_payment=final.monthly_payment,
            total_paid=to_cents(total_paid),
            total_interest=to_cents(total_paid - loan),
            paid_off=final.mortgage_balance == 0,
            remaining_balance=final.mortgage_balance,
            current_cash_flow=current_cash_flow,
            monthly_cash_flow=to_cents(current_cash_flow / MONTHS_PER_YEAR),
            is_positive_cash_flow=current_cash_flow > 0,
        )
