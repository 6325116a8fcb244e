"""Fixed-rate mortgage amortization."""

from dataclasses import dataclass
from decimal import Decimal

from projector.engines.rounding import ZERO

MONTHS_PER_YEAR = 12

# Balances below half a cent are treated as paid off.
PAYOFF_TOLERANCE = Decimal("0.005")


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def loan_amount(purchase_price: Decimal, down_payment_percentage: Decimal) -> Decimal:
    return max(purchase_price * (1 - down_payment_percentage / 100), ZERO)


def principal_interest_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_years: int
) -> Decimal:
    """Level monthly P&I payment that retires ``principal`` over ``term_years``."""
    payments = term_years * MONTHS_PER_YEAR
    if principal <= 0 or payments <= 0:
        return ZERO

    rate = monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / payments

    growth = (1 + rate) ** payments
    return principal * (rate * growth) / (growth - 1)


@dataclass
class AmortizationPeriod:
    """Totals for a run of consecutive monthly payments."""

    starting_balance: Decimal
    ending_balance: Decimal
    principal_paid: Decimal = ZERO
    interest_paid: Decimal = ZERO
    payments_made: int = 0


def amortize(balance: Decimal, payment: Decimal, rate: Decimal, months: int) -> AmortizationPeriod:
    """Apply ``months`` P&I payments at monthly ``rate``; stops once the loan is paid off."""
    period = AmortizationPeriod(starting_balance=balance, ending_balance=balance)
    if payment <= 0:
        return period

    for _ in range(months):
        if balance <= 0:
            break
        interest = balance * rate
        principal = min(payment - interest, balance)
        balance -= principal
        if balance < PAYOFF_TOLERANCE:
            balance = ZERO
        period.principal_paid += principal
        period.interest_paid += interest
        period.payments_made += 1

    period.ending_balance = balance
    return period
