"""Projection output models.

Every yearly result shares the ``YearResult`` contract: projection year
index, calendar year, nominal balance, and real balance (nominal deflated by
cumulative inflation). Amounts are quantized to cents.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from projector.models.enums import AssetType
from projector.models.tax import SaleTaxBreakdown

ZERO = Decimal("0")


class YearResult(BaseModel):
    year: int
    actual_year: int
    balance: Decimal
    real_balance: Decimal


class InvestmentYearResult(YearResult):
    annual_contribution: Decimal = ZERO
    real_annual_contribution: Decimal = ZERO
    total_earnings: Decimal = ZERO
    real_total_earnings: Decimal = ZERO
    yearly_gain: Decimal = ZERO
    real_yearly_gain: Decimal = ZERO
    annual_investment_gain: Decimal = ZERO
    real_annual_investment_gain: Decimal = ZERO
    property_cash_flow: Decimal = ZERO
    real_property_cash_flow: Decimal = ZERO


class PropertyYearResult(YearResult):
    """One year of a property timeline; ``balance`` is the property value."""

    mortgage_balance: Decimal = ZERO
    monthly_payment: Decimal = ZERO
    principal_interest_payment: Decimal = ZERO
    other_fees_payment: Decimal = ZERO
    principal_paid: Decimal = ZERO
    interest_paid: Decimal = ZERO

    # --- Rental operation ---
    annual_rental_income: Decimal = ZERO
    maintenance_expenses: Decimal = ZERO
    listing_expenses: Decimal = ZERO
    monthly_management_expenses: Decimal = ZERO
    total_rental_expenses: Decimal = ZERO

    # --- Cash flow ---
    operating_cash_flow: Decimal = ZERO
    annual_cash_flow: Decimal = ZERO
    real_annual_cash_flow: Decimal = ZERO

    # --- Sale ---
    is_sale_year: bool = False
    is_post_sale: bool = False
    pre_sale_mortgage_balance: Decimal = ZERO
    net_sale_proceeds: Decimal = ZERO
    sale_proceeds: Decimal = Field(
        default=ZERO, description="Net proceeds after mortgage payoff, selling costs and taxes"
    )
    sale_tax: SaleTaxBreakdown | None = None

    @property
    def equity(self) -> Decimal:
        return self.balance - self.mortgage_balance


class InvestmentSummary(BaseModel):
    initial_amount: Decimal
    total_manual_contributed: Decimal
    total_manual_withdrawn: Decimal
    total_property_cash_flow: Decimal
    total_contributed: Decimal
    total_withdrawn: Decimal
    net_contributions: Decimal
    total_earnings: Decimal
    total_return: Decimal
    final_net_gain: Decimal
    real_final_net_gain: Decimal


class PropertySummary(BaseModel):
    purchase_price: Decimal
    down_payment_percentage: Decimal
    down_payment_amount: Decimal
    loan_amount: Decimal
    interest_rate: Decimal
    loan_term: int
    monthly_payment: Decimal
    total_paid: Decimal
    total_interest: Decimal
    paid_off: bool
    remaining_balance: Decimal
    current_cash_flow: Decimal
    monthly_cash_flow: Decimal
    is_positive_cash_flow: bool


class AssetBreakdown(BaseModel):
    """One asset's contribution to a combined portfolio year."""

    asset_id: str
    asset_name: str
    asset_type: AssetType
    balance: Decimal
    real_balance: Decimal
    contribution: Decimal = ZERO
    mortgage_balance: Decimal = ZERO


class CombinedYearResult(YearResult):
    """Portfolio-wide totals for one year; ``balance`` is the net worth."""

    total_investment_balance: Decimal = ZERO
    total_real_investment_balance: Decimal = ZERO
    total_property_value: Decimal = ZERO
    total_real_property_value: Decimal = ZERO
    total_mortgage_balance: Decimal = ZERO
    total_property_equity: Decimal = ZERO
    total_real_property_equity: Decimal = ZERO
    total_annual_contribution: Decimal = ZERO
    total_real_annual_contribution: Decimal = ZERO
    total_earnings: Decimal = ZERO
    total_real_earnings: Decimal = ZERO
    total_yearly_gain: Decimal = ZERO
    total_real_yearly_gain: Decimal = ZERO
    total_property_cash_flow: Decimal = ZERO
    asset_breakdown: list[AssetBreakdown] = Field(default_factory=list)
