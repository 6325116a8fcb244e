"""Projection input models.

Rates and percentages are carried as percent values (``7`` means 7%), the
same way they are entered and persisted. Inputs are frozen: change them with
``model_copy(update=...)`` between projection runs.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from projector.models.enums import FilingStatus, PropertyGrowthModel


def _current_year() -> int:
    return date.today().year


class InvestmentInputs(BaseModel):
    """Parameters for a compounding investment account."""

    model_config = ConfigDict(frozen=True)

    initial_amount: Decimal = Decimal("10000")
    rate_of_return: Decimal = Decimal("7")
    inflation_rate: Decimal = Decimal("2.5")
    annual_contribution: Decimal = Field(
        default=Decimal("5000"),
        description="Signed yearly flow: positive deposits, negative withdrawals",
    )
    inflation_adjusted_contributions: bool = False
    years: int = 10
    starting_year: int = Field(default_factory=_current_year)


class SaleConfig(BaseModel):
    """Planned sale of a property and the tax profile used to tax it."""

    model_config = ConfigDict(frozen=True)

    is_planned_for_sale: bool = False
    sale_year: int | None = Field(default=None, description="1-based projection year")
    sale_month: int = 6
    use_projected_value: bool = True
    expected_sale_price: Decimal | None = None
    selling_costs_percentage: Decimal = Decimal("7")
    reinvest_proceeds: bool = True
    target_investment_id: str | None = None

    # --- Cost basis ---
    capital_improvements: Decimal = Decimal("0")
    original_buying_costs: Decimal = Decimal("0")

    # --- Tax profile ---
    filing_status: FilingStatus = FilingStatus.SINGLE
    annual_income: Decimal = Decimal("0")
    state: str = ""
    enable_state_tax: bool = True
    other_capital_gains: Decimal = Decimal("0")
    carryover_losses: Decimal = Decimal("0")

    # --- Section 121 primary residence exclusion ---
    is_primary_residence: bool = False
    years_owned: Decimal = Decimal("0")
    years_lived: Decimal = Decimal("0")
    has_used_exclusion_in_last_two_years: bool = False
    enable_section_121: bool = True

    # --- Depreciation recapture ---
    enable_depreciation_recapture: bool = False
    total_depreciation_taken: Decimal = Decimal("0")
    land_value_percentage: Decimal = Decimal("20")


class PropertyInputs(BaseModel):
    """Parameters for a mortgaged property, optionally operated as a rental."""

    model_config = ConfigDict(frozen=True)

    purchase_price: Decimal = Decimal("500000")
    down_payment_percentage: Decimal = Decimal("20")
    interest_rate: Decimal = Decimal("7")
    loan_term: int = 30
    years: int = 10
    inflation_rate: Decimal = Decimal("2.5")
    starting_year: int = Field(default_factory=_current_year)
    years_bought: int = Field(
        default=0, description="Years already owned before the projection starts"
    )
    property_growth_rate: Decimal = Decimal("3")
    property_growth_model: PropertyGrowthModel = PropertyGrowthModel.PURCHASE_PRICE
    current_estimated_value: Decimal = Decimal("0")
    user_monthly_payment: Decimal = Field(
        default=Decimal("0"),
        description="Total monthly payment override; 0 uses the calculated P&I",
    )
    linked_investment_id: str = ""

    # --- Rental operation ---
    is_rental_property: bool = False
    monthly_rent: Decimal = Decimal("2000")
    rent_growth_rate: Decimal = Decimal("3")
    vacancy_rate: Decimal = Decimal("5")
    maintenance_rate: Decimal = Decimal("2")
    property_management_enabled: bool = False
    listing_fee_rate: Decimal = Field(
        default=Decimal("100"), description="Percent of one month's rent per new tenant"
    )
    monthly_management_fee_rate: Decimal = Field(
        default=Decimal("10"), description="Percent of collected rent"
    )
