"""Shared test fixtures for the asset projector."""

from decimal import Decimal

import pytest

from projector.models.enums import FilingStatus
from projector.models.inputs import InvestmentInputs, PropertyInputs, SaleConfig


@pytest.fixture
def investment_inputs() -> InvestmentInputs:
    return InvestmentInputs(
        initial_amount=Decimal("100000"),
        rate_of_return=Decimal("7"),
        inflation_rate=Decimal("2.5"),
        annual_contribution=Decimal("0"),
        years=10,
        starting_year=2024,
    )


@pytest.fixture
def property_inputs() -> PropertyInputs:
    """$500K purchase, 20% down, 7% for 30 years."""
    return PropertyInputs(
        purchase_price=Decimal("500000"),
        down_payment_percentage=Decimal("20"),
        interest_rate=Decimal("7"),
        loan_term=30,
        years=10,
        inflation_rate=Decimal("2.5"),
        starting_year=2024,
        property_growth_rate=Decimal("3"),
    )


@pytest.fixture
def rental_inputs(property_inputs: PropertyInputs) -> PropertyInputs:
    return property_inputs.model_copy(
        update={
            "is_rental_property": True,
            "monthly_rent": Decimal("2000"),
            "rent_growth_rate": Decimal("3"),
            "vacancy_rate": Decimal("5"),
            "maintenance_rate": Decimal("2"),
        }
    )


@pytest.fixture
def sale_config() -> SaleConfig:
    """Sale in year 5, month 6, at the projected value with 7% selling costs."""
    return SaleConfig(
        is_planned_for_sale=True,
        sale_year=5,
        sale_month=6,
        use_projected_value=True,
        selling_costs_percentage=Decimal("7"),
        reinvest_proceeds=False,
        filing_status=FilingStatus.SINGLE,
        annual_income=Decimal("100000"),
    )
