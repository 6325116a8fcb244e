"""Tests for input and result models."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from projector.models import (
    FilingStatus,
    InvestmentInputs,
    PropertyGrowthModel,
    PropertyInputs,
    PropertyYearResult,
    SaleConfig,
)


class TestInvestmentInputs:
    def test_defaults(self):
        inputs = InvestmentInputs()
        assert inputs.initial_amount == Decimal("10000")
        assert inputs.rate_of_return == Decimal("7")
        assert inputs.annual_contribution == Decimal("5000")
        assert not inputs.inflation_adjusted_contributions
        assert inputs.starting_year == date.today().year

    def test_string_numbers_coerced(self):
        inputs = InvestmentInputs(initial_amount="2500.50", years="3")
        assert inputs.initial_amount == Decimal("2500.50")
        assert inputs.years == 3

    def test_frozen(self):
        with pytest.raises(ValidationError):
            InvestmentInputs().years = 5

    def test_copy_with_update(self):
        inputs = InvestmentInputs()
        changed = inputs.model_copy(update={"years": 30})
        assert changed.years == 30
        assert inputs.years == 10

    def test_hashable(self):
        assert hash(InvestmentInputs(starting_year=2024)) == hash(InvestmentInputs(starting_year=2024))


class TestPropertyInputs:
    def test_defaults(self):
        inputs = PropertyInputs()
        assert inputs.purchase_price == Decimal("500000")
        assert inputs.down_payment_percentage == Decimal("20")
        assert inputs.loan_term == 30
        assert inputs.property_growth_model == PropertyGrowthModel.PURCHASE_PRICE
        assert inputs.listing_fee_rate == Decimal("100")
        assert inputs.monthly_management_fee_rate == Decimal("10")
        assert not inputs.is_rental_property

    def test_growth_model_from_value(self):
        assert PropertyInputs(property_growth_model="current_value").property_growth_model == (
            PropertyGrowthModel.CURRENT_VALUE
        )


class TestSaleConfig:
    def test_defaults(self):
        sale = SaleConfig()
        assert not sale.is_planned_for_sale
        assert sale.sale_year is None
        assert sale.sale_month == 6
        assert sale.use_projected_value
        assert sale.selling_costs_percentage == Decimal("7")
        assert sale.reinvest_proceeds
        assert sale.filing_status == FilingStatus.SINGLE
        assert sale.enable_state_tax
        assert sale.enable_section_121
        assert not sale.enable_depreciation_recapture
        assert sale.land_value_percentage == Decimal("20")

    def test_filing_status_values(self):
        assert SaleConfig(filing_status="married_joint").filing_status == FilingStatus.MFJ
        with pytest.raises(ValidationError):
            SaleConfig(filing_status="widowed")


class TestPropertyYearResult:
    def test_equity(self):
        result = PropertyYearResult(
            year=1,
            actual_year=2025,
            balance=Decimal("515000.00"),
            real_balance=Decimal("502439.02"),
            mortgage_balance=Decimal("395000.00"),
        )
        assert result.equity == Decimal("120000.00")
        assert not result.is_sale_year
        assert result.sale_tax is None
