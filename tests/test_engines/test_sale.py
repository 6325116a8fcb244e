"""Tests for the sale state machine and the sale tax waterfall."""

from decimal import Decimal

import pytest

from projector.engines import amortization
from projector.engines.property import PropertyProjectionEngine
from projector.engines.rounding import to_cents
from projector.engines.sale import SaleTaxCalculator
from projector.models.enums import FilingStatus, SalePhase
from projector.models.inputs import SaleConfig


@pytest.fixture
def engine():
    return PropertyProjectionEngine()


@pytest.fixture
def calc():
    return SaleTaxCalculator()


def _sale(**overrides) -> SaleConfig:
    values = {
        "is_planned_for_sale": True,
        "sale_year": 1,
        "use_projected_value": False,
        "selling_costs_percentage": Decimal("0"),
        "filing_status": FilingStatus.SINGLE,
        "annual_income": Decimal("100000"),
    }
    values.update(overrides)
    return SaleConfig(**values)


class TestSalePhases:
    def test_phase_sequence(self, engine, property_inputs, sale_config):
        phases = [engine.sale_phase(property_inputs, sale_config, y) for y in range(1, 11)]
        assert phases == [SalePhase.PRE_SALE] * 4 + [SalePhase.SALE_YEAR] + [SalePhase.POST_SALE] * 5

    def test_no_sale_planned(self, engine, property_inputs):
        assert engine.active_sale_year(property_inputs, None) is None
        assert engine.active_sale_year(property_inputs, SaleConfig(sale_year=3)) is None

    def test_sale_beyond_horizon_is_ignored(self, engine, property_inputs, sale_config):
        sale = sale_config.model_copy(update={"sale_year": 15})
        results = engine.project(property_inputs, sale)
        assert not any(r.is_sale_year or r.is_post_sale for r in results)
        assert results[-1].balance > 0

    def test_sale_year_flags(self, engine, property_inputs, sale_config):
        results = engine.project(property_inputs, sale_config)
        assert [r.year for r in results if r.is_sale_year] == [5]
        assert [r.year for r in results if r.is_post_sale] == [6, 7, 8, 9, 10]

    def test_sale_year_zeroes_holdings(self, engine, property_inputs, sale_config):
        sale_year = engine.project(property_inputs, sale_config)[5]
        assert sale_year.balance == 0
        assert sale_year.real_balance == 0
        assert sale_year.mortgage_balance == 0
        assert sale_year.pre_sale_mortgage_balance > 0

    def test_post_sale_years_are_empty(self, engine, rental_inputs, sale_config):
        for result in engine.project(rental_inputs, sale_config)[6:]:
            assert result.balance == 0
            assert result.mortgage_balance == 0
            assert result.annual_cash_flow == 0
            assert result.annual_rental_income == 0
            assert result.monthly_payment == 0
            assert result.actual_year == 2024 + result.year


class TestSaleYearProration:
    def test_pre_sale_balance_after_partial_year(self, engine, property_inputs, sale_config):
        sale_year = engine.project(property_inputs, sale_config)[5]
        loan = Decimal("400000")
        payment = amortization.principal_interest_payment(loan, Decimal("7"), 30)
        expected = amortization.amortize(loan, payment, amortization.monthly_rate(Decimal("7")), 54)
        assert sale_year.pre_sale_mortgage_balance == to_cents(expected.ending_balance)

    def test_rental_income_and_maintenance_prorated(self, engine, rental_inputs):
        sale = SaleConfig(is_planned_for_sale=True, sale_year=2, sale_month=6)
        sale_year = engine.project(rental_inputs, sale)[2]
        assert sale_year.maintenance_expenses == Decimal("5304.50")
        assert sale_year.annual_rental_income == Decimal("12094.26")

    def test_december_sale_is_a_full_year(self, engine, rental_inputs):
        sale = SaleConfig(is_planned_for_sale=True, sale_year=1, sale_month=12)
        sold = engine.project(rental_inputs, sale)[1]
        kept = engine.project(rental_inputs)[1]
        assert sold.annual_rental_income == kept.annual_rental_income
        assert sold.operating_cash_flow == kept.operating_cash_flow

    def test_out_of_range_month_is_clamped(self, engine, rental_inputs):
        sale = SaleConfig(is_planned_for_sale=True, sale_year=1, sale_month=15)
        sold = engine.project(rental_inputs, sale)[1]
        assert sold.annual_rental_income == engine.project(rental_inputs)[1].annual_rental_income


class TestSaleProceeds:
    def test_net_proceeds(self, engine, property_inputs, sale_config):
        sale_year = engine.project(property_inputs, sale_config)[5]
        breakdown = sale_year.sale_tax
        assert breakdown.effective_sale_price == Decimal("579637.04")
        assert breakdown.selling_costs == Decimal("40574.59")
        assert sale_year.net_sale_proceeds == (
            Decimal("579637.04") - Decimal("40574.59") - sale_year.pre_sale_mortgage_balance
        )

    def test_sale_year_cash_flow_includes_proceeds(self, engine, property_inputs, sale_config):
        sale_year = engine.project(property_inputs, sale_config)[5]
        expected = sale_year.operating_cash_flow + sale_year.net_sale_proceeds
        assert abs(sale_year.annual_cash_flow - expected) <= Decimal("0.01")

    def test_sale_proceeds_are_after_tax(self, engine, property_inputs, sale_config):
        sale_year = engine.project(property_inputs, sale_config)[5]
        assert sale_year.sale_proceeds == sale_year.net_sale_proceeds - sale_year.sale_tax.total_tax
        assert sale_year.sale_tax.federal_tax > 0

    def test_expected_price_overrides_projection(self, calc):
        sale = _sale(expected_sale_price=Decimal("650000"))
        assert calc.effective_sale_price(sale, Decimal("579637.04")) == Decimal("650000.00")

    def test_missing_expected_price_uses_projection(self, calc):
        assert calc.effective_sale_price(_sale(), Decimal("579637.037")) == Decimal("579637.04")


class TestTaxWaterfall:
    def test_california_sale(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("700000"),
            selling_costs_percentage=Decimal("6"),
            capital_improvements=Decimal("20000"),
            original_buying_costs=Decimal("10000"),
            state="CA",
        )
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.selling_costs == Decimal("42000.00")
        assert result.adjusted_cost_basis == Decimal("530000")
        assert result.capital_gain == Decimal("128000.00")
        assert result.federal_tax == Decimal("19200.00")
        assert result.state_tax == Decimal("17024.00")
        assert result.total_tax == Decimal("36224.00")
        assert result.net_sale_proceeds == Decimal("658000.00")
        assert result.net_after_tax_proceeds == Decimal("621776.00")

    def test_section_121_reduces_gain(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("789000"),
            state="CA",
            is_primary_residence=True,
            years_owned=Decimal("5"),
            years_lived=Decimal("5"),
        )
        result = calc.calculate(Decimal("400000"), sale, Decimal("0"), Decimal("0"))
        assert result.capital_gain == Decimal("389000.00")
        assert result.section_121.applied_exclusion == Decimal("250000")
        assert result.taxable_gain == Decimal("139000.00")
        assert result.federal_tax == Decimal("20850.00")
        assert result.state_tax == Decimal("18487.00")

    def test_married_joint_gain_fully_excluded(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("946000"),
            filing_status=FilingStatus.MFJ,
            state="NY",
            is_primary_residence=True,
            years_owned=Decimal("3"),
            years_lived=Decimal("3"),
        )
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.capital_gain == Decimal("446000.00")
        assert result.taxable_gain == 0
        assert result.total_tax == 0

    def test_section_121_disabled(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("600000"),
            is_primary_residence=True,
            years_owned=Decimal("5"),
            years_lived=Decimal("5"),
            enable_section_121=False,
        )
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.section_121 is None
        assert result.taxable_gain == Decimal("100000.00")

    def test_other_gains_and_carryover(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("594000"),
            other_capital_gains=Decimal("25000"),
            carryover_losses=Decimal("10000"),
        )
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.taxable_gain == Decimal("109000.00")
        assert result.federal_tax == Decimal("16350.00")

    def test_loss_is_never_taxed(self, calc):
        sale = _sale(expected_sale_price=Decimal("400000"), state="CA")
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.capital_gain == 0
        assert result.total_tax == 0
        assert result.net_after_tax_proceeds == Decimal("400000.00")

    def test_state_tax_disabled(self, calc):
        sale = _sale(expected_sale_price=Decimal("600000"), state="CA", enable_state_tax=False)
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.state_tax == 0
        assert result.state.notes == "State tax disabled or sale not configured"

    def test_no_state_selected(self, calc):
        result = calc.calculate(
            Decimal("500000"), _sale(expected_sale_price=Decimal("600000")), Decimal("0"), Decimal("0")
        )
        assert result.state_tax == 0

    def test_depreciation_recapture(self, calc):
        sale = _sale(
            expected_sale_price=Decimal("600000"),
            enable_depreciation_recapture=True,
            total_depreciation_taken=Decimal("50000"),
        )
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.recapture_tax == Decimal("11000.00")
        assert result.total_tax == result.federal_tax + Decimal("11000.00")

    def test_recapture_disabled(self, calc):
        sale = _sale(expected_sale_price=Decimal("600000"), total_depreciation_taken=Decimal("50000"))
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("0"))
        assert result.recapture is None
        assert result.recapture_tax == 0

    def test_mortgage_payoff_reduces_proceeds_not_gain(self, calc):
        sale = _sale(expected_sale_price=Decimal("600000"))
        result = calc.calculate(Decimal("500000"), sale, Decimal("0"), Decimal("350000"))
        assert result.capital_gain == Decimal("100000.00")
        assert result.net_sale_proceeds == Decimal("250000.00")
        assert result.net_after_tax_proceeds == Decimal("235000.00")
