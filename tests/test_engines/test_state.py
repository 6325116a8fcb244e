"""Tests for state capital gains tax, comparisons and relocation analysis."""

from decimal import Decimal

import pytest

from projector.engines.state import StateTaxCalculator


@pytest.fixture
def calc():
    return StateTaxCalculator()


class TestStateLookup:
    def test_rate_lookup(self, calc):
        assert calc.get_state_tax_rate("CA") == Decimal("0.133")

    def test_code_is_case_insensitive(self, calc):
        assert calc.get_state_tax_rate(" ca ") == Decimal("0.133")
        assert calc.get_state_info("ny").name == "New York"

    def test_unknown_state_has_zero_rate(self, calc):
        assert calc.get_state_tax_rate("ZZ") == 0
        assert not calc.has_capital_gains_tax("ZZ")


class TestCalculateStateTax:
    def test_california(self, calc):
        result = calc.calculate_state_tax(Decimal("200000"), "CA")
        assert result.tax_amount == Decimal("26600.00")
        assert result.tax_rate == Decimal("0.133")
        assert result.state_name == "California"
        assert result.has_capital_gains_tax

    def test_no_tax_state(self, calc):
        result = calc.calculate_state_tax(Decimal("200000"), "TX")
        assert result.tax_amount == 0
        assert result.tax_rate == 0
        assert not result.has_capital_gains_tax
        assert result.notes == "No state income tax"

    def test_unknown_state(self, calc):
        result = calc.calculate_state_tax(Decimal("200000"), "ZZ")
        assert result.state_name == "Unknown State"
        assert result.notes == "State not found in tax database"
        assert result.tax_amount == 0

    def test_loss_is_not_taxed(self, calc):
        result = calc.calculate_state_tax(Decimal("-10000"), "CA")
        assert result.taxable_gain == 0
        assert result.tax_amount == 0

    def test_disabled(self, calc):
        result = calc.disabled("CA")
        assert result.tax_amount == 0
        assert result.notes == "State tax disabled or sale not configured"

    def test_after_exclusion(self, calc):
        result = calc.calculate_after_exclusion(Decimal("389000"), Decimal("250000"), "CA")
        assert result.taxable_gain == Decimal("139000")
        assert result.tax_amount == Decimal("18487.00")


class TestCombinedAndComparisons:
    def test_combined_tax(self, calc):
        result = calc.calculate_combined_tax(Decimal("200000"), "CA", Decimal("30000"))
        assert result.state_tax == Decimal("26600.00")
        assert result.total_tax == Decimal("56600.00")
        assert result.effective_rate == Decimal("0.283")

    def test_combined_tax_zero_gain(self, calc):
        result = calc.calculate_combined_tax(Decimal("0"), "CA", Decimal("0"))
        assert result.effective_rate == 0

    def test_compare_states_savings_relative_to_costliest(self, calc):
        results = calc.compare_states(Decimal("100000"), ["CA", "TX", "NY"])
        by_code = {r.state_code: r for r in results}
        assert by_code["CA"].savings == 0
        assert by_code["TX"].savings == Decimal("13300.00")
        assert by_code["NY"].savings == Decimal("2400.00")

    def test_compare_no_states(self, calc):
        assert calc.compare_states(Decimal("100000"), []) == []

    def test_relocation_savings(self, calc):
        result = calc.relocation_impact(Decimal("500000"), "CA", "TX")
        assert result.tax_difference == Decimal("-66500.00")
        assert result.savings == Decimal("66500.00")
        assert result.recommendation == "Moving to Texas would save $66,500 in taxes"

    def test_relocation_increase(self, calc):
        result = calc.relocation_impact(Decimal("500000"), "TX", "CA")
        assert result.recommendation == "Moving to California would increase tax by $66,500"

    def test_relocation_minimal(self, calc):
        result = calc.relocation_impact(Decimal("1000"), "CA", "TX")
        assert result.recommendation == "Tax impact is minimal between these states"


class TestNoTaxStates:
    def test_list(self, calc):
        states = calc.no_tax_states()
        assert "TX" in states and "FL" in states
        assert "CA" not in states

    def test_significant_savings(self, calc):
        result = calc.no_tax_state_savings(Decimal("1000000"), "CA")
        assert result.potential_savings == Decimal("133000.00")
        assert result.recommendation.startswith("Significant")

    def test_already_no_tax(self, calc):
        result = calc.no_tax_state_savings(Decimal("1000000"), "FL")
        assert result.potential_savings == 0
        assert result.recommendation == "Florida already has no capital gains tax"

    def test_modest_savings(self, calc):
        result = calc.no_tax_state_savings(Decimal("20000"), "CA")
        assert result.recommendation == "Tax savings from relocation may not justify moving costs"

    def test_moderate_savings(self, calc):
        result = calc.no_tax_state_savings(Decimal("100000"), "CA")
        assert result.recommendation.startswith("Moderate")
