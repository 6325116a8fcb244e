"""Tests for the Section 121 primary residence exclusion."""

from decimal import Decimal

import pytest

from projector.engines.section121 import Section121Calculator
from projector.models.enums import FilingStatus, QualifyingCircumstance
from projector.models.tax import Section121Requirements


@pytest.fixture
def calc():
    return Section121Calculator()


@pytest.fixture
def eligible():
    return Section121Requirements(
        is_primary_residence=True,
        years_owned=Decimal("5"),
        years_lived=Decimal("5"),
    )


class TestFullExclusion:
    def test_gain_below_cap_is_fully_excluded(self, calc, eligible):
        result = calc.calculate_exclusion(Decimal("200000"), FilingStatus.SINGLE, eligible)
        assert result.is_eligible
        assert result.applied_exclusion == Decimal("200000")
        assert result.remaining_gain == 0

    def test_gain_above_cap(self, calc, eligible):
        result = calc.calculate_exclusion(Decimal("300000"), FilingStatus.SINGLE, eligible)
        assert result.max_exclusion == Decimal("250000")
        assert result.applied_exclusion == Decimal("250000")
        assert result.remaining_gain == Decimal("50000")

    def test_married_joint_cap(self, calc, eligible):
        result = calc.calculate_exclusion(Decimal("446000"), FilingStatus.MFJ, eligible)
        assert result.applied_exclusion == Decimal("446000")
        assert result.remaining_gain == 0

    def test_loss_excludes_nothing(self, calc, eligible):
        result = calc.calculate_exclusion(Decimal("-1000"), FilingStatus.SINGLE, eligible)
        assert result.applied_exclusion == 0
        assert result.remaining_gain == Decimal("-1000")

    def test_exactly_two_years_qualifies(self, calc):
        reqs = Section121Requirements(
            is_primary_residence=True, years_owned=Decimal("2"), years_lived=Decimal("2")
        )
        assert calc.check_basic_eligibility(reqs)


class TestIneligibility:
    def test_not_primary_residence(self, calc):
        reqs = Section121Requirements(years_owned=Decimal("5"), years_lived=Decimal("5"))
        result = calc.calculate_exclusion(Decimal("100000"), FilingStatus.SINGLE, reqs)
        assert not result.is_eligible
        assert result.applied_exclusion == 0
        assert result.remaining_gain == Decimal("100000")
        assert result.reason == "Property is not a primary residence"

    def test_ownership_checked_before_use(self, calc):
        reqs = Section121Requirements(
            is_primary_residence=True, years_owned=Decimal("1.5"), years_lived=Decimal("1")
        )
        result = calc.calculate_exclusion(Decimal("100000"), FilingStatus.SINGLE, reqs)
        assert result.reason == (
            "Ownership requirement not met. Must own for at least 2 years (owned: 1.5 years)"
        )

    def test_use_requirement(self, calc):
        reqs = Section121Requirements(
            is_primary_residence=True, years_owned=Decimal("3"), years_lived=Decimal("1")
        )
        result = calc.calculate_exclusion(Decimal("100000"), FilingStatus.SINGLE, reqs)
        assert result.reason == (
            "Use requirement not met. Must live in home for at least 2 years (lived: 1 years)"
        )

    def test_recent_exclusion(self, calc, eligible):
        reqs = eligible.model_copy(update={"has_used_exclusion_in_last_two_years": True})
        result = calc.calculate_exclusion(Decimal("100000"), FilingStatus.SINGLE, reqs)
        assert result.reason == "Exclusion already used within the last 2 years"


class TestPartialExclusion:
    def test_half_period_gives_half_exclusion(self, calc):
        reqs = Section121Requirements(
            is_primary_residence=True, years_owned=Decimal("1"), years_lived=Decimal("1")
        )
        result = calc.calculate_partial_exclusion(
            Decimal("200000"), FilingStatus.SINGLE, reqs, QualifyingCircumstance.HEALTH
        )
        assert result.is_eligible
        assert result.max_exclusion == Decimal("125000")
        assert result.applied_exclusion == Decimal("125000")
        assert result.remaining_gain == Decimal("75000")
        assert result.reason == (
            "Partial exclusion due to qualifying circumstances (health). "
            "50.0% of full exclusion applied."
        )

    def test_explicit_months_use_the_shorter_period(self, calc):
        reqs = Section121Requirements(is_primary_residence=True)
        result = calc.calculate_partial_exclusion(
            Decimal("500000"),
            FilingStatus.MFJ,
            reqs,
            QualifyingCircumstance.MILITARY,
            months_owned=Decimal("18"),
            months_lived=Decimal("6"),
        )
        assert result.max_exclusion == Decimal("125000")

    def test_without_circumstance_falls_back_to_full_rules(self, calc):
        reqs = Section121Requirements(
            is_primary_residence=True, years_owned=Decimal("1"), years_lived=Decimal("1")
        )
        result = calc.calculate_partial_exclusion(Decimal("200000"), FilingStatus.SINGLE, reqs)
        assert not result.is_eligible

    def test_partial_requires_primary_residence(self, calc):
        reqs = Section121Requirements(years_owned=Decimal("1"), years_lived=Decimal("1"))
        result = calc.calculate_partial_exclusion(
            Decimal("200000"), FilingStatus.SINGLE, reqs, QualifyingCircumstance.WORK
        )
        assert not result.is_eligible


class TestEligibilityDetails:
    def test_all_requirements_met(self, calc, eligible):
        details = calc.eligibility_details(eligible)
        assert details.overall_eligible
        assert [c.requirement for c in details.checks] == [
            "Primary Residence",
            "Ownership Requirement",
            "Use Requirement",
            "Previous Use Restriction",
        ]

    def test_reports_every_failure(self, calc):
        details = calc.eligibility_details(Section121Requirements())
        assert not details.overall_eligible
        assert [c.met for c in details.checks] == [False, False, False, True]
