"""Section 121 primary residence gain exclusion.

Eligibility checks run in a fixed order and stop at the first failure:
primary residence, 2-year ownership, 2-year use, no exclusion claimed in the
last 2 years. A reduced exclusion is available to filers who fail the time
tests because of a qualifying move (military, health, work, other).
"""

from decimal import ROUND_FLOOR, Decimal

from projector.engines.brackets import (
    SECTION_121_EXCLUSION,
    SECTION_121_OWNERSHIP_YEARS,
    SECTION_121_USE_YEARS,
    SECTION_121_WAITING_PERIOD_YEARS,
)
from projector.engines.rounding import ZERO
from projector.models.enums import FilingStatus, QualifyingCircumstance
from projector.models.tax import (
    EligibilityCheck,
    EligibilityDetails,
    Section121Exclusion,
    Section121Requirements,
)

MONTHS_PER_YEAR = Decimal("12")


def _years(value: Decimal) -> str:
    return f"{value.normalize():f}"


class Section121Calculator:
    """Computes the primary residence exclusion for a sale."""

    def get_max_exclusion(self, filing_status: FilingStatus) -> Decimal:
        return SECTION_121_EXCLUSION[filing_status]

    def check_basic_eligibility(self, requirements: Section121Requirements) -> bool:
        return (
            requirements.is_primary_residence
            and requirements.years_owned >= SECTION_121_OWNERSHIP_YEARS
            and requirements.years_lived >= SECTION_121_USE_YEARS
            and not requirements.has_used_exclusion_in_last_two_years
        )

    def _ineligibility_reason(self, requirements: Section121Requirements) -> str | None:
        if not requirements.is_primary_residence:
            return "Property is not a primary residence"
        if requirements.years_owned < SECTION_121_OWNERSHIP_YEARS:
            return (
                "Ownership requirement not met. Must own for at least "
                f"{_years(SECTION_121_OWNERSHIP_YEARS)} years "
                f"(owned: {_years(requirements.years_owned)} years)"
            )
        if requirements.years_lived < SECTION_121_USE_YEARS:
            return (
                "Use requirement not met. Must live in home for at least "
                f"{_years(SECTION_121_USE_YEARS)} years "
                f"(lived: {_years(requirements.years_lived)} years)"
            )
        if requirements.has_used_exclusion_in_last_two_years:
            return f"Exclusion already used within the last {SECTION_121_WAITING_PERIOD_YEARS} years"
        return None

    def calculate_exclusion(
        self,
        capital_gain: Decimal,
        filing_status: FilingStatus,
        requirements: Section121Requirements,
    ) -> Section121Exclusion:
        reason = self._ineligibility_reason(requirements)
        if reason is not None:
            return Section121Exclusion(
                is_eligible=False,
                max_exclusion=ZERO,
                applied_exclusion=ZERO,
                remaining_gain=capital_gain,
                reason=reason,
            )

        max_exclusion = self.get_max_exclusion(filing_status)
        applied = min(max(capital_gain, ZERO), max_exclusion)
        return Section121Exclusion(
            is_eligible=True,
            max_exclusion=max_exclusion,
            applied_exclusion=applied,
            remaining_gain=capital_gain - applied,
        )

    def calculate_partial_exclusion(
        self,
        capital_gain: Decimal,
        filing_status: FilingStatus,
        requirements: Section121Requirements,
        circumstance: QualifyingCircumstance | None = None,
        months_owned: Decimal | None = None,
        months_lived: Decimal | None = None,
    ) -> Section121Exclusion:
        """Prorate the exclusion by the shorter of ownership and use, out of 24 months.

        Without a qualifying circumstance this is the regular exclusion.
        Month counts default to the requirement years times twelve.
        """
        if circumstance is None:
            return self.calculate_exclusion(capital_gain, filing_status, requirements)

        if not requirements.is_primary_residence:
            return Section121Exclusion(
                is_eligible=False,
                max_exclusion=ZERO,
                applied_exclusion=ZERO,
                remaining_gain=capital_gain,
                reason="Property is not a primary residence",
            )

        required_months = SECTION_121_OWNERSHIP_YEARS * MONTHS_PER_YEAR
        owned = months_owned or requirements.years_owned * MONTHS_PER_YEAR
        lived = months_lived or requirements.years_lived * MONTHS_PER_YEAR
        ratio = min(Decimal("1"), min(owned, lived) / required_months)

        full_exclusion = self.get_max_exclusion(filing_status)
        max_exclusion = (full_exclusion * ratio).to_integral_value(rounding=ROUND_FLOOR)
        applied = min(max(capital_gain, ZERO), max_exclusion)
        return Section121Exclusion(
            is_eligible=True,
            max_exclusion=max_exclusion,
            applied_exclusion=applied,
            remaining_gain=capital_gain - applied,
            reason=(
                f"Partial exclusion due to qualifying circumstances ({circumstance}). "
                f"{ratio * 100:.1f}% of full exclusion applied."
            ),
        )

    def eligibility_details(self, requirements: Section121Requirements) -> EligibilityDetails:
        """Every requirement with its status, for display."""
        checks = [
            EligibilityCheck(
                requirement="Primary Residence",
                met=requirements.is_primary_residence,
                details=(
                    "Property is designated as primary residence"
                    if requirements.is_primary_residence
                    else "Property must be your primary residence"
                ),
            ),
            EligibilityCheck(
                requirement="Ownership Requirement",
                met=requirements.years_owned >= SECTION_121_OWNERSHIP_YEARS,
                details=(
                    f"Must own for at least {_years(SECTION_121_OWNERSHIP_YEARS)} years "
                    f"(currently: {_years(requirements.years_owned)} years)"
                ),
            ),
            EligibilityCheck(
                requirement="Use Requirement",
                met=requirements.years_lived >= SECTION_121_USE_YEARS,
                details=(
                    f"Must live in home for at least {_years(SECTION_121_USE_YEARS)} years "
                    f"(currently: {_years(requirements.years_lived)} years)"
                ),
            ),
            EligibilityCheck(
                requirement="Previous Use Restriction",
                met=not requirements.has_used_exclusion_in_last_two_years,
                details=(
                    "Cannot use exclusion if used within last "
                    f"{SECTION_121_WAITING_PERIOD_YEARS} years"
                    if requirements.has_used_exclusion_in_last_two_years
                    else "No recent use of exclusion"
                ),
            ),
        ]
        return EligibilityDetails(
            checks=checks, overall_eligible=all(check.met for check in checks)
        )
