"""Depreciation recapture (unrecaptured Section 1250 gain).

Depreciation deducted on a rental is taxed at sale at the filer's ordinary
income rate, capped at 25%.
"""

from decimal import Decimal

from projector.engines.brackets import (
    COMMERCIAL_RECOVERY_YEARS,
    DEFAULT_LAND_VALUE_FRACTION,
    DEFAULT_TAX_YEAR,
    FEDERAL_BRACKETS,
    RECAPTURE_RATE_CAP,
    RESIDENTIAL_RECOVERY_YEARS,
)
from projector.engines.rounding import ZERO, to_cents
from projector.models.enums import FilingStatus
from projector.models.tax import DepreciationRecaptureResult


class DepreciationRecaptureCalculator:
    """Computes recapture tax and straight-line depreciation estimates."""

    def __init__(self, tax_year: int = DEFAULT_TAX_YEAR) -> None:
        self.brackets = FEDERAL_BRACKETS[tax_year]

    def ordinary_income_rate(self, annual_income: Decimal, filing_status: FilingStatus) -> Decimal:
        """Marginal ordinary rate of the bracket containing ``annual_income``."""
        for upper, rate in self.brackets[filing_status]:
            if upper is None or annual_income < upper:
                return rate
        return self.brackets[filing_status][-1][1]

    def calculate_recapture(
        self,
        total_depreciation_taken: Decimal,
        annual_income: Decimal,
        filing_status: FilingStatus,
    ) -> DepreciationRecaptureResult:
        if total_depreciation_taken <= 0:
            return DepreciationRecaptureResult(
                has_recapture=False,
                recapture_amount=ZERO,
                recapture_rate=ZERO,
                recapture_tax=ZERO,
                notes="No depreciation recapture - no depreciation taken",
            )

        rate = min(self.ordinary_income_rate(annual_income, filing_status), RECAPTURE_RATE_CAP)
        return DepreciationRecaptureResult(
            has_recapture=True,
            recapture_amount=total_depreciation_taken,
            recapture_rate=rate,
            recapture_tax=to_cents(total_depreciation_taken * rate),
            notes=(
                f"Depreciation recapture taxed at {rate * 100:.1f}% "
                "(ordinary income rate capped at 25%)"
            ),
        )

    def calculate_annual_depreciation(
        self,
        property_value: Decimal,
        land_value: Decimal = ZERO,
        is_residential: bool = True,
    ) -> Decimal:
        period = RESIDENTIAL_RECOVERY_YEARS if is_residential else COMMERCIAL_RECOVERY_YEARS
        return (property_value - land_value) / period

    def calculate_total_depreciation(
        self,
        property_value: Decimal,
        years_owned: Decimal,
        land_value: Decimal = ZERO,
        is_residential: bool = True,
    ) -> Decimal:
        """Straight-line depreciation over ``years_owned`` (fractional years allowed)."""
        annual = self.calculate_annual_depreciation(property_value, land_value, is_residential)
        return annual * years_owned

    def estimate_land_value(
        self, property_value: Decimal, land_fraction: Decimal = DEFAULT_LAND_VALUE_FRACTION
    ) -> Decimal:
        return property_value * land_fraction
