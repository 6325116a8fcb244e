"""Tax computation result models."""

from decimal import Decimal

from pydantic import BaseModel, Field


class TaxBracket(BaseModel):
    """Half-open income range ``[min, max)``; ``max`` is None for the top bracket."""

    min: Decimal
    max: Decimal | None
    rate: Decimal


class FederalTaxCalculation(BaseModel):
    taxable_gain: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    bracket_info: TaxBracket


class StateTaxCalculation(BaseModel):
    state_code: str
    state_name: str
    tax_rate: Decimal
    taxable_gain: Decimal
    tax_amount: Decimal
    has_capital_gains_tax: bool
    notes: str = ""


class StateComparison(StateTaxCalculation):
    savings: Decimal = Decimal("0")


class CombinedTaxCalculation(BaseModel):
    federal_tax: Decimal
    state_tax: Decimal
    total_tax: Decimal
    effective_rate: Decimal
    state_calculation: StateTaxCalculation


class RelocationImpact(BaseModel):
    from_state_calculation: StateTaxCalculation
    to_state_calculation: StateTaxCalculation
    tax_difference: Decimal
    savings: Decimal
    recommendation: str


class NoTaxStateSavings(BaseModel):
    current_tax: Decimal
    potential_savings: Decimal
    no_tax_states: list[str]
    recommendation: str


class Section121Requirements(BaseModel):
    is_primary_residence: bool = False
    years_owned: Decimal = Decimal("0")
    years_lived: Decimal = Decimal("0")
    has_used_exclusion_in_last_two_years: bool = False


class Section121Exclusion(BaseModel):
    is_eligible: bool
    max_exclusion: Decimal
    applied_exclusion: Decimal
    remaining_gain: Decimal
    reason: str | None = None


class EligibilityCheck(BaseModel):
    requirement: str
    met: bool
    details: str


class EligibilityDetails(BaseModel):
    checks: list[EligibilityCheck] = Field(default_factory=list)
    overall_eligible: bool


class DepreciationRecaptureResult(BaseModel):
    has_recapture: bool
    recapture_amount: Decimal
    recapture_rate: Decimal
    recapture_tax: Decimal
    notes: str


class SaleTaxBreakdown(BaseModel):
    """Full tax waterfall for a property sale, from sale price to after-tax proceeds."""

    effective_sale_price: Decimal
    selling_costs: Decimal
    adjusted_cost_basis: Decimal
    capital_gain: Decimal
    section_121: Section121Exclusion | None = None
    taxable_gain: Decimal
    federal: FederalTaxCalculation
    state: StateTaxCalculation | None = None
    recapture: DepreciationRecaptureResult | None = None
    federal_tax: Decimal
    state_tax: Decimal
    recapture_tax: Decimal
    total_tax: Decimal
    pre_sale_mortgage_balance: Decimal
    net_sale_proceeds: Decimal
    net_after_tax_proceeds: Decimal
