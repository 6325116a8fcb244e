"""Data models for the asset projector."""

from projector.models.enums import (
    AssetType,
    FilingStatus,
    PropertyGrowthModel,
    QualifyingCircumstance,
    SalePhase,
)
from projector.models.inputs import InvestmentInputs, PropertyInputs, SaleConfig
from projector.models.results import (
    AssetBreakdown,
    CombinedYearResult,
    InvestmentSummary,
    InvestmentYearResult,
    PropertySummary,
    PropertyYearResult,
    YearResult,
)
from projector.models.tax import (
    CombinedTaxCalculation,
    DepreciationRecaptureResult,
    EligibilityCheck,
    EligibilityDetails,
    FederalTaxCalculation,
    NoTaxStateSavings,
    RelocationImpact,
    SaleTaxBreakdown,
    Section121Exclusion,
    Section121Requirements,
    StateComparison,
    StateTaxCalculation,
    TaxBracket,
)

__all__ = [
    "AssetBreakdown",
    "AssetType",
    "CombinedTaxCalculation",
    "CombinedYearResult",
    "DepreciationRecaptureResult",
    "EligibilityCheck",
    "EligibilityDetails",
    "FederalTaxCalculation",
    "FilingStatus",
    "InvestmentInputs",
    "InvestmentSummary",
    "InvestmentYearResult",
    "NoTaxStateSavings",
    "PropertyGrowthModel",
    "PropertyInputs",
    "PropertySummary",
    "PropertyYearResult",
    "QualifyingCircumstance",
    "RelocationImpact",
    "SaleConfig",
    "SalePhase",
    "SaleTaxBreakdown",
    "Section121Exclusion",
    "Section121Requirements",
    "StateComparison",
    "StateTaxCalculation",
    "TaxBracket",
    "YearResult",
]
