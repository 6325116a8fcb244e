"""Enumerations for the asset projector."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "single"
    MFJ = "married_joint"
    MFS = "married_separate"
    HOH = "head_of_household"


class PropertyGrowthModel(StrEnum):
    PURCHASE_PRICE = "purchase_price"
    CURRENT_VALUE = "current_value"


class AssetType(StrEnum):
    INVESTMENT = "investment"
    PROPERTY = "property"


class QualifyingCircumstance(StrEnum):
    """Reasons that allow a reduced Section 121 exclusion."""

    MILITARY = "military"
    HEALTH = "health"
    WORK = "work"
    OTHER = "other"


class SalePhase(StrEnum):
    PRE_SALE = "PRE_SALE"
    SALE_YEAR = "SALE_YEAR"
    POST_SALE = "POST_SALE"
