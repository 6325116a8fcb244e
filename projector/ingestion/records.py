"""Persisted record parsing and serialization.

Records are JSON-shaped dicts with camelCase keys. Numbers usually arrive as
strings typed into a form. Absent keys take the model defaults; keys that
are present but empty or unparseable take a per-field fallback, which is 0
except for the down payment (20%) and the loan term (30 years).
"""

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

from projector.entities import Investment, Property
from projector.exceptions import RecordFormatError
from projector.ingestion.migrations import SCHEMA_VERSION, migrate_record
from projector.models.enums import AssetType, FilingStatus, PropertyGrowthModel
from projector.models.inputs import InvestmentInputs, PropertyInputs, SaleConfig
from projector.portfolio import Portfolio

Parser = Callable[[Any], Any]


def _decimal_or_none(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _number(fallback: str = "0") -> Parser:
    def parse(value: Any) -> Decimal:
        number = _decimal_or_none(value)
        return Decimal(fallback) if number is None else number

    return parse


def _integer(fallback: int = 0) -> Parser:
    def parse(value: Any) -> int:
        number = _decimal_or_none(value)
        return fallback if number is None else int(number)

    return parse


def _optional_number(value: Any) -> Decimal | None:
    return _decimal_or_none(value)


def _optional_integer(value: Any) -> int | None:
    number = _decimal_or_none(value)
    return None if number is None else int(number)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> str | None:
    return str(value) if value else None


def _choice(enum_type: type, fallback: Any) -> Parser:
    def parse(value: Any) -> Any:
        try:
            return enum_type(value)
        except (TypeError, ValueError):
            return fallback

    return parse


# record key -> (model field, parser)
INVESTMENT_FIELDS: dict[str, tuple[str, Parser]] = {
    "initialAmount": ("initial_amount", _number()),
    "rateOfReturn": ("rate_of_return", _number()),
    "inflationRate": ("inflation_rate", _number()),
    "annualContribution": ("annual_contribution", _number()),
    "inflationAdjustedContributions": ("inflation_adjusted_contributions", _flag),
    "years": ("years", _integer()),
    "startingYear": ("starting_year", _integer()),
}

PROPERTY_FIELDS: dict[str, tuple[str, Parser]] = {
    "purchasePrice": ("purchase_price", _number()),
    "downPaymentPercentage": ("down_payment_percentage", _number("20")),
    "interestRate": ("interest_rate", _number()),
    "loanTerm": ("loan_term", _integer(30)),
    "years": ("years", _integer()),
    "inflationRate": ("inflation_rate", _number()),
    "startingYear": ("starting_year", _integer()),
    "yearsBought": ("years_bought", _integer()),
    "propertyGrowthRate": ("property_growth_rate", _number()),
    "propertyGrowthModel": (
        "property_growth_model",
        _choice(PropertyGrowthModel, PropertyGrowthModel.PURCHASE_PRICE),
    ),
    "currentEstimatedValue": ("current_estimated_value", _number()),
    "monthlyPayment": ("user_monthly_payment", _number()),
    "linkedInvestmentId": ("linked_investment_id", _text),
    "isRentalProperty": ("is_rental_property", _flag),
    "monthlyRent": ("monthly_rent", _number()),
    "rentGrowthRate": ("rent_growth_rate", _number()),
    "vacancyRate": ("vacancy_rate", _number()),
    "maintenanceRate": ("maintenance_rate", _number()),
    "propertyManagementEnabled": ("property_management_enabled", _flag),
    "listingFeeRate": ("listing_fee_rate", _number()),
    "monthlyManagementFeeRate": ("monthly_management_fee_rate", _number()),
}

SALE_FIELDS: dict[str, tuple[str, Parser]] = {
    "isPlannedForSale": ("is_planned_for_sale", _flag),
    "saleYear": ("sale_year", _optional_integer),
    "saleMonth": ("sale_month", _integer(6)),
    "useProjectedValue": ("use_projected_value", _flag),
    "expectedSalePrice": ("expected_sale_price", _optional_number),
    "sellingCostsPercentage": ("selling_costs_percentage", _number()),
    "reinvestProceeds": ("reinvest_proceeds", _flag),
    "targetInvestmentId": ("target_investment_id", _optional_text),
    "capitalImprovements": ("capital_improvements", _number()),
    "originalBuyingCosts": ("original_buying_costs", _number()),
    "filingStatus": ("filing_status", _choice(FilingStatus, FilingStatus.SINGLE)),
    "annualIncome": ("annual_income", _number()),
    "state": ("state", _text),
    "enableStateTax": ("enable_state_tax", _flag),
    "otherCapitalGains": ("other_capital_gains", _number()),
    "carryoverLosses": ("carryover_losses", _number()),
    "isPrimaryResidence": ("is_primary_residence", _flag),
    "yearsOwned": ("years_owned", _number()),
    "yearsLived": ("years_lived", _number()),
    "hasUsedExclusionInLastTwoYears": ("has_used_exclusion_in_last_two_years", _flag),
    "enableSection121": ("enable_section_121", _flag),
    "enableDepreciationRecapture": ("enable_depreciation_recapture", _flag),
    "totalDepreciationTaken": ("total_depreciation_taken", _number()),
    "landValuePercentage": ("land_value_percentage", _number("20")),
}


def _parse_fields(raw: Any, fields: dict[str, tuple[str, Parser]], where: str) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise RecordFormatError(where, f"expected an object, got {type(raw).__name__}")
    return {name: parse(raw[key]) for key, (name, parse) in fields.items() if key in raw}


def _dump_fields(model: Any, fields: dict[str, tuple[str, Parser]]) -> dict:
    record: dict[str, Any] = {}
    for key, (name, _) in fields.items():
        value = getattr(model, name)
        if isinstance(value, Decimal):
            value = str(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        elif hasattr(value, "value"):
            value = value.value
        record[key] = value
    return record


def _require_dict(record: Any, where: str) -> dict:
    if not isinstance(record, dict):
        raise RecordFormatError(where, f"expected an object, got {type(record).__name__}")
    return record


# --- Parsing ---


def parse_investment_record(record: dict) -> Investment:
    record = _require_dict(record, "investment")
    raw_inputs = record.get("inputs") or {}
    values = _parse_fields(raw_inputs, INVESTMENT_FIELDS, "investment.inputs")
    # Older records keep the contribution mode next to the inputs
    if "inflationAdjustedContributions" in record and "inflation_adjusted_contributions" not in values:
        values["inflation_adjusted_contributions"] = _flag(record["inflationAdjustedContributions"])
    return Investment(
        name=_text(record.get("name")) or "New Investment",
        inputs=InvestmentInputs.model_validate(values),
        asset_id=record.get("id") or None,
        enabled=_flag(record.get("enabled", True)),
    )


def parse_property_record(record: dict) -> Property:
    record = _require_dict(record, "property")
    raw_inputs = record.get("inputs") or {}
    values = _parse_fields(raw_inputs, PROPERTY_FIELDS, "property.inputs")
    sale_values = _parse_fields(raw_inputs.get("saleConfig"), SALE_FIELDS, "property.saleConfig")
    return Property(
        name=_text(record.get("name")) or "New Property",
        inputs=PropertyInputs.model_validate(values),
        sale_config=SaleConfig.model_validate(sale_values),
        asset_id=record.get("id") or None,
        enabled=_flag(record.get("enabled", True)),
    )


def parse_portfolio_record(record: dict) -> Portfolio:
    """Build a portfolio from an already-migrated record."""
    record = _require_dict(record, "portfolio")
    portfolio = Portfolio(
        years=_integer(15)(record.get("years")),
        inflation_rate=_number("2.5")(record.get("inflationRate")),
        starting_year=_optional_integer(record.get("startingYear")),
    )

    assets = record.get("assets") or []
    if not isinstance(assets, list):
        raise RecordFormatError("assets", "expected a list")
    for index, asset in enumerate(assets):
        asset = _require_dict(asset, f"assets[{index}]")
        asset_type = asset.get("type")
        if asset_type == AssetType.INVESTMENT:
            portfolio.add_investment(parse_investment_record(asset))
        elif asset_type == AssetType.PROPERTY:
            portfolio.add_property(parse_property_record(asset))
        else:
            raise RecordFormatError(f"assets[{index}].type", f"unknown asset type {asset_type!r}")
    return portfolio


def load_portfolio(record: dict) -> Portfolio:
    """Migrate a persisted portfolio record to the current schema and parse it."""
    return parse_portfolio_record(migrate_record(_require_dict(record, "portfolio")))


# --- Serialization ---


def investment_to_record(investment: Investment) -> dict:
    return {
        "type": AssetType.INVESTMENT.value,
        "id": investment.id,
        "name": investment.name,
        "enabled": investment.enabled,
        "inputs": _dump_fields(investment.inputs, INVESTMENT_FIELDS),
    }


def property_to_record(prop: Property) -> dict:
    inputs = _dump_fields(prop.inputs, PROPERTY_FIELDS)
    inputs["saleConfig"] = _dump_fields(prop.sale_config, SALE_FIELDS)
    return {
        "type": AssetType.PROPERTY.value,
        "id": prop.id,
        "name": prop.name,
        "enabled": prop.enabled,
        "inputs": inputs,
    }


def portfolio_to_record(portfolio: Portfolio) -> dict:
    return {
        "schemaVersion": SCHEMA_VERSION,
        "years": str(portfolio.years),
        "inflationRate": str(portfolio.inflation_rate),
        "startingYear": str(portfolio.starting_year),
        "assets": [
            *(investment_to_record(inv) for inv in portfolio.investments),
            *(property_to_record(prop) for prop in portfolio.properties),
        ],
    }
