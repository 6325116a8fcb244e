"""Loading and saving persisted portfolio records."""

from projector.ingestion.migrations import SCHEMA_VERSION, migrate_record
from projector.ingestion.records import (
    investment_to_record,
    load_portfolio,
    parse_investment_record,
    parse_portfolio_record,
    parse_property_record,
    portfolio_to_record,
    property_to_record,
)

__all__ = [
    "SCHEMA_VERSION",
    "investment_to_record",
    "load_portfolio",
    "migrate_record",
    "parse_investment_record",
    "parse_portfolio_record",
    "parse_property_record",
    "portfolio_to_record",
    "property_to_record",
]
