"""Versioned migration of persisted records.

Records carry a ``schemaVersion``; records without one are version 1.
Migrations run once at load time and return an upgraded copy, so parsing
only ever sees the current shape.

Version history:
  1: property expenses stored as a flat ``annualExpenses`` amount
  2: ``maintenanceRate`` percent of value plus property management settings
"""

import copy
import logging
from decimal import Decimal, InvalidOperation

from projector.exceptions import UnsupportedSchemaVersionError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

MANAGEMENT_DEFAULTS = {
    "propertyManagementEnabled": False,
    "listingFeeRate": "100",
    "monthlyManagementFeeRate": "10",
}


def get_record_version(record: dict) -> int:
    try:
        return int(record.get("schemaVersion", 1))
    except (TypeError, ValueError):
        return 1


def migrate_record(record: dict) -> dict:
    """Upgrade a portfolio record, or a single asset record, to SCHEMA_VERSION."""
    version = get_record_version(record)
    if version > SCHEMA_VERSION:
        raise UnsupportedSchemaVersionError(version, SCHEMA_VERSION)

    migrated = copy.deepcopy(record)
    if version < 2:
        assets = migrated.get("assets")
        for asset in assets if isinstance(assets, list) else [migrated]:
            if isinstance(asset, dict) and asset.get("type") == "property":
                _property_v1_to_v2(asset)

    migrated["schemaVersion"] = SCHEMA_VERSION
    return migrated


def _property_v1_to_v2(asset: dict) -> None:
    inputs = asset.setdefault("inputs", {})
    if not isinstance(inputs, dict):
        return

    legacy_expenses = inputs.pop("annualExpenses", None)
    if "maintenanceRate" not in inputs and legacy_expenses not in (None, ""):
        try:
            expenses = Decimal(str(legacy_expenses))
            price = Decimal(str(inputs.get("purchasePrice", "0")))
        except InvalidOperation:
            expenses = price = Decimal("0")
        if price > 0 and expenses.is_finite():
            rate = expenses / price * 100
            inputs["maintenanceRate"] = f"{rate.normalize():f}"
            logger.info(
                "Migrated annualExpenses=%s to maintenanceRate=%s for %s",
                legacy_expenses, inputs["maintenanceRate"], asset.get("name", "property"),
            )

    for key, value in MANAGEMENT_DEFAULTS.items():
        inputs.setdefault(key, value)
