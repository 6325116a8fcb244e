"""Investment and Property entities.

An entity owns an id, a display name, an enabled flag and immutable inputs.
Setters replace the inputs wholesale; results are recomputed from the
current inputs on read and memoized until the inputs change.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Any
from uuid import uuid4

from projector.engines.amortization import loan_amount
from projector.engines.investment import InvestmentProjectionEngine
from projector.engines.property import PropertyProjectionEngine
from projector.engines.validation import PropertyValidator
from projector.models.enums import AssetType
from projector.models.inputs import InvestmentInputs, PropertyInputs, SaleConfig
from projector.models.results import (
    InvestmentSummary,
    InvestmentYearResult,
    PropertySummary,
    PropertyYearResult,
)


class Investment:
    """A compounding investment account."""

    asset_type = AssetType.INVESTMENT

    def __init__(
        self,
        name: str = "New Investment",
        inputs: InvestmentInputs | None = None,
        asset_id: str | None = None,
        enabled: bool = True,
        engine: InvestmentProjectionEngine | None = None,
    ) -> None:
        self.id = asset_id or str(uuid4())
        self.name = name
        self.enabled = enabled
        self.inputs = inputs or InvestmentInputs()
        self.engine = engine or InvestmentProjectionEngine()
        self._memo_key: tuple | None = None
        self._memo: list[InvestmentYearResult] = []

    def update_input(self, **changes: Any) -> None:
        self.inputs = InvestmentInputs.model_validate({**self.inputs.model_dump(), **changes})

    def project(self, linked_cash_flows: Sequence[Decimal] = ()) -> list[InvestmentYearResult]:
        key = (self.inputs, tuple(linked_cash_flows))
        if key != self._memo_key:
            self._memo = self.engine.project(self.inputs, linked_cash_flows)
            self._memo_key = key
        return self._memo

    @property
    def results(self) -> list[InvestmentYearResult]:
        """Results without any linked property cash flows."""
        return self.project()

    def warnings(self, linked_cash_flows: Sequence[Decimal] = ()) -> list[str]:
        return self.engine.warnings(
            self.inputs, self.project(linked_cash_flows), linked_cash_flows
        )

    def summary(self, linked_cash_flows: Sequence[Decimal] = ()) -> InvestmentSummary:
        return self.engine.summarize(self.inputs, self.project(linked_cash_flows))


class Property:
    """A mortgaged property with an optional rental operation and planned sale."""

    asset_type = AssetType.PROPERTY

    def __init__(
        self,
        name: str = "New Property",
        inputs: PropertyInputs | None = None,
        sale_config: SaleConfig | None = None,
        asset_id: str | None = None,
        enabled: bool = True,
        engine: PropertyProjectionEngine | None = None,
    ) -> None:
        self.id = asset_id or str(uuid4())
        self.name = name
        self.enabled = enabled
        self.inputs = inputs or PropertyInputs()
        self.sale_config = sale_config or SaleConfig()
        self.engine = engine or PropertyProjectionEngine()
        self.validator = PropertyValidator(self.engine)
        self._memo_key: tuple | None = None
        self._memo: list[PropertyYearResult] = []

    def update_input(self, **changes: Any) -> None:
        self.inputs = PropertyInputs.model_validate({**self.inputs.model_dump(), **changes})

    def update_sale_config(self, **changes: Any) -> None:
        """Change sale settings; turning on reinvestment targets the linked investment."""
        if (
            changes.get("reinvest_proceeds")
            and not changes.get("target_investment_id", self.sale_config.target_investment_id)
            and self.inputs.linked_investment_id
        ):
            changes["target_investment_id"] = self.inputs.linked_investment_id
        self.sale_config = SaleConfig.model_validate({**self.sale_config.model_dump(), **changes})

    def set_sale_enabled(self, enabled: bool) -> None:
        """Toggle the planned sale; enabling it defaults the sale year to mid-horizon."""
        changes: dict[str, Any] = {"is_planned_for_sale": enabled}
        if enabled and self.sale_config.sale_year is None:
            changes["sale_year"] = max(self.inputs.years // 2, 1)
        self.update_sale_config(**changes)

    @property
    def results(self) -> list[PropertyYearResult]:
        key = (self.inputs, self.sale_config)
        if key != self._memo_key:
            self._memo = self.engine.project(self.inputs, self.sale_config)
            self._memo_key = key
        return self._memo

    @property
    def calculated_principal_interest_payment(self) -> Decimal:
        return self.engine.calculated_payment(self.inputs)

    @property
    def down_payment_amount(self) -> Decimal:
        return self.inputs.purchase_price - loan_amount(
            self.inputs.purchase_price, self.inputs.down_payment_percentage
        )

    @property
    def sale_target_id(self) -> str | None:
        """Investment that receives after-tax sale proceeds, if reinvesting."""
        if not self.sale_config.reinvest_proceeds:
            return None
        return self.sale_config.target_investment_id or self.inputs.linked_investment_id or None

    def validation_errors(self) -> list[str]:
        return self.validator.validate(self.inputs, self.sale_config)

    def summary(self) -> PropertySummary | None:
        return self.engine.summarize(self.inputs, self.results)
