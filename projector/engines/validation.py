"""Advisory validation for property inputs and sale plans.

Validation never blocks a projection. It returns human-readable messages
for a caller to surface; messages prefixed with "Warning:" flag values that
are legal but unusual.
"""

from decimal import Decimal

from projector.engines.property import PropertyProjectionEngine, listing_events_per_year
from projector.models.enums import PropertyGrowthModel
from projector.models.inputs import PropertyInputs, SaleConfig

MAX_SALE_PRICE = Decimal("10000000")
MIN_RATE = Decimal("-100")
MAX_SELLING_COSTS = Decimal("20")
TYPICAL_SELLING_COSTS = Decimal("8")
EARLY_SALE_YEARS = 3

MAX_MONTHLY_RENT = Decimal("50000")
MIN_RENT_GROWTH = Decimal("-10")
MAX_RENT_GROWTH = Decimal("20")
MAX_VACANCY = Decimal("50")
MAX_MAINTENANCE = Decimal("10")
MAX_MANAGEMENT_FEE = Decimal("50")
MAX_LISTING_FEE = Decimal("200")
EXPENSE_RATIO_WARNING = Decimal("0.8")


class PropertyValidator:
    """Collects validation messages for a property and its sale configuration."""

    def __init__(self, engine: PropertyProjectionEngine | None = None) -> None:
        self.engine = engine or PropertyProjectionEngine()

    def validate(self, inputs: PropertyInputs, sale: SaleConfig | None = None) -> list[str]:
        errors = self._validate_ownership(inputs)
        if inputs.is_rental_property:
            errors.extend(self._validate_rental(inputs))
        if sale is not None and sale.is_planned_for_sale:
            errors.extend(self._validate_sale(inputs, sale))
        return errors

    def _validate_ownership(self, inputs: PropertyInputs) -> list[str]:
        errors: list[str] = []
        if inputs.property_growth_rate <= MIN_RATE:
            errors.append("Property growth rate must be greater than -100%")
        if inputs.inflation_rate <= MIN_RATE:
            errors.append("Inflation rate must be greater than -100%; real values will equal nominal")
        if inputs.years_bought < 0:
            errors.append("Years bought cannot be negative")
        elif inputs.years_bought > inputs.years:
            errors.append("Years bought cannot exceed projection years")

        if (
            inputs.property_growth_model == PropertyGrowthModel.CURRENT_VALUE
            and inputs.current_estimated_value <= 0
        ):
            errors.append(
                "Current estimated value must be positive when using current value growth model"
            )
        return errors

    def _validate_rental(self, inputs: PropertyInputs) -> list[str]:
        errors: list[str] = []
        if inputs.monthly_rent <= 0:
            errors.append("Monthly rent must be greater than $0")
        elif inputs.monthly_rent > MAX_MONTHLY_RENT:
            errors.append("Monthly rent cannot exceed $50,000")

        if inputs.rent_growth_rate < MIN_RENT_GROWTH:
            errors.append("Rent growth rate cannot be less than -10%")
        elif inputs.rent_growth_rate > MAX_RENT_GROWTH:
            errors.append("Rent growth rate cannot exceed 20%")

        if inputs.vacancy_rate < 0:
            errors.append("Vacancy rate cannot be negative")
        elif inputs.vacancy_rate > MAX_VACANCY:
            errors.append("Vacancy rate cannot exceed 50%")

        if inputs.maintenance_rate < 0:
            errors.append("Maintenance rate cannot be negative")
        elif inputs.maintenance_rate > MAX_MAINTENANCE:
            errors.append("Maintenance rate cannot exceed 10% of property value")

        if inputs.property_management_enabled:
            if inputs.monthly_management_fee_rate < 0:
                errors.append("Monthly management fee rate cannot be negative")
            elif inputs.monthly_management_fee_rate > MAX_MANAGEMENT_FEE:
                errors.append("Monthly management fee rate cannot exceed 50% of rent")
            if inputs.listing_fee_rate < 0:
                errors.append("Listing fee rate cannot be negative")
            elif inputs.listing_fee_rate > MAX_LISTING_FEE:
                errors.append("Listing fee rate cannot exceed 200% of monthly rent")

        # First projection year, unprorated
        rent = self.engine.monthly_rent(inputs, 1)
        gross_rent = rent * 12
        income = gross_rent * (1 - inputs.vacancy_rate / 100)
        maintenance = self.engine.property_value(inputs, 1) * inputs.maintenance_rate / 100
        expenses = maintenance
        if inputs.property_management_enabled:
            expenses += listing_events_per_year(inputs.vacancy_rate) * rent * inputs.listing_fee_rate / 100
            expenses += income * inputs.monthly_management_fee_rate / 100

        if income > 0 and expenses > income * EXPENSE_RATIO_WARNING:
            errors.append(
                "Warning: Expenses exceed 80% of rental income, which may indicate unrealistic values"
            )
        if gross_rent > 0 and maintenance > gross_rent:
            errors.append(
                "Warning: Maintenance expenses are unreasonably high relative to rental income"
            )
        return errors

    def _validate_sale(self, inputs: PropertyInputs, sale: SaleConfig) -> list[str]:
        errors: list[str] = []
        if sale.sale_year is None or sale.sale_year <= 0:
            errors.append("Sale year must be specified and greater than 0")
        elif sale.sale_year > inputs.years:
            errors.append("Sale year must be between 1 and projection years")
        elif sale.sale_year <= EARLY_SALE_YEARS:
            errors.append(
                "Selling shortly after purchase may incur additional costs and limit appreciation"
            )

        if not 1 <= sale.sale_month <= 12:
            errors.append("Sale month must be between 1 and 12")

        if not sale.use_projected_value:
            if sale.expected_sale_price is None or sale.expected_sale_price <= 0:
                errors.append("Expected sale price must be greater than $0")
            elif sale.expected_sale_price > MAX_SALE_PRICE:
                errors.append("Expected sale price cannot exceed $10,000,000")

        if not 0 <= sale.selling_costs_percentage <= MAX_SELLING_COSTS:
            errors.append("Selling costs must be between 0% and 20%")
        elif sale.selling_costs_percentage > TYPICAL_SELLING_COSTS:
            errors.append("Selling costs exceed typical range of 6-8%")

        if sale.reinvest_proceeds and not (sale.target_investment_id or inputs.linked_investment_id):
            errors.append("Target investment must be selected when reinvesting proceeds")

        if self.engine.active_sale_year(inputs, sale) is not None:
            results = self.engine.project(inputs, sale)
            sale_result = next(r for r in results if r.is_sale_year)
            if sale_result.net_sale_proceeds < 0:
                errors.append(
                    "Property sale will result in a loss after mortgage payoff and selling costs"
                )
        return errors
