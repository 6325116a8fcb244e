"""Investment projection engine.

Compounds a cash account year by year. Each year the externally linked cash
flow is applied before growth and the (possibly inflation-indexed)
contribution after it. Real figures are tracked in a parallel account that
grows at the Fisher real rate ``(1 + r) / (1 + i)``, so that zero inflation
gives real figures identical to nominal ones.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from projector.engines.compounding import compound, inflation_base, rate_base
from projector.engines.rounding import ZERO, to_cents
from projector.models.inputs import InvestmentInputs
from projector.models.results import InvestmentSummary, InvestmentYearResult

logger = logging.getLogger(__name__)

OUTFLOW_WARNING_MULTIPLE = 2
MIN_INFLATION_RATE = Decimal("-100")


class InvestmentProjectionEngine:
    """Projects an investment account over its horizon."""

    def project(
        self,
        inputs: InvestmentInputs,
        linked_cash_flows: Sequence[Decimal] = (),
    ) -> list[InvestmentYearResult]:
        """Return ``years + 1`` results; index 0 is the starting state with no flows.

        ``linked_cash_flows[y - 1]`` is the net property cash flow for year ``y``
        (positive deposits into the account, negative withdrawals from it).
        """
        growth = rate_base(inputs.rate_of_return)
        inflation = inflation_base(inputs.inflation_rate)
        real_growth = growth / inflation

        balance = inputs.initial_amount
        real_balance = inputs.initial_amount
        contributed = ZERO
        withdrawn = ZERO

        results = [
            InvestmentYearResult(
                year=0,
                actual_year=inputs.starting_year,
                balance=to_cents(balance),
                real_balance=to_cents(real_balance),
            )
        ]
        logger.debug(
            "Projecting investment: %s years at %s%% (inflation %s%%)",
            inputs.years, inputs.rate_of_return, inputs.inflation_rate,
        )

        for year in range(1, inputs.years + 1):
            inflation_factor = compound(inflation, year)
            if inputs.inflation_adjusted_contributions:
                contribution = inputs.annual_contribution * inflation_factor
                real_contribution = inputs.annual_contribution
            else:
                contribution = inputs.annual_contribution
                real_contribution = contribution / inflation_factor

            cash_flow = linked_cash_flows[year - 1] if year <= len(linked_cash_flows) else ZERO
            real_cash_flow = cash_flow / inflation_factor

            previous, previous_real = balance, real_balance
            balance = (balance + cash_flow) * growth + contribution
            real_balance = (real_balance + real_cash_flow) * real_growth + real_contribution

            for flow in (contribution, cash_flow):
                if flow > 0:
                    contributed += flow
                else:
                    withdrawn -= flow

            total_earnings = balance - inputs.initial_amount - (contributed - withdrawn)
            yearly_gain = balance - previous
            real_yearly_gain = real_balance - previous_real

            results.append(
                InvestmentYearResult(
                    year=year,
                    actual_year=inputs.starting_year + year,
                    balance=to_cents(balance),
                    real_balance=to_cents(real_balance),
                    annual_contribution=to_cents(contribution),
                    real_annual_contribution=to_cents(real_contribution),
                    total_earnings=to_cents(total_earnings),
                    real_total_earnings=to_cents(total_earnings / inflation_factor),
                    yearly_gain=to_cents(yearly_gain),
                    real_yearly_gain=to_cents(real_yearly_gain),
                    annual_investment_gain=to_cents(yearly_gain - (contribution + cash_flow)),
                    real_annual_investment_gain=to_cents(
                        real_yearly_gain - (real_contribution + real_cash_flow)
                    ),
                    property_cash_flow=to_cents(cash_flow),
                    real_property_cash_flow=to_cents(real_cash_flow),
                )
            )

        return results

    def warnings(
        self,
        inputs: InvestmentInputs,
        results: list[InvestmentYearResult],
        linked_cash_flows: Sequence[Decimal] = (),
    ) -> list[str]:
        """Advisory messages about property cash flows draining the account."""
        warnings: list[str] = []

        if inputs.inflation_rate <= MIN_INFLATION_RATE:
            warnings.append(
                "Inflation rate at or below -100% is ignored; real values equal nominal values"
            )

        negative = next((r for r in results if r.balance < 0), None)
        if negative is not None:
            warnings.append(
                f"Investment balance goes negative starting in year {negative.year} "
                "due to property cash flows"
            )

        total_withdrawals = sum((-cf for cf in linked_cash_flows if cf < 0), ZERO)
        total_contributions = inputs.annual_contribution * inputs.years
        if total_withdrawals > total_contributions * OUTFLOW_WARNING_MULTIPLE:
            warnings.append(
                f"Property cash outflows (${total_withdrawals:,.0f}) significantly exceed "
                f"investment contributions (${total_contributions:,.0f})"
            )

        return warnings

    def summarize(
        self, inputs: InvestmentInputs, results: list[InvestmentYearResult]
    ) -> InvestmentSummary:
        """Totals over the horizon, separating manual contributions from property flows."""
        manual_contributed = ZERO
        manual_withdrawn = ZERO
        for result in results[1:]:
            if result.annual_contribution > 0:
                manual_contributed += result.annual_contribution
            else:
                manual_withdrawn -= result.annual_contribution

        flows = [result.property_cash_flow for result in results[1:]]
        flow_in = sum((cf for cf in flows if cf > 0), ZERO)
        flow_out = sum((-cf for cf in flows if cf < 0), ZERO)

        total_contributed = manual_contributed + flow_in
        total_withdrawn = manual_withdrawn + flow_out
        net_contributions = total_contributed - total_withdrawn

        final = results[-1]
        initial = inputs.initial_amount
        total_earnings = final.balance - initial - net_contributions
        total_return = total_earnings / initial * 100 if initial > 0 else ZERO

        return InvestmentSummary(
            initial_amount=initial,
            total_manual_contributed=manual_contributed,
            total_manual_withdrawn=manual_withdrawn,
            total_property_cash_flow=flow_in - flow_out,
            total_contributed=total_contributed,
            total_withdrawn=total_withdrawn,
            net_contributions=net_contributions,
            total_earnings=to_cents(total_earnings),
            total_return=to_cents(total_return),
            final_net_gain=final.balance - initial,
            real_final_net_gain=final.real_balance - initial,
        )
