"""Growth and inflation factors shared by the projection engines."""

from decimal import Decimal

ONE = Decimal("1")


def rate_base(rate_percent: Decimal) -> Decimal:
    """Per-period growth base for a percentage rate, e.g. 7 -> 1.07."""
    return 1 + rate_percent / 100


def compound(base: Decimal, periods: int) -> Decimal:
    """``base ** periods`` with an empty run of periods always worth 1, even at a zero base."""
    if periods == 0:
        return ONE
    return base**periods


def inflation_base(inflation_percent: Decimal) -> Decimal:
    """Yearly deflator base; a non-positive base means no deflation, so real figures equal nominal."""
    base = rate_base(inflation_percent)
    return base if base > 0 else ONE
