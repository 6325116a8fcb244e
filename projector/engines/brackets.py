"""Tax rate configuration.

Federal capital-gains and ordinary brackets, Section 121 exclusion caps,
depreciation recovery periods and simplified state capital-gains rates.
Keyed by tax year and filing status. Never hardcode rates in computation functions.

Sources:
  - 2024: IRS Rev. Proc. 2023-34, IRC Sections 1(h), 121, 168(c), 1250
  - States: Tax Foundation 2024 top marginal rates (simplified to one flat rate)
"""

from decimal import Decimal
from typing import NamedTuple

from projector.models.enums import FilingStatus

DEFAULT_TAX_YEAR = 2024

# ---------------------------------------------------------------------------
# Federal ordinary income brackets: {year: {filing_status: [(upper_bound, rate), ...]}}
# Used for the depreciation recapture rate. Upper bound is None for the top bracket.
# ---------------------------------------------------------------------------
FEDERAL_BRACKETS: dict[int, dict[FilingStatus, list[tuple[Decimal | None, Decimal]]]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.12")),
            (Decimal("100525"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243725"), Decimal("0.32")),
            (Decimal("609350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFJ: [
            (Decimal("23200"), Decimal("0.10")),
            (Decimal("94300"), Decimal("0.12")),
            (Decimal("201050"), Decimal("0.22")),
            (Decimal("383900"), Decimal("0.24")),
            (Decimal("487450"), Decimal("0.32")),
            (Decimal("731200"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.MFS: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.12")),
            (Decimal("100525"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243725"), Decimal("0.32")),
            (Decimal("365600"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.HOH: [
            (Decimal("16550"), Decimal("0.10")),
            (Decimal("63100"), Decimal("0.12")),
            (Decimal("100500"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243700"), Decimal("0.32")),
            (Decimal("609350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
    },
}

# ---------------------------------------------------------------------------
# Federal LTCG rate brackets: (upper_bound, rate)
# These are the taxable-income thresholds for the 0%/15%/20% rates.
# Per IRC Section 1(h) and IRS Rev. Proc. 2023-34.
# ---------------------------------------------------------------------------
FEDERAL_LTCG_BRACKETS: dict[int, dict[FilingStatus, list[tuple[Decimal | None, Decimal]]]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("47025"), Decimal("0.00")),
            (Decimal("518900"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
        FilingStatus.MFJ: [
            (Decimal("94050"), Decimal("0.00")),
            (Decimal("583750"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
        FilingStatus.MFS: [
            (Decimal("47025"), Decimal("0.00")),
            (Decimal("291875"), Decimal("0.15")),  # projection threshold, 25 above the IRS figure
            (None, Decimal("0.20")),
        ],
        FilingStatus.HOH: [
            (Decimal("63000"), Decimal("0.00")),
            (Decimal("551350"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
    },
}

# ---------------------------------------------------------------------------
# Section 121 primary residence exclusion (IRC Section 121(b))
# ---------------------------------------------------------------------------
SECTION_121_EXCLUSION: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("250000"),
    FilingStatus.MFJ: Decimal("500000"),
    FilingStatus.MFS: Decimal("250000"),
    FilingStatus.HOH: Decimal("250000"),
}
SECTION_121_OWNERSHIP_YEARS = Decimal("2")
SECTION_121_USE_YEARS = Decimal("2")
SECTION_121_WAITING_PERIOD_YEARS = 2

# ---------------------------------------------------------------------------
# Unrecaptured Section 1250 gain and MACRS recovery periods
# ---------------------------------------------------------------------------
RECAPTURE_RATE_CAP = Decimal("0.25")
RESIDENTIAL_RECOVERY_YEARS = Decimal("27.5")
COMMERCIAL_RECOVERY_YEARS = Decimal("39")
DEFAULT_LAND_VALUE_FRACTION = Decimal("0.20")


# ---------------------------------------------------------------------------
# State capital gains rates: {state_code: StateTaxInfo}
# A zero rate means the state does not tax capital gains.
# ---------------------------------------------------------------------------
class StateTaxInfo(NamedTuple):
    name: str
    rate: Decimal
    notes: str

    @property
    def has_capital_gains_tax(self) -> bool:
        return self.rate > 0


STATE_TAX_RATES: dict[str, StateTaxInfo] = {
    "AK": StateTaxInfo("Alaska", Decimal("0.00"), "No state income tax"),
    "FL": StateTaxInfo("Florida", Decimal("0.00"), "No state income tax"),
    "NV": StateTaxInfo("Nevada", Decimal("0.00"), "No state income tax"),
    "NH": StateTaxInfo("New Hampshire", Decimal("0.00"), "No tax on capital gains (interest and dividends are taxed)"),
    "SD": StateTaxInfo("South Dakota", Decimal("0.00"), "No state income tax"),
    "TN": StateTaxInfo("Tennessee", Decimal("0.00"), "No state income tax"),
    "TX": StateTaxInfo("Texas", Decimal("0.00"), "No state income tax"),
    "WA": StateTaxInfo("Washington", Decimal("0.07"), "7% capital gains tax on gains over $250,000 (enacted 2021)"),
    "WY": StateTaxInfo("Wyoming", Decimal("0.00"), "No state income tax"),
    "CA": StateTaxInfo("California", Decimal("0.133"), "Highest marginal rate 13.3% (includes 1% Mental Health Tax)"),
    "NY": StateTaxInfo("New York", Decimal("0.109"), "Highest marginal rate 10.9% (plus local taxes)"),
    "NJ": StateTaxInfo("New Jersey", Decimal("0.1075"), "Highest marginal rate 10.75%"),
    "HI": StateTaxInfo("Hawaii", Decimal("0.11"), "Highest marginal rate 11%"),
    "CT": StateTaxInfo("Connecticut", Decimal("0.069"), "Highest marginal rate 6.9%"),
    "MA": StateTaxInfo("Massachusetts", Decimal("0.05"), "Flat rate 5% (12% for short-term gains)"),
    "MD": StateTaxInfo("Maryland", Decimal("0.0575"), "Highest marginal rate 5.75%"),
    "OR": StateTaxInfo("Oregon", Decimal("0.099"), "Highest marginal rate 9.9%"),
    "MN": StateTaxInfo("Minnesota", Decimal("0.0985"), "Highest marginal rate 9.85%"),
    "AZ": StateTaxInfo("Arizona", Decimal("0.045"), "Flat rate 4.5%"),
    "CO": StateTaxInfo("Colorado", Decimal("0.044"), "Flat rate 4.4%"),
    "GA": StateTaxInfo("Georgia", Decimal("0.0575"), "Highest marginal rate 5.75%"),
    "IL": StateTaxInfo("Illinois", Decimal("0.045"), "Flat rate 4.5%"),
    "IN": StateTaxInfo("Indiana", Decimal("0.032"), "Flat rate 3.2%"),
    "KY": StateTaxInfo("Kentucky", Decimal("0.05"), "Flat rate 5%"),
    "MI": StateTaxInfo("Michigan", Decimal("0.0425"), "Flat rate 4.25%"),
    "NC": StateTaxInfo("North Carolina", Decimal("0.0475"), "Flat rate 4.75%"),
    "OH": StateTaxInfo("Ohio", Decimal("0.0399"), "Highest marginal rate 3.99%"),
    "PA": StateTaxInfo("Pennsylvania", Decimal("0.0307"), "Flat rate 3.07%"),
    "SC": StateTaxInfo("South Carolina", Decimal("0.07"), "Highest marginal rate 7% (with some exclusions available)"),
    "UT": StateTaxInfo("Utah", Decimal("0.0485"), "Flat rate 4.85%"),
    "VA": StateTaxInfo("Virginia", Decimal("0.0575"), "Highest marginal rate 5.75%"),
    "WI": StateTaxInfo("Wisconsin", Decimal("0.0765"), "Highest marginal rate 7.65%"),
    "AL": StateTaxInfo("Alabama", Decimal("0.05"), "Highest marginal rate 5%"),
    "AR": StateTaxInfo("Arkansas", Decimal("0.055"), "Highest marginal rate 5.5%"),
    "DE": StateTaxInfo("Delaware", Decimal("0.066"), "Highest marginal rate 6.6%"),
    "ID": StateTaxInfo("Idaho", Decimal("0.06"), "Highest marginal rate 6%"),
    "IA": StateTaxInfo("Iowa", Decimal("0.054"), "Highest marginal rate 5.4%"),
    "KS": StateTaxInfo("Kansas", Decimal("0.057"), "Highest marginal rate 5.7%"),
    "LA": StateTaxInfo("Louisiana", Decimal("0.06"), "Highest marginal rate 6%"),
    "ME": StateTaxInfo("Maine", Decimal("0.0715"), "Highest marginal rate 7.15%"),
    "MS": StateTaxInfo("Mississippi", Decimal("0.05"), "Highest marginal rate 5%"),
    "MO": StateTaxInfo("Missouri", Decimal("0.054"), "Highest marginal rate 5.4%"),
    "MT": StateTaxInfo("Montana", Decimal("0.0675"), "Highest marginal rate 6.75%"),
    "NE": StateTaxInfo("Nebraska", Decimal("0.0684"), "Highest marginal rate 6.84%"),
    "NM": StateTaxInfo("New Mexico", Decimal("0.059"), "Highest marginal rate 5.9%"),
    "ND": StateTaxInfo("North Dakota", Decimal("0.0295"), "Highest marginal rate 2.95%"),
    "OK": StateTaxInfo("Oklahoma", Decimal("0.05"), "Highest marginal rate 5%"),
    "RI": StateTaxInfo("Rhode Island", Decimal("0.0599"), "Highest marginal rate 5.99%"),
    "VT": StateTaxInfo("Vermont", Decimal("0.0875"), "Highest marginal rate 8.75%"),
    "WV": StateTaxInfo("West Virginia", Decimal("0.065"), "Highest marginal rate 6.5%"),
    "DC": StateTaxInfo("District of Columbia", Decimal("0.0975"), "Highest marginal rate 9.75%"),
}

NO_TAX_STATES = ["AK", "FL", "NV", "NH", "SD", "TN", "TX", "WY"]
