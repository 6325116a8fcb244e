"""Projection and tax computation engines."""

from projector.engines.federal import FederalTaxCalculator
from projector.engines.investment import InvestmentProjectionEngine
from projector.engines.property import PropertyProjectionEngine
from projector.engines.recapture import DepreciationRecaptureCalculator
from projector.engines.sale import SaleTaxCalculator
from projector.engines.section121 import Section121Calculator
from projector.engines.state import StateTaxCalculator
from projector.engines.validation import PropertyValidator

__all__ = [
    "DepreciationRecaptureCalculator",
    "FederalTaxCalculator",
    "InvestmentProjectionEngine",
    "PropertyProjectionEngine",
    "PropertyValidator",
    "SaleTaxCalculator",
    "Section121Calculator",
    "StateTaxCalculator",
]
