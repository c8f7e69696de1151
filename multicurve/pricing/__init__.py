"""Pluggable instrument calculators and curve sensitivities."""

from .calculators import (
    InstrumentCalculator,
    par_spread_market_quote_calculator,
    par_spread_market_quote_curve_sensitivity_calculator,
    present_value_calculator,
    present_value_curve_sensitivity_calculator,
)
from .sensitivity import MulticurveSensitivity

__all__ = [
    "InstrumentCalculator",
    "MulticurveSensitivity",
    "par_spread_market_quote_calculator",
    "par_spread_market_quote_curve_sensitivity_calculator",
    "present_value_calculator",
    "present_value_curve_sensitivity_calculator",
]
