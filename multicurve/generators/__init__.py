"""Curve generators: parameter vectors to curves."""

from .base import CurveGenerator
from .decorated import GeneratorCurveTransformed, with_seasonality, with_spread
from .interpolated import (
    GeneratorCurveYieldInterpolated,
    GeneratorCurveYieldInterpolatedNode,
    GeneratorPriceIndexCurveInterpolated,
    GeneratorPriceIndexCurveInterpolatedNode,
)
from .maturity import last_fixing_start_time, last_time

__all__ = [
    "CurveGenerator",
    "GeneratorCurveTransformed",
    "GeneratorCurveYieldInterpolated",
    "GeneratorCurveYieldInterpolatedNode",
    "GeneratorPriceIndexCurveInterpolated",
    "GeneratorPriceIndexCurveInterpolatedNode",
    "last_fixing_start_time",
    "last_time",
    "with_seasonality",
    "with_spread",
]
