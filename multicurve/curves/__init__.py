"""Immutable calibrated curves."""

from .base import Curve, PriceIndexCurve, YieldCurve
from .price_index import InterpolatedPriceIndexCurve, SeasonalCurve, SeasonalPriceIndexCurve
from .spread import SpreadYieldCurve
from .yield_curve import InterpolatedYieldCurve

__all__ = [
    "Curve",
    "InterpolatedPriceIndexCurve",
    "InterpolatedYieldCurve",
    "PriceIndexCurve",
    "SeasonalCurve",
    "SeasonalPriceIndexCurve",
    "SpreadYieldCurve",
    "YieldCurve",
]
