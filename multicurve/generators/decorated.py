"""
Generators decorating another generator's curves with a fixed transform.
"""

from typing import Callable, Optional, Sequence

import numpy as np

from ..curves.base import Curve, YieldCurve
from ..curves.price_index import SeasonalCurve, SeasonalPriceIndexCurve
from ..curves.spread import SpreadYieldCurve
from .base import CurveGenerator

CurveTransform = Callable[[str, Curve], Curve]


class GeneratorCurveTransformed(CurveGenerator):
    """Base generator composed with a curve transform.

    The transform takes the curve name and the base curve and returns the final
    curve. Parameters, finalisation and initial guesses are those of the base.
    """

    def __init__(self, base: CurveGenerator, transform: CurveTransform):
        self.base = base
        self.transform = transform

    def number_of_parameters(self) -> int:
        return self.base.number_of_parameters()

    def generate_curve(self, name: str, parameters: Sequence[float]) -> Curve:
        return self.transform(name, self.base.generate_curve(name, parameters))

    def final_generator(self, instruments: Sequence) -> "GeneratorCurveTransformed":
        final_base = self.base.final_generator(instruments)
        if final_base is self.base:
            return self
        return GeneratorCurveTransformed(final_base, self.transform)

    def initial_guess(self, rates: Optional[Sequence[float]]) -> np.ndarray:
        return self.base.initial_guess(rates)


def with_seasonality(generator: CurveGenerator, seasonal: SeasonalCurve) -> GeneratorCurveTransformed:
    """Price index generator with a fixed seasonal adjustment."""

    def transform(name: str, curve: Curve) -> Curve:
        return SeasonalPriceIndexCurve(name, curve, seasonal)

    return GeneratorCurveTransformed(generator, transform)


def with_spread(generator: CurveGenerator, fixed: YieldCurve, subtract: bool = False) -> GeneratorCurveTransformed:
    """Yield curve generator with a fixed curve added (or subtracted)."""

    def transform(name: str, curve: Curve) -> Curve:
        return SpreadYieldCurve(name, curve, fixed, subtract)

    return GeneratorCurveTransformed(generator, transform)
