"""
Price index curves and seasonal adjustment.
"""

from typing import Sequence

import numpy as np

from ..interpolation import create_interpolator
from .base import PriceIndexCurve

MONTHS_PER_YEAR = 12


class InterpolatedPriceIndexCurve(PriceIndexCurve):
    """Price index levels interpolated between nodes (log-linear by default)."""

    def __init__(
        self,
        name: str,
        pillar_times: Sequence[float],
        index_values: Sequence[float],
        interpolation: str = "LOG_LINEAR",
    ):
        super().__init__(name)
        self.interpolation = interpolation.upper()
        self._interpolator = create_interpolator(self.interpolation, pillar_times, index_values)

    @property
    def number_of_parameters(self) -> int:
        return len(self._interpolator)

    @property
    def x_data(self) -> np.ndarray:
        return self._interpolator.pillars.copy()

    @property
    def y_data(self) -> np.ndarray:
        return self._interpolator.values.copy()

    def price_index(self, t: float) -> float:
        return self._interpolator.interpolate(t)

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        return self._interpolator.node_sensitivity(t)


class SeasonalCurve:
    """Piecewise constant cumulative seasonal adjustment on a monthly grid.

    The value on step ``k`` is the cumulated effect of the monthly factors
    ``factors[0], ..., factors[(k - 1) % 12]``; before the first step it is
    neutral. Passing 11 factors completes the year with the factor that makes
    the annual adjustment neutral.

    Args:
        steps: Increasing times of the monthly steps (first step is neutral)
        factors: 11 or 12 monthly factors
        additive: Additive instead of multiplicative adjustment
    """

    def __init__(self, steps: Sequence[float], factors: Sequence[float], additive: bool = False):
        factors = [float(f) for f in factors]
        if len(factors) == MONTHS_PER_YEAR - 1:
            if additive:
                factors.append(-sum(factors))
            else:
                factors.append(1.0 / float(np.prod(factors)))
        if len(factors) != MONTHS_PER_YEAR:
            raise ValueError(f"Seasonal adjustment needs 11 or 12 monthly factors, got {len(factors)}")
        if not additive and any(f <= 0 for f in factors):
            raise ValueError("Multiplicative seasonal factors must be positive")

        self.steps = np.asarray(steps, dtype=float)
        if len(self.steps) == 0 or np.any(np.diff(self.steps) <= 0):
            raise ValueError("Seasonal steps must be non-empty and strictly increasing")
        self.factors = np.asarray(factors)
        self.additive = additive

        neutral = 0.0 if additive else 1.0
        values = [neutral]
        for k in range(1, len(self.steps)):
            factor = self.factors[(k - 1) % MONTHS_PER_YEAR]
            values.append(values[-1] + factor if additive else values[-1] * factor)
        self._values = np.asarray(values)
        self._neutral = neutral

    def value(self, t: float) -> float:
        if t < self.steps[0]:
            return self._neutral
        k = int(np.searchsorted(self.steps, t, side="right")) - 1
        return float(self._values[k])


class SeasonalPriceIndexCurve(PriceIndexCurve):
    """Price index curve with a fixed seasonal adjustment applied to a calibrated base."""

    def __init__(self, name: str, base: PriceIndexCurve, seasonal: SeasonalCurve):
        super().__init__(name)
        self.base = base
        self.seasonal = seasonal

    @property
    def number_of_parameters(self) -> int:
        return self.base.number_of_parameters

    @property
    def x_data(self) -> np.ndarray:
        return self.base.x_data

    @property
    def y_data(self) -> np.ndarray:
        return self.base.y_data

    def price_index(self, t: float) -> float:
        adjustment = self.seasonal.value(t)
        if self.seasonal.additive:
            return self.base.price_index(t) + adjustment
        return self.base.price_index(t) * adjustment

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        sensitivity = self.base.parameter_sensitivity(t)
        if self.seasonal.additive:
            return sensitivity
        return sensitivity * self.seasonal.value(t)
