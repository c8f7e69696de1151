"""
Linear, log-linear and piecewise constant interpolation with flat extrapolation.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on node values."""

    def interpolate(self, t: float) -> float:
        if self._is_left_of_range(t):
            return float(self.values[0])
        if self._is_right_of_range(t):
            return float(self.values[-1])

        i, weight = self._bracket(t)
        v1, v2 = self.values[i], self.values[i + 1]
        return float(v1 + weight * (v2 - v1))

    def node_sensitivity(self, t: float) -> np.ndarray:
        if self._is_left_of_range(t):
            return self._unit_vector(0)
        if self._is_right_of_range(t):
            return self._unit_vector(len(self.pillars) - 1)

        i, weight = self._bracket(t)
        sensitivity = np.zeros(len(self.pillars))
        sensitivity[i] = 1.0 - weight
        sensitivity[i + 1] = weight
        return sensitivity


class LogLinearInterpolator(Interpolator):
    """Linear interpolation on the logarithm of strictly positive node values.

    Typical for price index levels, where it gives a constant inflation rate
    between nodes.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        if np.any(self.values <= 0):
            raise ValueError(
                f"Log-linear interpolation requires positive values: {self.values.tolist()}"
            )
        self.log_values = np.log(self.values)

    def interpolate(self, t: float) -> float:
        if self._is_left_of_range(t):
            return float(self.values[0])
        if self._is_right_of_range(t):
            return float(self.values[-1])

        i, weight = self._bracket(t)
        l1, l2 = self.log_values[i], self.log_values[i + 1]
        return math.exp(l1 + weight * (l2 - l1))

    def node_sensitivity(self, t: float) -> np.ndarray:
        if self._is_left_of_range(t):
            return self._unit_vector(0)
        if self._is_right_of_range(t):
            return self._unit_vector(len(self.pillars) - 1)

        i, weight = self._bracket(t)
        value = self.interpolate(t)
        sensitivity = np.zeros(len(self.pillars))
        sensitivity[i] = value * (1.0 - weight) / self.values[i]
        sensitivity[i + 1] = value * weight / self.values[i + 1]
        return sensitivity


class PiecewiseConstantInterpolator(Interpolator):
    """Step function taking the value of the last node at or before t."""

    def _index(self, t: float) -> int:
        if self._is_left_of_range(t):
            return 0
        if self._is_right_of_range(t):
            return len(self.pillars) - 1
        i, _ = self._bracket(t)
        return i

    def interpolate(self, t: float) -> float:
        return float(self.values[self._index(t)])

    def node_sensitivity(self, t: float) -> np.ndarray:
        return self._unit_vector(self._index(t))
