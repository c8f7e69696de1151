"""
Interpolated zero-rate curve.
"""

from typing import Sequence

import numpy as np

from ..interpolation import create_interpolator
from .base import YieldCurve


class InterpolatedYieldCurve(YieldCurve):
    """Yield curve interpolating continuously compounded zero rates at nodes."""

    def __init__(
        self,
        name: str,
        pillar_times: Sequence[float],
        zero_rates: Sequence[float],
        interpolation: str = "STEP_FORWARD",
    ):
        super().__init__(name)
        self.interpolation = interpolation.upper()
        self._interpolator = create_interpolator(self.interpolation, pillar_times, zero_rates)

    @property
    def number_of_parameters(self) -> int:
        return len(self._interpolator)

    @property
    def x_data(self) -> np.ndarray:
        return self._interpolator.pillars.copy()

    @property
    def y_data(self) -> np.ndarray:
        return self._interpolator.values.copy()

    def zero(self, t: float) -> float:
        return self._interpolator.interpolate(t)

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        return self._interpolator.node_sensitivity(t)

    def __repr__(self) -> str:
        return (
            f"InterpolatedYieldCurve(name={self.name!r}, nodes={self.number_of_parameters}, "
            f"interpolation={self.interpolation!r})"
        )
