"""
Yield curve defined as a calibrated curve plus or minus a fixed curve.
"""

import numpy as np

from .base import YieldCurve


class SpreadYieldCurve(YieldCurve):
    """Zero rate of ``calibrated`` with the zero rate of ``fixed`` added (or subtracted).

    Only the calibrated curve carries parameters; the fixed curve is a
    constant shift and does not contribute to parameter sensitivities.
    """

    def __init__(self, name: str, calibrated: YieldCurve, fixed: YieldCurve, subtract: bool = False):
        super().__init__(name)
        self.calibrated = calibrated
        self.fixed = fixed
        self.subtract = subtract

    @property
    def number_of_parameters(self) -> int:
        return self.calibrated.number_of_parameters

    @property
    def x_data(self) -> np.ndarray:
        return self.calibrated.x_data

    @property
    def y_data(self) -> np.ndarray:
        return self.calibrated.y_data

    def zero(self, t: float) -> float:
        shift = self.fixed.zero(t)
        return self.calibrated.zero(t) + (-shift if self.subtract else shift)

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        return self.calibrated.parameter_sensitivity(t)
