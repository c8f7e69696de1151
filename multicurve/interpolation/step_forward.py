"""
Step forward interpolation on zero rates.
"""
import numpy as np

from .base import Interpolator


class StepForwardInterpolator(Interpolator):
    """Step forward (continuous) interpolation on continuously compounded zero rates.

    ``r(t) * t`` is linear between pillars, so discount factors are log-linear
    and instantaneous forwards are piecewise constant. Before the first pillar
    the first zero rate is held flat; beyond the last pillar the last forward
    rate is extended.
    """

    def _log_df_weights(self, t: float) -> np.ndarray:
        """Weights ``w`` such that ``r(t) * t = sum_i w_i * r_i``."""
        n = len(self.pillars)
        weights = np.zeros(n)
        if self._is_left_of_range(t) or n == 1:
            weights[0] = t
            return weights
        if self._is_right_of_range(t):
            t1, t2 = self.pillars[-2], self.pillars[-1]
            slope = (t - t2) / (t2 - t1)
            weights[-1] = t2 * (1.0 + slope)
            weights[-2] = -t1 * slope
            return weights

        i, weight = self._bracket(t)
        weights[i] = (1.0 - weight) * self.pillars[i]
        weights[i + 1] = weight * self.pillars[i + 1]
        return weights

    def interpolate(self, t: float) -> float:
        if self._is_left_of_range(t) or len(self.pillars) == 1:
            return float(self.values[0])
        return float(self._log_df_weights(t) @ self.values / t)

    def node_sensitivity(self, t: float) -> np.ndarray:
        if self._is_left_of_range(t) or len(self.pillars) == 1:
            return self._unit_vector(0)
        return self._log_df_weights(t) / t
