"""
Factory for creating interpolators by name.
"""
from typing import Sequence

from .base import Interpolator
from .linear import LinearInterpolator, LogLinearInterpolator, PiecewiseConstantInterpolator
from .step_forward import StepForwardInterpolator

INTERPOLATION_METHODS = {
    "LINEAR": LinearInterpolator,
    "LOG_LINEAR": LogLinearInterpolator,
    "PIECEWISE_CONSTANT": PiecewiseConstantInterpolator,
    "STEP_FORWARD": StepForwardInterpolator,
    "STEP_FORWARD_CONTINUOUS": StepForwardInterpolator,
}


def create_interpolator(method: str,
                        pillars: Sequence[float],
                        values: Sequence[float]) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()
    if method_upper not in INTERPOLATION_METHODS:
        raise ValueError(f"Unknown interpolation method: {method}. "
                         f"Available: {', '.join(INTERPOLATION_METHODS)}")
    return INTERPOLATION_METHODS[method_upper](pillars, values)
