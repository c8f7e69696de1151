"""Interpolation schemes with node sensitivities."""

from .base import Interpolator
from .factory import INTERPOLATION_METHODS, create_interpolator
from .linear import LinearInterpolator, LogLinearInterpolator, PiecewiseConstantInterpolator
from .step_forward import StepForwardInterpolator

__all__ = [
    "INTERPOLATION_METHODS",
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "PiecewiseConstantInterpolator",
    "StepForwardInterpolator",
    "create_interpolator",
]
