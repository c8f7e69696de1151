"""
Exceptions raised by curve calibration.

``InstrumentEvaluationError`` from an instrument calculator is not wrapped: it
propagates to the caller unchanged. A ``ValueError`` from a curve constructor
at the starting point propagates too; at a line-search trial point it only
rejects that trial.
"""

from typing import Optional

import numpy as np


class CurveCalibrationError(RuntimeError):
    """Base class for calibration failures."""


class StructuralConfigurationError(CurveCalibrationError, ValueError):
    """A block or unit is ill-posed and was rejected before any iteration.

    Raised for non-square units, duplicate curve names, names clashing with
    known curves, instruments referencing curves calibrated in later units and
    instruments referencing curves that exist nowhere.
    """


class ConvergenceFailure(CurveCalibrationError):
    """Newton iteration did not reach the tolerance.

    Attributes:
        last_iterate: Parameter vector of the last accepted step
        residual: Objective values at ``last_iterate``
        iterations: Number of Newton steps performed
    """

    def __init__(
        self,
        message: str,
        last_iterate: Optional[np.ndarray] = None,
        residual: Optional[np.ndarray] = None,
        iterations: Optional[int] = None,
    ):
        super().__init__(message)
        self.last_iterate = last_iterate
        self.residual = residual
        self.iterations = iterations


class NumericalSingularity(CurveCalibrationError):
    """The unit Jacobian is singular or too ill-conditioned to solve."""

    def __init__(
        self,
        message: str,
        iterate: Optional[np.ndarray] = None,
        condition_number: Optional[float] = None,
    ):
        super().__init__(message)
        self.iterate = iterate
        self.condition_number = condition_number


class InstrumentEvaluationError(CurveCalibrationError):
    """A calculator has no function registered for an instrument kind."""
