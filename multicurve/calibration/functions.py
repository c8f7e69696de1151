"""
Objective and Jacobian of a unit as functions of its parameter vector.
"""

from typing import Sequence

import numpy as np

from ..pricing.calculators import InstrumentCalculator
from ..provider.multicurve import MulticurveProvider
from .data import UnitCalibrationData


def objective_values(instruments: Sequence, provider: MulticurveProvider,
                     calculator: InstrumentCalculator) -> np.ndarray:
    return np.array([calculator.evaluate(instrument, provider) for instrument in instruments], dtype=float)


def parameter_jacobian(instruments: Sequence, provider: MulticurveProvider,
                       sensitivity_calculator: InstrumentCalculator,
                       curve_names: Sequence[str]) -> np.ndarray:
    """One row per instrument: d objective / d parameters of ``curve_names``."""
    rows = [
        sensitivity_calculator.evaluate(instrument, provider).cleaned().to_parameters(provider, curve_names)
        for instrument in instruments
    ]
    return np.vstack(rows)


class UnitObjectiveFunction:
    """Objective values of the unit instruments for a trial parameter vector."""

    def __init__(self, data: UnitCalibrationData, calculator: InstrumentCalculator):
        self.data = data
        self.calculator = calculator

    def __call__(self, parameters: np.ndarray) -> np.ndarray:
        provider = self.data.build_provider(parameters)
        return objective_values(self.data.flat_instruments, provider, self.calculator)


class UnitJacobianFunction:
    """Square Jacobian of the unit objective with respect to its own parameters."""

    def __init__(self, data: UnitCalibrationData, sensitivity_calculator: InstrumentCalculator):
        self.data = data
        self.sensitivity_calculator = sensitivity_calculator

    def __call__(self, parameters: np.ndarray) -> np.ndarray:
        provider = self.data.build_provider(parameters)
        return parameter_jacobian(
            self.data.flat_instruments, provider, self.sensitivity_calculator, self.data.curve_names
        )
