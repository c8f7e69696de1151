"""
Sensitivities of instrument values to curve parameters and to market quotes.
"""

from typing import Dict, Mapping, Optional, Sequence

import numpy as np

from ..pricing.calculators import InstrumentCalculator, present_value_curve_sensitivity_calculator
from ..provider.multicurve import MulticurveProvider
from .building_block import CurveBuildingBlockBundle


class ParameterSensitivityCalculator:
    """Chain a curve sensitivity calculator down to the curve parameters."""

    def __init__(self, sensitivity_calculator: Optional[InstrumentCalculator] = None):
        self.sensitivity_calculator = sensitivity_calculator or present_value_curve_sensitivity_calculator()

    def calculate(self, instrument, provider: MulticurveProvider,
                  curve_names: Optional[Sequence[str]] = None) -> Dict[str, np.ndarray]:
        """Curve name -> sensitivity to that curve's parameters."""
        sensitivity = self.sensitivity_calculator.evaluate(instrument, provider).cleaned()
        names = sensitivity.curve_names if curve_names is None else curve_names
        return {name: sensitivity.to_parameters(provider, [name]) for name in names}


class MarketQuoteSensitivityBlockCalculator:
    """Market-quote sensitivity through the building blocks of a calibration.

    A parameter sensitivity to curve ``c`` is multiplied by the transition rows
    of ``c`` and spread over every curve in the quote layout of its block.
    Curves without a building block (curves that were not calibrated)
    contribute nothing.
    """

    def __init__(self, parameter_calculator: Optional[ParameterSensitivityCalculator] = None):
        self.parameter_calculator = parameter_calculator or ParameterSensitivityCalculator()

    def from_instrument(self, instrument, provider: MulticurveProvider,
                        bundle: CurveBuildingBlockBundle) -> Dict[str, np.ndarray]:
        parameter_sensitivity = self.parameter_calculator.calculate(instrument, provider)
        return self.from_parameter_sensitivity(parameter_sensitivity, bundle)

    @staticmethod
    def from_parameter_sensitivity(parameter_sensitivity: Mapping[str, np.ndarray],
                                   bundle: CurveBuildingBlockBundle) -> Dict[str, np.ndarray]:
        result: Dict[str, np.ndarray] = {}
        for name, sensitivity in parameter_sensitivity.items():
            if name not in bundle:
                continue
            block, matrix = bundle.get(name)
            quote_sensitivity = np.asarray(sensitivity, dtype=float) @ matrix
            for curve, (start, count) in block.layout.items():
                result[curve] = result.get(curve, np.zeros(count)) + quote_sensitivity[start:start + count]
        return result
