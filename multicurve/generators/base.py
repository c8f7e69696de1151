"""
Curve generator interface.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ..curves.base import Curve
from ..exceptions import StructuralConfigurationError


class CurveGenerator(ABC):
    """Turns a parameter vector into a named curve.

    A generator may need the calibration instruments to know its node layout;
    ``final_generator`` returns the generator actually used, and only final
    generators report a parameter count or produce curves. Generation is
    deterministic: equal parameters give equal curves.
    """

    @abstractmethod
    def number_of_parameters(self) -> int:
        """Number of parameters of the curves produced."""

    @abstractmethod
    def generate_curve(self, name: str, parameters: Sequence[float]) -> Curve:
        """Build the curve for a parameter vector."""

    def final_generator(self, instruments: Sequence) -> "CurveGenerator":
        """Generator specialised to the calibration instruments."""
        return self

    def initial_guess(self, rates: Optional[Sequence[float]]) -> np.ndarray:
        """Starting parameters from the instruments' market rates, one per parameter."""
        n = self.number_of_parameters()
        if rates is None:
            return np.zeros(n)
        self._check_rate_count(rates)
        return np.asarray(rates, dtype=float).copy()

    def _check_parameters(self, parameters: Sequence[float]) -> np.ndarray:
        values = np.asarray(parameters, dtype=float)
        if values.shape != (self.number_of_parameters(),):
            raise ValueError(
                f"{type(self).__name__} expects {self.number_of_parameters()} parameters, got {values.shape}"
            )
        return values

    def _check_rate_count(self, rates: Sequence[float]) -> None:
        if len(rates) != self.number_of_parameters():
            raise StructuralConfigurationError(
                f"{type(self).__name__} has {self.number_of_parameters()} parameters but "
                f"{len(rates)} instrument rates; give the unit an explicit initial guess"
            )
