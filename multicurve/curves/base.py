"""
Base curve classes.

Every calibrated curve exposes a native value (zero rate for yield curves,
index level for price index curves). Curve sensitivities produced by the
pricing calculators are derivatives with respect to that native value at a
given time, and ``parameter_sensitivity`` chains them down to the curve
parameters.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class Curve(ABC):
    """A named curve defined by a finite parameter vector."""

    def __init__(self, name: str):
        self.name = name

    @property
    @abstractmethod
    def number_of_parameters(self) -> int:
        """Number of calibrated parameters."""

    @property
    @abstractmethod
    def x_data(self) -> np.ndarray:
        """Node times."""

    @property
    @abstractmethod
    def y_data(self) -> np.ndarray:
        """Node values (the calibrated parameters)."""

    @abstractmethod
    def value(self, t: float) -> float:
        """Native curve value at time t."""

    @abstractmethod
    def parameter_sensitivity(self, t: float) -> np.ndarray:
        """Derivative of ``value(t)`` with respect to each curve parameter."""

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class YieldCurve(Curve):
    """Curve of continuously compounded zero rates."""

    @abstractmethod
    def zero(self, t: float) -> float:
        """Continuously compounded zero rate at time t."""

    def value(self, t: float) -> float:
        return self.zero(t)

    def df(self, t: float) -> float:
        """Discount factor at time t."""
        return math.exp(-self.zero(t) * t)

    def forward(self, start: float, end: float, accrual: Optional[float] = None) -> float:
        """Simply compounded forward rate between two times.

        Args:
            start: Start time of the period
            end: End time of the period
            accrual: Accrual factor of the period; defaults to ``end - start``
        """
        if accrual is None:
            accrual = end - start
        if accrual <= 0:
            raise ValueError("Forward period must be positive")
        return (self.df(start) / self.df(end) - 1.0) / accrual


class PriceIndexCurve(Curve):
    """Curve of estimated price index levels."""

    @abstractmethod
    def price_index(self, t: float) -> float:
        """Estimated index level at time t."""

    def value(self, t: float) -> float:
        return self.price_index(t)
