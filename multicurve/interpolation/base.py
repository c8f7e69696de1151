"""
Base class for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import numpy as np


class Interpolator(ABC):
    """Base class for interpolation on node values.

    Node order is significant: node ``i`` is parameter ``i`` of the curve built
    on top of the interpolator, so pillars are validated rather than sorted.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Strictly increasing node times (in years)
            values: Node values (zero rates, index levels, ...)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 1:
            raise ValueError("Need at least 1 point for interpolation")

        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)

        if np.any(np.diff(self.pillars) <= 0):
            raise ValueError(f"Pillars must be strictly increasing: {self.pillars.tolist()}")
        if not np.all(np.isfinite(self.values)):
            raise ValueError(f"Node values must be finite: {self.values.tolist()}")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    @abstractmethod
    def node_sensitivity(self, t: float) -> np.ndarray:
        """Derivative of ``interpolate(t)`` with respect to each node value."""

    def __len__(self) -> int:
        return len(self.pillars)

    def _bracket(self, t: float) -> Tuple[int, float]:
        """Index of the left node and linear weight of the right node.

        Only valid strictly inside the pillar range.
        """
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        return i, (t - t1) / (t2 - t1)

    def _is_left_of_range(self, t: float) -> bool:
        return t <= self.pillars[0]

    def _is_right_of_range(self, t: float) -> bool:
        return t >= self.pillars[-1]

    def _unit_vector(self, i: int) -> np.ndarray:
        sensitivity = np.zeros(len(self.pillars))
        sensitivity[i] = 1.0
        return sensitivity
