"""
Generators of interpolated yield and price index curves.
"""

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from ..curves.price_index import InterpolatedPriceIndexCurve
from ..curves.yield_curve import InterpolatedYieldCurve
from ..exceptions import StructuralConfigurationError
from .base import CurveGenerator
from .maturity import last_fixing_start_time, last_time

logger = logging.getLogger(__name__)

DEFAULT_PRICE_INDEX_GUESS = 100.0


def _node_times(instruments: Sequence, maturity_calculator: Callable) -> np.ndarray:
    return np.array([maturity_calculator(instrument) for instrument in instruments], dtype=float)


def _check_nodes(nodes: np.ndarray, generator_name: str) -> np.ndarray:
    nodes = np.asarray(nodes, dtype=float)
    if nodes.ndim != 1 or len(nodes) == 0:
        raise StructuralConfigurationError(f"{generator_name} needs at least one node")
    if np.any(np.diff(nodes) <= 0):
        raise StructuralConfigurationError(
            f"{generator_name} nodes must be strictly increasing, got {nodes.tolist()}; "
            "instruments must be ordered by maturity"
        )
    return nodes


class _NotFinal:
    """Shared behaviour of generators whose nodes come from the instruments."""

    def number_of_parameters(self) -> int:
        raise StructuralConfigurationError(
            f"{type(self).__name__} has no node layout until final_generator is called"
        )

    def generate_curve(self, name, parameters):
        raise StructuralConfigurationError(
            f"{type(self).__name__} must be finalised before generating curve {name}"
        )


class GeneratorCurveYieldInterpolatedNode(CurveGenerator):
    """Zero-rate curve on fixed node times; parameters are the node zero rates."""

    def __init__(self, node_times: Sequence[float], interpolation: str = "STEP_FORWARD"):
        self.node_times = _check_nodes(node_times, type(self).__name__)
        self.interpolation = interpolation

    def number_of_parameters(self) -> int:
        return len(self.node_times)

    def generate_curve(self, name: str, parameters: Sequence[float]) -> InterpolatedYieldCurve:
        return InterpolatedYieldCurve(name, self.node_times, self._check_parameters(parameters), self.interpolation)


class GeneratorCurveYieldInterpolated(_NotFinal, CurveGenerator):
    """Zero-rate curve with one node at each instrument's maturity."""

    def __init__(self, maturity_calculator: Callable = last_time, interpolation: str = "STEP_FORWARD"):
        self.maturity_calculator = maturity_calculator
        self.interpolation = interpolation

    def final_generator(self, instruments: Sequence) -> GeneratorCurveYieldInterpolatedNode:
        nodes = _node_times(instruments, self.maturity_calculator)
        logger.debug("Yield curve nodes: %s", nodes.tolist())
        return GeneratorCurveYieldInterpolatedNode(nodes, self.interpolation)


class GeneratorPriceIndexCurveInterpolatedNode(CurveGenerator):
    """Price index curve on fixed node times; parameters are the node index levels."""

    def __init__(self, node_times: Sequence[float], interpolation: str = "LOG_LINEAR"):
        self.node_times = _check_nodes(node_times, type(self).__name__)
        self.interpolation = interpolation

    def number_of_parameters(self) -> int:
        return len(self.node_times)

    def generate_curve(self, name: str, parameters: Sequence[float]) -> InterpolatedPriceIndexCurve:
        return InterpolatedPriceIndexCurve(
            name, self.node_times, self._check_parameters(parameters), self.interpolation
        )

    def initial_guess(self, rates: Optional[Sequence[float]]) -> np.ndarray:
        """Index levels from the supplied values; missing or non-positive ones default to 100."""
        n = self.number_of_parameters()
        if rates is None:
            return np.full(n, DEFAULT_PRICE_INDEX_GUESS)
        self._check_rate_count(rates)
        guess = np.asarray(rates, dtype=float).copy()
        guess[~(guess > 0)] = DEFAULT_PRICE_INDEX_GUESS
        return guess


class GeneratorPriceIndexCurveInterpolated(_NotFinal, CurveGenerator):
    """Price index curve with one node at each instrument's last fixing."""

    def __init__(self, maturity_calculator: Callable = last_fixing_start_time,
                 interpolation: str = "LOG_LINEAR"):
        self.maturity_calculator = maturity_calculator
        self.interpolation = interpolation

    def final_generator(self, instruments: Sequence) -> GeneratorPriceIndexCurveInterpolatedNode:
        nodes = _node_times(instruments, self.maturity_calculator)
        logger.debug("Price index curve nodes: %s", nodes.tolist())
        return GeneratorPriceIndexCurveInterpolatedNode(nodes, self.interpolation)
