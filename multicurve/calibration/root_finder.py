"""
Newton-Raphson root finder for square systems.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..exceptions import ConvergenceFailure, NumericalSingularity, StructuralConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootFinderResult:
    """Converged root.

    Attributes:
        root: Parameter vector
        residual: Function values at the root
        iterations: Number of Newton steps taken
        converged_on: "FUNCTION" or "PARAMETER", the tolerance that was met
    """

    root: np.ndarray
    residual: np.ndarray
    iterations: int
    converged_on: str


def _norm(values: np.ndarray) -> float:
    return float(np.max(np.abs(values))) if len(values) else 0.0


class NewtonVectorRootFinder:
    """Newton's method with a dense LU solve and step-halving line search.

    Converges when every function value is within ``absolute_tolerance`` or
    every parameter step is within ``parameter_tolerance``.
    """

    def __init__(
        self,
        absolute_tolerance: float = 1e-10,
        parameter_tolerance: float = 1e-10,
        max_steps: int = 100,
        singular_threshold: float = 1e14,
        max_backtracks: int = 20,
    ):
        self.absolute_tolerance = absolute_tolerance
        self.parameter_tolerance = parameter_tolerance
        self.max_steps = max_steps
        self.singular_threshold = singular_threshold
        self.max_backtracks = max_backtracks

    @classmethod
    def from_config(cls, config) -> "NewtonVectorRootFinder":
        return cls(
            absolute_tolerance=config.absolute_tolerance,
            parameter_tolerance=config.parameter_tolerance,
            max_steps=config.max_steps,
            singular_threshold=config.singular_threshold,
            max_backtracks=config.max_backtracks,
        )

    def get_root(
        self,
        function: Callable[[np.ndarray], np.ndarray],
        jacobian: Callable[[np.ndarray], np.ndarray],
        start,
        name: Optional[str] = None,
    ) -> RootFinderResult:
        """Solve ``function(x) = 0`` from ``start``.

        Args:
            function: Maps an n-vector to an n-vector
            jacobian: Maps an n-vector to the n x n derivative matrix
            start: Initial parameters
            name: Label used in log and error messages

        Raises:
            StructuralConfigurationError: If the system is not square
            NumericalSingularity: If a Jacobian cannot be solved
            ConvergenceFailure: If no tolerance is met within ``max_steps``
                or the line search cannot reduce the residual
        """
        label = name or "system"
        x = np.asarray(start, dtype=float).copy()
        f = np.asarray(function(x), dtype=float)
        if f.shape != x.shape:
            raise StructuralConfigurationError(
                f"{label}: {len(f)} equations for {len(x)} unknowns"
            )

        for step in range(self.max_steps):
            if _norm(f) <= self.absolute_tolerance:
                return RootFinderResult(x, f, step, "FUNCTION")

            delta = self._solve(np.asarray(jacobian(x), dtype=float), f, x, label)
            x_new, f_new, scale = self._line_search(function, x, f, delta, step, label)
            logger.debug(
                "Newton iter %s (%s): |f|=%.3e, |dx|=%.3e",
                step + 1, label, _norm(f_new), _norm(x_new - x),
            )
            # A damped step says nothing about convergence.
            if scale == 1.0 and _norm(x_new - x) <= self.parameter_tolerance:
                return RootFinderResult(x_new, f_new, step + 1, "PARAMETER")
            x, f = x_new, f_new

        if _norm(f) <= self.absolute_tolerance:
            return RootFinderResult(x, f, self.max_steps, "FUNCTION")
        raise ConvergenceFailure(
            f"{label}: no convergence after {self.max_steps} steps; residual {_norm(f):.3e} "
            f"above tolerance {self.absolute_tolerance:.1e}",
            last_iterate=x,
            residual=f,
            iterations=self.max_steps,
        )

    def _solve(self, jacobian: np.ndarray, f: np.ndarray, x: np.ndarray, label: str) -> np.ndarray:
        n = len(x)
        if jacobian.shape != (n, n):
            raise StructuralConfigurationError(
                f"{label}: Jacobian shape {jacobian.shape} for {n} unknowns"
            )
        if not np.all(np.isfinite(jacobian)):
            raise NumericalSingularity(f"{label}: Jacobian has non-finite entries", iterate=x)
        condition = float(np.linalg.cond(jacobian))
        if not np.isfinite(condition) or condition > self.singular_threshold:
            raise NumericalSingularity(
                f"{label}: Jacobian is singular (condition number {condition:.3e})",
                iterate=x,
                condition_number=condition,
            )
        try:
            return np.linalg.solve(jacobian, -f)
        except np.linalg.LinAlgError as exc:
            raise NumericalSingularity(
                f"{label}: Jacobian solve failed: {exc}", iterate=x, condition_number=condition
            ) from exc

    def _line_search(self, function, x: np.ndarray, f: np.ndarray, delta: np.ndarray,
                     step: int, label: str):
        """Halve the Newton step until the residual does not increase.

        A trial point where the function raises ``ValueError`` (a curve that
        cannot be built from the trial parameters) is rejected like a larger
        residual.
        """
        current = _norm(f)
        scale = 1.0
        for _ in range(self.max_backtracks + 1):
            x_trial = x + scale * delta
            try:
                f_trial = np.asarray(function(x_trial), dtype=float)
            except ValueError as exc:
                logger.debug("Trial step %.3e rejected (%s): %s", scale, label, exc)
                scale *= 0.5
                continue
            trial = _norm(f_trial)
            if np.isfinite(trial) and (trial <= current or trial <= self.absolute_tolerance):
                return x_trial, f_trial, scale
            scale *= 0.5
        raise ConvergenceFailure(
            f"{label}: residual {current:.3e} could not be reduced at step {step + 1}",
            last_iterate=x,
            residual=f,
            iterations=step,
        )
