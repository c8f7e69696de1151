"""
Calibration settings and objective selection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..pricing.calculators import (
    InstrumentCalculator,
    par_spread_market_quote_calculator,
    par_spread_market_quote_curve_sensitivity_calculator,
    present_value_calculator,
    present_value_curve_sensitivity_calculator,
)


@dataclass
class CalibrationConfig:
    """Configuration for the Newton root finder and block orchestration.

    Attributes:
        absolute_tolerance: Convergence when every objective value is below this
        parameter_tolerance: Convergence when every parameter step is below this
        max_steps: Maximum number of Newton steps per unit
        singular_threshold: Jacobians with a larger condition number are singular
        max_backtracks: Maximum step halvings in the line search
        parallel_blocks: Calibrate isolated blocks concurrently
        max_workers: Thread pool size for parallel blocks (None for default)
        verbose: Log per-unit details at INFO level
    """

    absolute_tolerance: float = 1e-10
    parameter_tolerance: float = 1e-10
    max_steps: int = 100
    singular_threshold: float = 1e14
    max_backtracks: int = 20
    parallel_blocks: bool = False
    max_workers: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if self.absolute_tolerance <= 0 or self.parameter_tolerance <= 0:
            raise ValueError("Tolerances must be positive")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if self.singular_threshold <= 1:
            raise ValueError("singular_threshold must be greater than 1")
        if self.max_backtracks < 0:
            raise ValueError("max_backtracks must be non-negative")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be positive")


class ObjectiveKind(Enum):
    """Objective driven to zero for each instrument of a unit."""

    PAR_SPREAD = "PAR_SPREAD"
    PRESENT_VALUE = "PRESENT_VALUE"


def objective_calculators(kind: ObjectiveKind) -> Tuple[InstrumentCalculator, InstrumentCalculator]:
    """Value calculator and matching curve sensitivity calculator."""
    if kind is ObjectiveKind.PAR_SPREAD:
        return (par_spread_market_quote_calculator(),
                par_spread_market_quote_curve_sensitivity_calculator())
    if kind is ObjectiveKind.PRESENT_VALUE:
        return present_value_calculator(), present_value_curve_sensitivity_calculator()
    raise ValueError(f"Unknown objective: {kind}")
