"""Curve calibration: root finding, unit/block orchestration and Jacobian bookkeeping."""

from .building_block import CurveBuildingBlock, CurveBuildingBlockBundle
from .config import CalibrationConfig, ObjectiveKind, objective_calculators
from .data import (
    CalibrationBlock,
    CalibrationBlockDefinition,
    CurveUnit,
    CurveUnitDefinition,
    UnitCalibrationData,
    initial_rate,
)
from .market_quote import MarketQuoteSensitivityBlockCalculator, ParameterSensitivityCalculator
from .repository import CurveBuildingResult, MulticurveBuildingRepository, RepositoryResult
from .root_finder import NewtonVectorRootFinder, RootFinderResult

__all__ = [
    "CalibrationBlock",
    "CalibrationBlockDefinition",
    "CalibrationConfig",
    "CurveBuildingBlock",
    "CurveBuildingBlockBundle",
    "CurveBuildingResult",
    "CurveUnit",
    "CurveUnitDefinition",
    "MarketQuoteSensitivityBlockCalculator",
    "MulticurveBuildingRepository",
    "NewtonVectorRootFinder",
    "ObjectiveKind",
    "ParameterSensitivityCalculator",
    "RepositoryResult",
    "RootFinderResult",
    "UnitCalibrationData",
    "initial_rate",
    "objective_calculators",
]
