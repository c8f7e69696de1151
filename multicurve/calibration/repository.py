"""
Orchestration of multi-curve calibration over blocks and units.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import NumericalSingularity, StructuralConfigurationError
from ..instruments.converter import FixingSeries, to_derivative
from ..pricing.calculators import InstrumentCalculator
from ..provider.multicurve import MulticurveProvider
from .building_block import CurveBuildingBlockBundle, unit_building_block
from .config import CalibrationConfig, ObjectiveKind, objective_calculators
from .data import (
    CalibrationBlock,
    CalibrationBlockDefinition,
    CurveUnit,
    UnitCalibrationData,
    check_block_structure,
    prepare_unit,
)
from .functions import UnitJacobianFunction, UnitObjectiveFunction, objective_values, parameter_jacobian
from .root_finder import NewtonVectorRootFinder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveBuildingResult:
    """Outcome of one block.

    Attributes:
        provider: Known data plus every curve calibrated in the block
        building_blocks: Building blocks of the calibrated curves (and of any
            known building blocks the block started from)
        iterations: Newton steps used by each unit
    """

    provider: MulticurveProvider
    building_blocks: CurveBuildingBlockBundle
    iterations: Tuple[int, ...]


@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of a sequence of blocks, merged in block order (later blocks win)."""

    provider: MulticurveProvider
    building_blocks: CurveBuildingBlockBundle
    blocks: Tuple[CurveBuildingResult, ...]


class MulticurveBuildingRepository:
    """Calibrates blocks of curve units with Newton's method.

    Args:
        config: Tolerances, step limits and block orchestration settings
        objective: Default objective of units that do not choose one
        calculator: Objective calculator overriding ``objective``
        sensitivity_calculator: Matching curve sensitivity calculator

    Building blocks hold d parameter / d market quote. They are computed from
    the par spread sensitivities at the solution, whose derivative with
    respect to the quote is -1, whatever objective the unit was solved with.
    A custom calculator pair is taken to be a par spread objective unless
    ``objective`` says PRESENT_VALUE.
    """

    def __init__(
        self,
        config: Optional[CalibrationConfig] = None,
        objective: ObjectiveKind = ObjectiveKind.PAR_SPREAD,
        calculator: Optional[InstrumentCalculator] = None,
        sensitivity_calculator: Optional[InstrumentCalculator] = None,
    ):
        if (calculator is None) != (sensitivity_calculator is None):
            raise ValueError("calculator and sensitivity_calculator must be given together")
        self.config = config or CalibrationConfig()
        self.objective = objective
        if calculator is None:
            calculator, sensitivity_calculator = objective_calculators(objective)
        self.calculator = calculator
        self.sensitivity_calculator = sensitivity_calculator
        self._root_finder = NewtonVectorRootFinder.from_config(self.config)

    # ----- Public API -----

    def make_curves_from_derivatives(
        self,
        block: CalibrationBlock,
        known_data: Optional[MulticurveProvider] = None,
        known_building_blocks: Optional[CurveBuildingBlockBundle] = None,
    ) -> CurveBuildingResult:
        """Calibrate the units of one block in order.

        The block's own known data and building blocks, when present, take
        precedence over the arguments. Neither is modified.
        """
        start = block.known_data if block.known_data is not None else known_data
        provider = start.copy() if start is not None else MulticurveProvider()
        known_blocks = (
            block.known_building_blocks if block.known_building_blocks is not None else known_building_blocks
        )
        bundle = known_blocks.copy() if known_blocks is not None else CurveBuildingBlockBundle()

        check_block_structure(block, provider)
        units = [prepare_unit(unit, provider, block.bindings) for unit in block.units]

        iterations: List[int] = []
        for number, data in enumerate(units):
            data.known_data = provider
            provider, steps = self._calibrate_unit(number, data, bundle)
            iterations.append(steps)
        return CurveBuildingResult(provider, bundle, tuple(iterations))

    def make_curves(
        self,
        blocks: Sequence[CalibrationBlock],
        known_data: Optional[MulticurveProvider] = None,
    ) -> RepositoryResult:
        """Calibrate blocks in order.

        A block without its own known data starts from the result of the
        previous block (or from ``known_data`` for the first one). With
        ``parallel_blocks`` every block must carry its own known data and the
        blocks are calibrated concurrently on snapshots.
        """
        if not blocks:
            raise StructuralConfigurationError("No calibration blocks")
        if self.config.parallel_blocks and len(blocks) > 1:
            results = self._make_curves_parallel(blocks)
        else:
            results = []
            current, current_blocks = known_data, None
            for number, block in enumerate(blocks):
                if block.known_data is None:
                    result = self.make_curves_from_derivatives(block, current, current_blocks)
                else:
                    result = self.make_curves_from_derivatives(block)
                logger.info("Block %d calibrated: %s", number, result.provider.curve_names)
                results.append(result)
                current, current_blocks = result.provider, result.building_blocks

        provider = known_data.copy() if known_data is not None else MulticurveProvider()
        bundle = CurveBuildingBlockBundle()
        for result in results:
            provider.set_all(result.provider)
            bundle.add_all(result.building_blocks)
        return RepositoryResult(provider, bundle, tuple(results))

    def make_curves_from_definitions(
        self,
        blocks: Sequence[CalibrationBlockDefinition],
        valuation_date: date,
        fixing_series: Optional[FixingSeries] = None,
        known_data: Optional[MulticurveProvider] = None,
    ) -> RepositoryResult:
        """Convert date-based definitions at ``valuation_date`` and calibrate."""
        converted = [self._convert_block(block, valuation_date, fixing_series) for block in blocks]
        return self.make_curves(converted, known_data)

    # ----- Internals -----

    def _calculators_for(self, data: UnitCalibrationData) -> Tuple[InstrumentCalculator, InstrumentCalculator]:
        if data.objective is None:
            return self.calculator, self.sensitivity_calculator
        return objective_calculators(data.objective)

    def _quote_sensitivity_calculator(self, data: UnitCalibrationData) -> InstrumentCalculator:
        objective = data.objective if data.objective is not None else self.objective
        if objective is ObjectiveKind.PRESENT_VALUE:
            return objective_calculators(ObjectiveKind.PAR_SPREAD)[1]
        return self._calculators_for(data)[1]

    def _calibrate_unit(self, number: int, data: UnitCalibrationData,
                        bundle: CurveBuildingBlockBundle) -> Tuple[MulticurveProvider, int]:
        calculator, sensitivity_calculator = self._calculators_for(data)
        label = f"unit {number} {list(data.curve_names)}"
        result = self._root_finder.get_root(
            UnitObjectiveFunction(data, calculator),
            UnitJacobianFunction(data, sensitivity_calculator),
            data.initial_guess,
            name=label,
        )
        provider = data.build_provider(result.root)
        self._add_building_block(data, provider, bundle, self._quote_sensitivity_calculator(data), label)

        residual = objective_values(data.flat_instruments, provider, calculator)
        logger.info(
            "Calibrated %s in %d iterations (max residual %.2e)",
            label, result.iterations, float(np.max(np.abs(residual))),
        )
        if self.config.verbose:
            for name in data.curve_names:
                curve = provider.get_curve(name)
                logger.info("  %s nodes=%s values=%s", name, curve.x_data.tolist(), curve.y_data.tolist())
        return provider, result.iterations

    def _add_building_block(self, data: UnitCalibrationData, provider: MulticurveProvider,
                            bundle: CurveBuildingBlockBundle,
                            sensitivity_calculator: InstrumentCalculator, label: str) -> None:
        instruments = data.flat_instruments
        unit_jacobian = parameter_jacobian(instruments, provider, sensitivity_calculator, data.curve_names)
        prior_names = [
            name for name in bundle.names if name in provider and name not in data.curve_names
        ]
        prior_jacobian = parameter_jacobian(instruments, provider, sensitivity_calculator, prior_names)
        try:
            block = unit_building_block(
                data.curve_names, data.parameter_counts, unit_jacobian, prior_names, prior_jacobian, bundle
            )
        except np.linalg.LinAlgError as exc:
            raise NumericalSingularity(
                f"{label}: Jacobian at the solution cannot be inverted"
            ) from exc
        for name in data.curve_names:
            start, count = data.parameter_layout[name]
            bundle.add(name, block, block.transition[start:start + count])

    def _make_curves_parallel(self, blocks: Sequence[CalibrationBlock]) -> List[CurveBuildingResult]:
        chained = [n for n, block in enumerate(blocks) if block.known_data is None]
        if chained:
            raise StructuralConfigurationError(
                f"Parallel calibration needs every block to carry its own known data; blocks {chained} do not"
            )
        results: List[Optional[CurveBuildingResult]] = [None] * len(blocks)
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(self.make_curves_from_derivatives, block): number
                for number, block in enumerate(blocks)
            }
            for future in as_completed(futures):
                number = futures[future]
                results[number] = future.result()
                logger.info("Block %d calibrated: %s", number, results[number].provider.curve_names)
        return results

    @staticmethod
    def _convert_block(block: CalibrationBlockDefinition, valuation_date: date,
                       fixing_series: Optional[FixingSeries]) -> CalibrationBlock:
        units = [
            CurveUnit(
                curve_names=unit.curve_names,
                generators=unit.generators,
                instruments=[
                    [to_derivative(definition, valuation_date, fixing_series) for definition in definitions]
                    for definitions in unit.definitions
                ],
                initial_guess=unit.initial_guess,
                objective=unit.objective,
            )
            for unit in block.units
        ]
        return CalibrationBlock(units, block.bindings, block.known_data, block.known_building_blocks)
