"""
Calibration units and blocks, and the square problem built from a unit.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import InstrumentEvaluationError, StructuralConfigurationError
from ..generators.base import CurveGenerator
from ..instruments.derivatives import (
    Bill,
    Cash,
    DepositIbor,
    ForwardRateAgreement,
    Swap,
    ZeroCouponInflationSwap,
)
from ..provider.bindings import CurveBindings
from ..provider.multicurve import MulticurveProvider
from .building_block import CurveBuildingBlockBundle
from .config import ObjectiveKind

logger = logging.getLogger(__name__)

DEFAULT_RATE_GUESS = 0.01


@dataclass
class CurveUnit:
    """Curves solved simultaneously from their instruments.

    ``instruments[i]`` calibrates ``curve_names[i]`` with ``generators[i]``.
    ``initial_guess`` covers all parameters of the unit in curve order; when
    omitted each generator builds its own from the instruments' rates.
    """

    curve_names: Sequence[str]
    generators: Sequence[CurveGenerator]
    instruments: Sequence[Sequence]
    initial_guess: Optional[Sequence[float]] = None
    objective: Optional[ObjectiveKind] = None


@dataclass
class CalibrationBlock:
    """Ordered units calibrated one after the other.

    A block with its own ``known_data`` is isolated from earlier blocks;
    otherwise it starts from the result of the previous block.
    """

    units: Sequence[CurveUnit]
    bindings: CurveBindings = field(default_factory=CurveBindings)
    known_data: Optional[MulticurveProvider] = None
    known_building_blocks: Optional[CurveBuildingBlockBundle] = None


@dataclass
class CurveUnitDefinition:
    """Unit described with date-based instrument definitions."""

    curve_names: Sequence[str]
    generators: Sequence[CurveGenerator]
    definitions: Sequence[Sequence]
    initial_guess: Optional[Sequence[float]] = None
    objective: Optional[ObjectiveKind] = None


@dataclass
class CalibrationBlockDefinition:
    units: Sequence[CurveUnitDefinition]
    bindings: CurveBindings = field(default_factory=CurveBindings)
    known_data: Optional[MulticurveProvider] = None
    known_building_blocks: Optional[CurveBuildingBlockBundle] = None


# ----- Initial guesses -----

_GUESS_FUNCTIONS: Dict[str, Callable] = {
    Cash.kind: lambda ins: ins.rate,
    DepositIbor.kind: lambda ins: ins.rate,
    ForwardRateAgreement.kind: lambda ins: ins.rate,
    Swap.kind: lambda ins: ins.quote if ins.quote is not None else DEFAULT_RATE_GUESS,
    Bill.kind: lambda ins: ins.yield_rate,
    ZeroCouponInflationSwap.kind: lambda ins: ins.index_start_value,
}


def initial_rate(instrument) -> float:
    """Starting value suggested by an instrument: its quoted rate or start index level."""
    kind = getattr(instrument, "kind", None)
    if kind not in _GUESS_FUNCTIONS:
        raise InstrumentEvaluationError(f"No initial guess for instrument kind {kind}")
    return float(_GUESS_FUNCTIONS[kind](instrument))


# ----- Structure checks -----

def check_block_structure(block: CalibrationBlock, known_data: MulticurveProvider) -> None:
    """Reject ill-posed blocks before any iteration.

    Raises:
        StructuralConfigurationError: On shape mismatches, duplicate or known
            curve names, conflicting bindings, forward references or
            references to curves that exist nowhere
    """
    if not block.units:
        raise StructuralConfigurationError("Calibration block has no units")

    unit_of: Dict[str, int] = {}
    for u, unit in enumerate(block.units):
        names = list(unit.curve_names)
        if not names:
            raise StructuralConfigurationError(f"Unit {u} has no curves")
        if not (len(names) == len(unit.generators) == len(unit.instruments)):
            raise StructuralConfigurationError(
                f"Unit {u}: {len(names)} curve names, {len(unit.generators)} generators and "
                f"{len(unit.instruments)} instrument lists"
            )
        for name, instruments in zip(names, unit.instruments):
            if name in unit_of:
                raise StructuralConfigurationError(f"Curve '{name}' is calibrated twice in the block")
            if name in known_data:
                raise StructuralConfigurationError(f"Curve '{name}' already exists in the known data")
            if not instruments:
                raise StructuralConfigurationError(f"Curve '{name}' has no calibration instruments")
            unit_of[name] = u

    for reference, name in block.bindings.items():
        known_name = known_data.find_curve_name(reference)
        if known_name is not None and known_name != name:
            raise StructuralConfigurationError(
                f"{reference} is bound to '{name}' but already answered by known curve '{known_name}'"
            )

    for u, unit in enumerate(block.units):
        for instruments in unit.instruments:
            for instrument in instruments:
                for reference in instrument.curve_references():
                    name = block.bindings.curve_name(reference) or known_data.find_curve_name(reference)
                    if name is None:
                        raise StructuralConfigurationError(
                            f"Unit {u}: no curve provides {reference} for {type(instrument).__name__}"
                        )
                    if name not in unit_of and name not in known_data:
                        raise StructuralConfigurationError(
                            f"Unit {u}: {reference} is bound to curve '{name}' which is neither known "
                            "nor calibrated in the block"
                        )
                    if unit_of.get(name, -1) > u:
                        raise StructuralConfigurationError(
                            f"Unit {u}: {type(instrument).__name__} needs curve '{name}' "
                            f"which is only calibrated in unit {unit_of[name]}"
                        )


# ----- Square problem of a unit -----

class UnitCalibrationData:
    """Final generators, instruments and parameter layout of one unit.

    ``build_provider`` inserts trial curves into a copy of the known data, so
    the provider the unit started from is never modified.
    """

    def __init__(
        self,
        curve_names: Sequence[str],
        generators: Sequence[CurveGenerator],
        instruments: Sequence[Sequence],
        initial_guess: np.ndarray,
        known_data: MulticurveProvider,
        bindings: CurveBindings,
        objective: Optional[ObjectiveKind] = None,
    ):
        self.curve_names = tuple(curve_names)
        self.generators = tuple(generators)
        self.instruments = tuple(tuple(ins) for ins in instruments)
        self.flat_instruments = tuple(ins for group in self.instruments for ins in group)
        self.known_data = known_data
        self.bindings = bindings
        self.objective = objective

        self.parameter_layout: Dict[str, Tuple[int, int]] = {}
        start = 0
        for name, generator in zip(self.curve_names, self.generators):
            count = generator.number_of_parameters()
            self.parameter_layout[name] = (start, count)
            start += count
        self.number_of_parameters = start

        if self.number_of_parameters != len(self.flat_instruments):
            raise StructuralConfigurationError(
                f"Unit {list(self.curve_names)} has {self.number_of_parameters} parameters "
                f"for {len(self.flat_instruments)} instruments"
            )
        self.initial_guess = np.asarray(initial_guess, dtype=float)
        if self.initial_guess.shape != (self.number_of_parameters,):
            raise StructuralConfigurationError(
                f"Initial guess of unit {list(self.curve_names)} has {self.initial_guess.size} values "
                f"for {self.number_of_parameters} parameters"
            )

    @property
    def parameter_counts(self) -> List[int]:
        return [self.parameter_layout[name][1] for name in self.curve_names]

    def generate_curves(self, parameters: np.ndarray) -> Dict[str, object]:
        curves = {}
        for name, generator in zip(self.curve_names, self.generators):
            start, count = self.parameter_layout[name]
            curves[name] = generator.generate_curve(name, parameters[start:start + count])
        return curves

    def build_provider(self, parameters: np.ndarray) -> MulticurveProvider:
        provider = self.known_data.copy()
        for name, curve in self.generate_curves(parameters).items():
            provider.add_curve(name, curve, self.bindings.references_for(name))
        return provider


def prepare_unit(unit: CurveUnit, known_data: MulticurveProvider, bindings: CurveBindings,
                 ) -> UnitCalibrationData:
    """Finalise the generators of a unit and build its initial guess."""
    generators = [
        generator.final_generator(instruments)
        for generator, instruments in zip(unit.generators, unit.instruments)
    ]
    if unit.initial_guess is not None:
        guess = np.asarray(unit.initial_guess, dtype=float)
    else:
        parts = []
        for generator, instruments in zip(generators, unit.instruments):
            rates = [initial_rate(instrument) for instrument in instruments]
            parts.append(generator.initial_guess(rates))
        guess = np.concatenate(parts)
    logger.debug("Unit %s initial guess: %s", list(unit.curve_names), guess.tolist())
    return UnitCalibrationData(
        unit.curve_names, generators, unit.instruments, guess, known_data, bindings, unit.objective
    )
