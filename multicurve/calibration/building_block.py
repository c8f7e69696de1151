"""
Jacobian bookkeeping of a calibration: how curve parameters move with market quotes.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np


class CurveBuildingBlock:
    """Quote layout and matrices of one calibrated unit.

    ``layout`` maps each curve whose market quotes drive the unit to the
    ``(start, count)`` of its quote columns; the unit's own curves come last.
    ``transition`` has one row per unit parameter and one column per quote,
    holding d parameter / d quote. ``jacobian`` is the unit's square Jacobian
    of the par spreads with respect to its own parameters.
    """

    def __init__(self, layout: Mapping[str, Tuple[int, int]], transition: np.ndarray, jacobian: np.ndarray):
        self.layout: "OrderedDict[str, Tuple[int, int]]" = OrderedDict(layout)
        self.transition = np.asarray(transition, dtype=float)
        self.jacobian = np.asarray(jacobian, dtype=float)
        if self.transition.shape[1] != self.number_of_quotes:
            raise ValueError(
                f"Transition has {self.transition.shape[1]} columns for {self.number_of_quotes} quotes"
            )

    @property
    def number_of_quotes(self) -> int:
        return sum(count for _, count in self.layout.values())

    @property
    def curve_names(self) -> List[str]:
        return list(self.layout)

    def start(self, name: str) -> int:
        return self.layout[name][0]

    def count(self, name: str) -> int:
        return self.layout[name][1]

    def __repr__(self) -> str:
        return f"CurveBuildingBlock(layout={dict(self.layout)})"


class CurveBuildingBlockBundle:
    """Curve name -> (building block, rows of the transition matrix for that curve)."""

    def __init__(self):
        self._data: "OrderedDict[str, Tuple[CurveBuildingBlock, np.ndarray]]" = OrderedDict()

    def add(self, name: str, block: CurveBuildingBlock, matrix: np.ndarray) -> None:
        self._data[name] = (block, np.asarray(matrix, dtype=float))

    def add_all(self, other: "CurveBuildingBlockBundle") -> None:
        for name, (block, matrix) in other._data.items():
            self._data[name] = (block, matrix)

    def get(self, name: str) -> Tuple[CurveBuildingBlock, np.ndarray]:
        try:
            return self._data[name]
        except KeyError:
            raise ValueError(f"No building block for curve {name}") from None

    def get_block(self, name: str) -> CurveBuildingBlock:
        return self.get(name)[0]

    def get_matrix(self, name: str) -> np.ndarray:
        return self.get(name)[1]

    @property
    def names(self) -> List[str]:
        return list(self._data)

    def copy(self) -> "CurveBuildingBlockBundle":
        other = CurveBuildingBlockBundle()
        other._data = OrderedDict(self._data)
        return other

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    # ----- Layout helpers -----

    def quote_layout(self, names: Iterable[str]) -> "OrderedDict[str, Tuple[int, int]]":
        """Union of the quote layouts of the blocks of ``names``, in bundle order."""
        wanted = set(names)
        counts: Dict[str, int] = OrderedDict()
        for name, (block, _) in self._data.items():
            if name not in wanted:
                continue
            for curve, (_, count) in block.layout.items():
                counts.setdefault(curve, count)
        return _layout_from_counts(counts)

    def embedded_matrix(self, name: str, layout: Mapping[str, Tuple[int, int]]) -> np.ndarray:
        """Rows of ``name`` with their quote columns placed into ``layout``."""
        block, matrix = self.get(name)
        total = sum(count for _, count in layout.values())
        embedded = np.zeros((matrix.shape[0], total))
        for curve, (start, count) in block.layout.items():
            target, _ = layout[curve]
            embedded[:, target:target + count] = matrix[:, start:start + count]
        return embedded


def _layout_from_counts(counts: Mapping[str, int]) -> "OrderedDict[str, Tuple[int, int]]":
    layout = OrderedDict()
    start = 0
    for name, count in counts.items():
        layout[name] = (start, count)
        start += count
    return layout


def unit_building_block(
    unit_names: Sequence[str],
    unit_counts: Sequence[int],
    unit_jacobian: np.ndarray,
    prior_names: Sequence[str],
    prior_jacobian: np.ndarray,
    bundle: CurveBuildingBlockBundle,
) -> CurveBuildingBlock:
    """Building block of a converged unit.

    With ``J`` the unit Jacobian, ``J_prior`` the derivative of the objectives
    with respect to the parameters of curves already in ``bundle`` and ``T_prior``
    their transition rows, the transition is ``[-J^-1 J_prior T_prior, J^-1]``.
    """
    prior_layout = bundle.quote_layout(prior_names)
    prior_quotes = sum(count for _, count in prior_layout.values())

    counts = OrderedDict((name, count) for name, (_, count) in prior_layout.items())
    for name, count in zip(unit_names, unit_counts):
        counts[name] = count
    layout = _layout_from_counts(counts)

    inverse = np.linalg.inv(unit_jacobian)
    transition = np.zeros((len(unit_jacobian), prior_quotes + len(unit_jacobian)))
    if prior_names and prior_quotes:
        prior_transition = np.vstack([bundle.embedded_matrix(name, prior_layout) for name in prior_names])
        transition[:, :prior_quotes] = -inverse @ prior_jacobian @ prior_transition
    transition[:, prior_quotes:] = inverse
    return CurveBuildingBlock(layout, transition, unit_jacobian)
