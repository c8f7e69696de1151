"""
Point sensitivities of an instrument value to its curves.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]


class MulticurveSensitivity:
    """Curve name -> list of ``(time, d value / d native curve value at time)``.

    The native value is the zero rate for yield curves and the index level for
    price index curves.
    """

    def __init__(self, sensitivities: Optional[Dict[str, List[Point]]] = None):
        self._sensitivities: Dict[str, List[Point]] = {
            name: list(points) for name, points in (sensitivities or {}).items()
        }

    @classmethod
    def of_point(cls, curve_name: str, time: float, value: float) -> "MulticurveSensitivity":
        return cls({curve_name: [(time, value)]})

    @classmethod
    def of_points(cls, curve_name: str, points: Iterable[Point]) -> "MulticurveSensitivity":
        return cls({curve_name: list(points)})

    def plus(self, other: "MulticurveSensitivity") -> "MulticurveSensitivity":
        merged = {name: list(points) for name, points in self._sensitivities.items()}
        for name, points in other._sensitivities.items():
            merged.setdefault(name, []).extend(points)
        return MulticurveSensitivity(merged)

    def multiplied_by(self, factor: float) -> "MulticurveSensitivity":
        return MulticurveSensitivity({
            name: [(t, factor * s) for t, s in points]
            for name, points in self._sensitivities.items()
        })

    def cleaned(self) -> "MulticurveSensitivity":
        """Aggregate points at identical times and sort them."""
        result = {}
        for name, points in self._sensitivities.items():
            by_time: Dict[float, float] = defaultdict(float)
            for t, s in points:
                by_time[t] += s
            result[name] = sorted(by_time.items())
        return MulticurveSensitivity(result)

    def get(self, curve_name: str) -> List[Point]:
        return list(self._sensitivities.get(curve_name, []))

    @property
    def curve_names(self) -> List[str]:
        return list(self._sensitivities)

    def to_parameters(self, provider, curve_names: Sequence[str]) -> np.ndarray:
        """Sensitivity to the concatenated parameters of ``curve_names``.

        Points on curves outside ``curve_names`` are ignored.
        """
        blocks = []
        for name in curve_names:
            curve = provider.get_curve(name)
            block = np.zeros(curve.number_of_parameters)
            for t, s in self._sensitivities.get(name, []):
                if s != 0.0:
                    block += s * curve.parameter_sensitivity(t)
            blocks.append(block)
        return np.concatenate(blocks) if blocks else np.zeros(0)

    def __add__(self, other: "MulticurveSensitivity") -> "MulticurveSensitivity":
        return self.plus(other)

    def __repr__(self) -> str:
        return f"MulticurveSensitivity({self._sensitivities})"
