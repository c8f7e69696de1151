"""
Bundle of curves used to price instruments.
"""

from typing import Dict, Iterable, List, Optional

from ..curves.base import Curve, PriceIndexCurve, YieldCurve
from .fx import FXMatrix
from .references import CurveReference, CurveRole, discounting, forward, issuer, price_index


class MulticurveProvider:
    """Curves by name plus the references (currency, index, issuer) they answer.

    Curves are only ever appended: a name, once present, keeps its curve, and
    a reference, once bound, keeps its curve name. Calibration works on
    copies, so the caller's provider is never touched.
    """

    def __init__(self, fx_matrix: Optional[FXMatrix] = None):
        self._curves: Dict[str, Curve] = {}
        self._references: Dict[CurveReference, str] = {}
        self.fx_matrix = fx_matrix if fx_matrix is not None else FXMatrix()

    # ----- Construction -----

    def add_curve(self, name: str, curve: Curve, references: Iterable[CurveReference] = ()) -> None:
        """Add a curve and bind it to ``references``.

        Raises:
            ValueError: If the name is already present or a reference is
                already bound to another curve
        """
        if name in self._curves:
            raise ValueError(f"Curve '{name}' is already present in the provider")
        references = list(references)
        for reference in references:
            owner = self._references.get(reference)
            if owner is not None and owner != name:
                raise ValueError(f"{reference} is already bound to curve '{owner}'")
        self._curves[name] = curve
        for reference in references:
            self._references[reference] = name

    def copy(self) -> "MulticurveProvider":
        other = MulticurveProvider(self.fx_matrix.copy())
        other._curves = dict(self._curves)
        other._references = dict(self._references)
        return other

    def set_all(self, other: "MulticurveProvider") -> None:
        """Merge every curve and reference of ``other`` into this provider (``other`` wins)."""
        self._curves.update(other._curves)
        self._references.update(other._references)
        self.fx_matrix.update(other.fx_matrix)

    # ----- Lookups -----

    def get_curve(self, name: str) -> Curve:
        try:
            return self._curves[name]
        except KeyError:
            raise ValueError(
                f"Unknown curve: {name}. Available: {list(self._curves)}"
            ) from None

    def find_curve_name(self, reference: CurveReference) -> Optional[str]:
        return self._references.get(reference)

    def curve_name(self, reference: CurveReference) -> str:
        name = self._references.get(reference)
        if name is None:
            raise ValueError(f"No curve bound for {reference}")
        return name

    def curve(self, reference: CurveReference) -> Curve:
        return self._curves[self.curve_name(reference)]

    def discounting_curve(self, currency: str) -> YieldCurve:
        return self.curve(discounting(currency))

    def forward_curve(self, index) -> YieldCurve:
        return self.curve(forward(index))

    def price_index_curve(self, index) -> PriceIndexCurve:
        return self.curve(price_index(index))

    def issuer_curve(self, name: str) -> YieldCurve:
        return self.curve(issuer(name))

    @property
    def curve_names(self) -> List[str]:
        return list(self._curves)

    @property
    def references(self) -> Dict[CurveReference, str]:
        return dict(self._references)

    def references_for(self, curve_name: str) -> List[CurveReference]:
        return [ref for ref, name in self._references.items() if name == curve_name]

    def currencies(self) -> List[str]:
        return [ref.key for ref in self._references if ref.role is CurveRole.DISCOUNTING]

    def __contains__(self, name: str) -> bool:
        return name in self._curves

    def __len__(self) -> int:
        return len(self._curves)

    def __repr__(self) -> str:
        return f"MulticurveProvider(curves={self.curve_names})"
