"""
Declaration of the references satisfied by the curves a block calibrates.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from . import references as ref
from .references import CurveReference, CurveRole


class CurveBindings:
    """Maps each new curve name to the references it will answer.

    Args:
        discounting: Curve name -> currencies discounted on it
        forward_ibor: Curve name -> Ibor indices projected on it
        forward_on: Curve name -> overnight indices projected on it
        price_index: Curve name -> price indices estimated on it
        issuer: Curve name -> issuers discounted on it
    """

    def __init__(
        self,
        discounting: Optional[Mapping[str, Sequence[str]]] = None,
        forward_ibor: Optional[Mapping[str, Sequence]] = None,
        forward_on: Optional[Mapping[str, Sequence]] = None,
        price_index: Optional[Mapping[str, Sequence]] = None,
        issuer: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        self._references: Dict[str, List[CurveReference]] = {}
        self._add(discounting, ref.discounting)
        self._add(forward_ibor, ref.forward)
        self._add(forward_on, ref.forward)
        self._add(price_index, ref.price_index)
        self._add(issuer, ref.issuer)

        self._by_reference: Dict[CurveReference, str] = {}
        for name, references in self._references.items():
            for reference in references:
                owner = self._by_reference.get(reference)
                if owner is not None and owner != name:
                    raise ValueError(
                        f"{reference} is bound to both '{owner}' and '{name}'"
                    )
                self._by_reference[reference] = name

    def _add(self, mapping, make_reference) -> None:
        for name, keys in (mapping or {}).items():
            if isinstance(keys, str) or not isinstance(keys, Iterable):
                keys = [keys]
            self._references.setdefault(name, []).extend(make_reference(k) for k in keys)

    def references_for(self, curve_name: str) -> List[CurveReference]:
        return list(self._references.get(curve_name, []))

    def curve_name(self, reference: CurveReference) -> Optional[str]:
        return self._by_reference.get(reference)

    @property
    def curve_names(self) -> List[str]:
        return list(self._references)

    def items(self):
        return self._by_reference.items()

    def roles(self, curve_name: str) -> List[CurveRole]:
        return sorted({r.role for r in self.references_for(curve_name)}, key=lambda r: r.value)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name}: [{', '.join(str(r) for r in refs)}]" for name, refs in self._references.items()
        )
        return f"CurveBindings({body})"

