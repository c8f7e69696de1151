"""Curve bundles and the references instruments use to find their curves."""

from .bindings import CurveBindings
from .fx import FXMatrix
from .multicurve import MulticurveProvider
from .references import CurveReference, CurveRole, discounting, forward, issuer, price_index

__all__ = [
    "CurveBindings",
    "CurveReference",
    "CurveRole",
    "FXMatrix",
    "MulticurveProvider",
    "discounting",
    "forward",
    "issuer",
    "price_index",
]
