"""
Typed keys under which a curve is looked up by instruments.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable


class CurveRole(Enum):
    """Role a curve plays for an instrument."""

    DISCOUNTING = "DISCOUNTING"
    FORWARD_IBOR = "FORWARD_IBOR"
    FORWARD_ON = "FORWARD_ON"
    PRICE_INDEX = "PRICE_INDEX"
    ISSUER = "ISSUER"


@dataclass(frozen=True)
class CurveReference:
    """A role plus its key: a currency, an index or an issuer name."""

    role: CurveRole
    key: Hashable

    def __str__(self) -> str:
        return f"{self.role.value}[{getattr(self.key, 'name', self.key)}]"


def discounting(currency: str) -> CurveReference:
    return CurveReference(CurveRole.DISCOUNTING, currency)


def forward(index) -> CurveReference:
    """Forward reference for an Ibor or overnight index."""
    # Overnight indices carry no tenor.
    role = CurveRole.FORWARD_IBOR if hasattr(index, "tenor_months") else CurveRole.FORWARD_ON
    return CurveReference(role, index)


def price_index(index) -> CurveReference:
    return CurveReference(CurveRole.PRICE_INDEX, index)


def issuer(name: str) -> CurveReference:
    return CurveReference(CurveRole.ISSUER, name)
