"""
Exchange rates between the currencies of a provider.
"""

from typing import Dict, List, Optional


class FXMatrix:
    """Spot exchange rates expressed against a single base currency."""

    def __init__(self, base_currency: Optional[str] = None):
        self.base_currency = base_currency
        # units of base currency per unit of currency
        self._to_base: Dict[str, float] = {}
        if base_currency is not None:
            self._to_base[base_currency] = 1.0

    def add_currency(self, currency: str, reference_currency: str, fx_rate: float) -> None:
        """Add ``currency`` with ``1 currency = fx_rate reference_currency``."""
        if fx_rate <= 0:
            raise ValueError(f"FX rate must be positive, got {fx_rate}")
        if self.base_currency is None:
            self.base_currency = reference_currency
            self._to_base[reference_currency] = 1.0
        if reference_currency not in self._to_base:
            raise ValueError(f"Reference currency {reference_currency} is not in the matrix")
        self._to_base[currency] = fx_rate * self._to_base[reference_currency]

    def fx_rate(self, currency: str, other: str) -> float:
        """Number of units of ``other`` for one unit of ``currency``."""
        if currency == other:
            return 1.0
        for ccy in (currency, other):
            if ccy not in self._to_base:
                raise ValueError(f"Currency {ccy} is not in the FX matrix")
        return self._to_base[currency] / self._to_base[other]

    def convert(self, amount: float, currency: str, target: str) -> float:
        return amount * self.fx_rate(currency, target)

    @property
    def currencies(self) -> List[str]:
        return list(self._to_base)

    def copy(self) -> "FXMatrix":
        other = FXMatrix(self.base_currency)
        other._to_base = dict(self._to_base)
        return other

    def update(self, other: "FXMatrix") -> None:
        """Take every currency of ``other`` that this matrix can express."""
        if other.base_currency is None:
            return
        if self.base_currency is None:
            self.base_currency = other.base_currency
            self._to_base = dict(other._to_base)
            return
        for ccy in other.currencies:
            if ccy in self._to_base:
                continue
            if other.base_currency in self._to_base:
                self._to_base[ccy] = other._to_base[ccy] * self._to_base[other.base_currency]
