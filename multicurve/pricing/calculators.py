"""
Calculator tables dispatching on instrument kind.

Each factory returns a fresh table, so callers can register extra
instrument kinds without affecting anyone else.
"""

from typing import Callable, Dict, Optional

from ..exceptions import InstrumentEvaluationError
from ..instruments.derivatives import (
    Bill,
    Cash,
    DepositIbor,
    ForwardRateAgreement,
    Swap,
    ZeroCouponInflationSwap,
)
from ..provider.multicurve import MulticurveProvider
from . import discounting as dsc


class InstrumentCalculator:
    """Function table keyed by instrument ``kind``."""

    def __init__(self, name: str, functions: Optional[Dict[str, Callable]] = None):
        self.name = name
        self._functions: Dict[str, Callable] = dict(functions or {})

    def register(self, kind: str, function: Callable) -> None:
        self._functions[kind] = function

    def supports(self, instrument) -> bool:
        return getattr(instrument, "kind", None) in self._functions

    def evaluate(self, instrument, provider: MulticurveProvider):
        kind = getattr(instrument, "kind", type(instrument).__name__)
        try:
            function = self._functions[kind]
        except KeyError:
            raise InstrumentEvaluationError(
                f"{self.name} does not support instruments of kind {kind}"
            ) from None
        return function(instrument, provider)

    def __call__(self, instrument, provider: MulticurveProvider):
        return self.evaluate(instrument, provider)

    def __repr__(self) -> str:
        return f"InstrumentCalculator({self.name!r}, kinds={sorted(self._functions)})"


def par_spread_market_quote_calculator() -> InstrumentCalculator:
    """Par spread against the quoted rate, yield or spread (zero at par)."""
    return InstrumentCalculator("ParSpreadMarketQuote", {
        Cash.kind: dsc.cash_par_spread,
        DepositIbor.kind: dsc.deposit_ibor_par_spread,
        ForwardRateAgreement.kind: dsc.fra_par_spread,
        Swap.kind: dsc.swap_par_spread,
        Bill.kind: dsc.bill_par_spread,
        ZeroCouponInflationSwap.kind: dsc.zero_coupon_inflation_par_spread,
    })


def par_spread_market_quote_curve_sensitivity_calculator() -> InstrumentCalculator:
    return InstrumentCalculator("ParSpreadMarketQuoteCurveSensitivity", {
        Cash.kind: dsc.cash_par_spread_sensitivity,
        DepositIbor.kind: dsc.deposit_ibor_par_spread_sensitivity,
        ForwardRateAgreement.kind: dsc.fra_par_spread_sensitivity,
        Swap.kind: dsc.swap_par_spread_sensitivity,
        Bill.kind: dsc.bill_par_spread_sensitivity,
        ZeroCouponInflationSwap.kind: dsc.zero_coupon_inflation_par_spread_sensitivity,
    })


def present_value_calculator(currency: Optional[str] = None) -> InstrumentCalculator:
    """Present value in the instrument currency, or converted to ``currency``."""
    functions = {
        Cash.kind: dsc.cash_present_value,
        DepositIbor.kind: dsc.deposit_ibor_present_value,
        ForwardRateAgreement.kind: dsc.fra_present_value,
        Swap.kind: dsc.swap_present_value,
        Bill.kind: dsc.bill_present_value,
        ZeroCouponInflationSwap.kind: dsc.zero_coupon_inflation_present_value,
    }
    if currency is not None:
        functions = {kind: _converted(f, currency) for kind, f in functions.items()}
    return InstrumentCalculator("PresentValue", functions)


def present_value_curve_sensitivity_calculator(currency: Optional[str] = None) -> InstrumentCalculator:
    functions = {
        Cash.kind: dsc.cash_present_value_sensitivity,
        DepositIbor.kind: dsc.deposit_ibor_present_value_sensitivity,
        ForwardRateAgreement.kind: dsc.fra_present_value_sensitivity,
        Swap.kind: dsc.swap_present_value_sensitivity,
        Bill.kind: dsc.bill_present_value_sensitivity,
        ZeroCouponInflationSwap.kind: dsc.zero_coupon_inflation_present_value_sensitivity,
    }
    if currency is not None:
        functions = {kind: _converted_sensitivity(f, currency) for kind, f in functions.items()}
    return InstrumentCalculator("PresentValueCurveSensitivity", functions)


def _converted(function: Callable, currency: str) -> Callable:
    def converted(instrument, provider: MulticurveProvider) -> float:
        return provider.fx_matrix.convert(function(instrument, provider), instrument.currency, currency)
    return converted


def _converted_sensitivity(function: Callable, currency: str) -> Callable:
    def converted(instrument, provider: MulticurveProvider):
        rate = provider.fx_matrix.fx_rate(instrument.currency, currency)
        return function(instrument, provider).multiplied_by(rate)
    return converted
