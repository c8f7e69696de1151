"""Instrument indices, definitions, time-based instruments and conversion."""

from .converter import register_converter, to_derivative
from .definitions import (
    BasisSwapDefinition,
    BillDefinition,
    CashDefinition,
    DepositIborDefinition,
    ForwardRateAgreementDefinition,
    InflationZeroCouponSwapDefinition,
    SwapFixedFloatDefinition,
)
from .derivatives import (
    Bill,
    Cash,
    CouponFixed,
    CouponFloating,
    DepositIbor,
    ForwardRateAgreement,
    Swap,
    ZeroCouponInflationSwap,
)
from .index import IborIndex, IndexON, IndexPrice
from .templates import (
    BasisSwapTemplate,
    BillTemplate,
    DepositIborTemplate,
    DepositONTemplate,
    FRATemplate,
    InflationSwapTemplate,
    Quote,
    SwapTemplate,
    create_definition_from_quote,
)

__all__ = [
    "BasisSwapDefinition",
    "BasisSwapTemplate",
    "Bill",
    "BillDefinition",
    "BillTemplate",
    "Cash",
    "CashDefinition",
    "CouponFixed",
    "CouponFloating",
    "DepositIbor",
    "DepositIborDefinition",
    "DepositIborTemplate",
    "DepositONTemplate",
    "FRATemplate",
    "ForwardRateAgreement",
    "ForwardRateAgreementDefinition",
    "IborIndex",
    "IndexON",
    "IndexPrice",
    "InflationSwapTemplate",
    "InflationZeroCouponSwapDefinition",
    "Quote",
    "Swap",
    "SwapFixedFloatDefinition",
    "SwapTemplate",
    "ZeroCouponInflationSwap",
    "create_definition_from_quote",
    "register_converter",
    "to_derivative",
]
