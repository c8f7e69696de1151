"""
Date-based instrument definitions, converted to time-based instruments by
:func:`multicurve.instruments.converter.to_derivative`.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..conventions.calendars import BusinessDayAdjustment
from .index import IborIndex, IndexON, IndexPrice


@dataclass(frozen=True)
class CashDefinition:
    currency: str
    start_date: date
    end_date: date
    rate: float
    notional: float = 1.0
    day_count: str = "ACT/360"
    issuer: Optional[str] = None


@dataclass(frozen=True)
class DepositIborDefinition:
    currency: str
    index: IborIndex
    start_date: date
    end_date: date
    rate: float
    notional: float = 1.0


@dataclass(frozen=True)
class ForwardRateAgreementDefinition:
    currency: str
    index: IborIndex
    accrual_start_date: date
    accrual_end_date: date
    rate: float
    notional: float = 1.0
    fixing_date: Optional[date] = None


@dataclass(frozen=True)
class SwapFixedFloatDefinition:
    """Fixed leg against an Ibor or overnight leg, quoted by the fixed rate.

    ``floating_period_months`` defaults to the Ibor tenor, or to the fixed
    period for overnight indices (compounded per period).
    """

    currency: str
    index: Union[IborIndex, IndexON]
    effective_date: date
    maturity_date: date
    fixed_rate: float
    notional: float = 1.0
    fixed_period_months: int = 12
    floating_period_months: Optional[int] = None
    fixed_day_count: str = "ACT/360"
    calendar: str = "WEEKEND"
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING


@dataclass(frozen=True)
class BasisSwapDefinition:
    """Two floating legs; the spread is paid on the second leg and is the quote."""

    currency: str
    first_index: Union[IborIndex, IndexON]
    second_index: Union[IborIndex, IndexON]
    effective_date: date
    maturity_date: date
    spread: float
    notional: float = 1.0
    first_period_months: Optional[int] = None
    second_period_months: Optional[int] = None
    calendar: str = "WEEKEND"
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING


@dataclass(frozen=True)
class BillDefinition:
    currency: str
    issuer: str
    settlement_date: date
    maturity_date: date
    yield_rate: float
    notional: float = 1.0
    day_count: str = "ACT/360"


@dataclass(frozen=True)
class InflationZeroCouponSwapDefinition:
    """Zero-coupon inflation swap with a monthly lag on the reference index.

    ``index_start_value`` overrides the lookup in the fixing series.
    """

    currency: str
    price_index: IndexPrice
    start_date: date
    maturity_date: date
    fixed_rate: float
    notional: float = 1.0
    month_lag: int = 3
    index_start_value: Optional[float] = None
