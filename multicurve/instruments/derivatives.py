"""
Time-based instruments used by calibration.

All times are in years from the valuation date. Each instrument carries a
``kind`` tag used by calculator tables and declares the curve references it
needs; it never names curves itself.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from ..provider.references import CurveReference, discounting, forward, issuer, price_index
from .index import IborIndex, IndexON, IndexPrice


@dataclass(frozen=True)
class Cash:
    """Deposit paying ``notional * (1 + rate * accrual)`` at end.

    With an ``issuer`` the deposit is a counterpart deposit discounted on the
    issuer curve.
    """

    kind: ClassVar[str] = "CASH"

    currency: str
    start_time: float
    end_time: float
    accrual_factor: float
    rate: float
    notional: float = 1.0
    issuer: Optional[str] = None

    def curve_references(self) -> Tuple[CurveReference, ...]:
        if self.issuer is not None:
            return (issuer(self.issuer),)
        return (discounting(self.currency),)

    @property
    def last_time(self) -> float:
        return self.end_time


@dataclass(frozen=True)
class DepositIbor:
    """Deposit on an Ibor index, quoted as the index fixing."""

    kind: ClassVar[str] = "DEPOSIT_IBOR"

    currency: str
    index: IborIndex
    start_time: float
    end_time: float
    accrual_factor: float
    rate: float
    notional: float = 1.0

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return (discounting(self.currency), forward(self.index))

    @property
    def last_time(self) -> float:
        return self.end_time


@dataclass(frozen=True)
class ForwardRateAgreement:
    """FRA settled at the start of the fixing period."""

    kind: ClassVar[str] = "FRA"

    currency: str
    index: IborIndex
    payment_time: float
    payment_accrual_factor: float
    fixing_period_start_time: float
    fixing_period_end_time: float
    fixing_accrual_factor: float
    rate: float
    notional: float = 1.0

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return (discounting(self.currency), forward(self.index))

    @property
    def last_time(self) -> float:
        return self.fixing_period_end_time


@dataclass(frozen=True)
class CouponFixed:
    payment_time: float
    accrual_factor: float
    rate: float
    notional: float = 1.0

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return ()

    @property
    def last_time(self) -> float:
        return self.payment_time


@dataclass(frozen=True)
class CouponFloating:
    """Coupon paying the index forward over its fixing period plus a spread.

    For overnight indices the fixing period is the accrual period and the
    forward is the compounded rate over it.
    """

    index: Union[IborIndex, IndexON]
    payment_time: float
    accrual_factor: float
    fixing_period_start_time: float
    fixing_period_end_time: float
    fixing_accrual_factor: float
    spread: float = 0.0
    notional: float = 1.0

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return (forward(self.index),)

    @property
    def last_time(self) -> float:
        return max(self.payment_time, self.fixing_period_end_time)


Coupon = Union[CouponFixed, CouponFloating]


@dataclass(frozen=True)
class Swap:
    """Two-leg swap; the quoted leg carries the market quote (fixed rate or spread).

    Covers fixed/overnight (OIS), fixed/Ibor and Ibor/Ibor basis swaps.
    """

    kind: ClassVar[str] = "SWAP"

    currency: str
    quoted_leg: Tuple[Coupon, ...]
    other_leg: Tuple[Coupon, ...]

    def __post_init__(self):
        if not self.quoted_leg or not self.other_leg:
            raise ValueError("Swap legs must have at least one coupon")

    def curve_references(self) -> Tuple[CurveReference, ...]:
        references = [discounting(self.currency)]
        for coupon in self.quoted_leg + self.other_leg:
            for reference in coupon.curve_references():
                if reference not in references:
                    references.append(reference)
        return tuple(references)

    @property
    def last_time(self) -> float:
        return max(c.last_time for c in self.quoted_leg + self.other_leg)

    @property
    def quote(self) -> Optional[float]:
        """Fixed rate of the quoted leg, when it is a fixed leg."""
        first = self.quoted_leg[0]
        return first.rate if isinstance(first, CouponFixed) else None


@dataclass(frozen=True)
class Bill:
    """Discount bill quoted as a money-market yield.

    Redemption is discounted on the issuer curve, the settlement amount on the
    currency discounting curve.
    """

    kind: ClassVar[str] = "BILL"

    currency: str
    issuer: str
    settlement_time: float
    end_time: float
    accrual_factor: float
    yield_rate: float
    notional: float = 1.0

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return (discounting(self.currency), issuer(self.issuer))

    @property
    def last_time(self) -> float:
        return self.end_time


@dataclass(frozen=True)
class ZeroCouponInflationSwap:
    """Zero-coupon inflation swap exchanging index growth against ``(1 + K)^T``."""

    kind: ClassVar[str] = "ZERO_COUPON_INFLATION_SWAP"

    currency: str
    price_index: IndexPrice
    payment_time: float
    reference_end_time: float
    index_start_value: float
    fixed_rate: float
    maturity_years: float
    notional: float = 1.0

    def __post_init__(self):
        if self.index_start_value <= 0:
            raise ValueError(f"Index start value must be positive, got {self.index_start_value}")
        if self.maturity_years <= 0:
            raise ValueError(f"Maturity must be positive, got {self.maturity_years}")

    def curve_references(self) -> Tuple[CurveReference, ...]:
        return (discounting(self.currency), price_index(self.price_index))

    @property
    def last_time(self) -> float:
        return self.payment_time

    @property
    def last_fixing_start_time(self) -> float:
        return self.reference_end_time


Instrument = Union[Cash, DepositIbor, ForwardRateAgreement, Swap, Bill, ZeroCouponInflationSwap]
