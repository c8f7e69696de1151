"""
Market conventions turning a tenor and a quote into an instrument definition.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..conventions.calendars import BusinessDayAdjustment, get_calendar
from ..conventions.dates import add_tenor, parse_tenor, tenor_to_months
from .definitions import (
    BasisSwapDefinition,
    BillDefinition,
    CashDefinition,
    DepositIborDefinition,
    ForwardRateAgreementDefinition,
    InflationZeroCouponSwapDefinition,
    SwapFixedFloatDefinition,
)
from .index import IborIndex, IndexON, IndexPrice


@dataclass(frozen=True)
class DepositONTemplate:
    """Overnight-style deposit: ``'0D'`` is overnight, ``'1D'`` tomorrow-next."""

    currency: str
    calendar: str = "WEEKEND"
    day_count: str = "ACT/360"
    issuer: Optional[str] = None

    def generate(self, reference_date: date, tenor: str, rate: float, notional: float = 1.0) -> CashDefinition:
        n, unit = parse_tenor(tenor)
        if unit != "D":
            raise ValueError(f"Overnight deposits take day tenors, got {tenor}")
        cal = get_calendar(self.calendar)
        start = cal.add_business_days(reference_date, n)
        end = cal.add_business_days(start, 1)
        return CashDefinition(self.currency, start, end, rate, notional, self.day_count, self.issuer)


@dataclass(frozen=True)
class DepositIborTemplate:
    index: IborIndex

    def generate(self, reference_date: date, tenor: str, rate: float, notional: float = 1.0) -> DepositIborDefinition:
        cal = get_calendar(self.index.calendar)
        start = cal.add_business_days(reference_date, self.index.spot_lag)
        end = add_tenor(start, tenor, cal)
        return DepositIborDefinition(self.index.currency, self.index, start, end, rate, notional)


@dataclass(frozen=True)
class FRATemplate:
    """FRA starting ``tenor`` after spot and covering one index period."""

    index: IborIndex

    def generate(self, reference_date: date, tenor: str, rate: float,
                 notional: float = 1.0) -> ForwardRateAgreementDefinition:
        cal = get_calendar(self.index.calendar)
        spot = cal.add_business_days(reference_date, self.index.spot_lag)
        start = cal.add_months(spot, tenor_to_months(tenor))
        end = cal.add_months(start, self.index.tenor_months)
        return ForwardRateAgreementDefinition(self.index.currency, self.index, start, end, rate, notional)


@dataclass(frozen=True)
class SwapTemplate:
    """Fixed/floating swap starting at spot; overnight indices give an OIS."""

    index: Union[IborIndex, IndexON]
    fixed_period_months: int = 12
    fixed_day_count: str = "ACT/360"
    spot_lag: int = 2
    calendar: str = "WEEKEND"
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING

    def generate(self, reference_date: date, tenor: str, rate: float,
                 notional: float = 1.0) -> SwapFixedFloatDefinition:
        cal = get_calendar(self.calendar)
        effective = cal.add_business_days(reference_date, self.spot_lag)
        maturity = add_tenor(effective, tenor, cal, self.business_day_adjustment)
        return SwapFixedFloatDefinition(
            currency=self.index.currency,
            index=self.index,
            effective_date=effective,
            maturity_date=maturity,
            fixed_rate=rate,
            notional=notional,
            fixed_period_months=self.fixed_period_months,
            fixed_day_count=self.fixed_day_count,
            calendar=self.calendar,
            business_day_adjustment=self.business_day_adjustment,
        )


@dataclass(frozen=True)
class BasisSwapTemplate:
    first_index: Union[IborIndex, IndexON]
    second_index: Union[IborIndex, IndexON]
    spot_lag: int = 2
    calendar: str = "WEEKEND"

    def generate(self, reference_date: date, tenor: str, spread: float,
                 notional: float = 1.0) -> BasisSwapDefinition:
        cal = get_calendar(self.calendar)
        effective = cal.add_business_days(reference_date, self.spot_lag)
        maturity = add_tenor(effective, tenor, cal)
        return BasisSwapDefinition(
            currency=self.first_index.currency,
            first_index=self.first_index,
            second_index=self.second_index,
            effective_date=effective,
            maturity_date=maturity,
            spread=spread,
            notional=notional,
            calendar=self.calendar,
        )


@dataclass(frozen=True)
class BillTemplate:
    """Bill settling ``settlement_lag`` business days after the reference date."""

    currency: str
    issuer: str
    settlement_lag: int = 1
    day_count: str = "ACT/360"
    calendar: str = "WEEKEND"

    def generate(self, reference_date: date, tenor: Union[str, date], yield_rate: float,
                 notional: float = 1.0) -> BillDefinition:
        cal = get_calendar(self.calendar)
        settlement = cal.add_business_days(reference_date, self.settlement_lag)
        maturity = tenor if isinstance(tenor, date) else add_tenor(reference_date, tenor, cal)
        return BillDefinition(self.currency, self.issuer, settlement, maturity, yield_rate, notional, self.day_count)


@dataclass(frozen=True)
class InflationSwapTemplate:
    currency: str
    price_index: IndexPrice
    month_lag: int = 3
    spot_lag: int = 2
    calendar: str = "WEEKEND"

    def generate(self, reference_date: date, tenor: str, rate: float,
                 notional: float = 1.0) -> InflationZeroCouponSwapDefinition:
        cal = get_calendar(self.calendar)
        start = cal.add_business_days(reference_date, self.spot_lag)
        maturity = add_tenor(start, tenor, cal)
        return InflationZeroCouponSwapDefinition(
            currency=self.currency,
            price_index=self.price_index,
            start_date=start,
            maturity_date=maturity,
            fixed_rate=rate,
            notional=notional,
            month_lag=self.month_lag,
        )


Template = Union[
    DepositONTemplate, DepositIborTemplate, FRATemplate, SwapTemplate,
    BasisSwapTemplate, BillTemplate, InflationSwapTemplate,
]


@dataclass(frozen=True)
class Quote:
    """Market quote for an instrument generated by ``template``."""

    tenor: Union[str, date]
    rate: float
    template: Template


def create_definition_from_quote(reference_date: date, quote: Quote, notional: float = 1.0):
    """Create the instrument definition for a market quote."""
    generate = getattr(quote.template, "generate", None)
    if generate is None:
        raise TypeError(f"Unsupported template: {type(quote.template).__name__}")
    return generate(reference_date, quote.tenor, quote.rate, notional)
