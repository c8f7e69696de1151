"""
Conversion of date-based definitions into time-based instruments.

Converters are plain functions registered per definition type. Past fixings
come from ``pandas`` series keyed by index name.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional, Type

import pandas as pd
from dateutil.relativedelta import relativedelta

from ..conventions.calendars import get_calendar
from ..conventions.daycount import get_day_count_convention
from ..conventions.dates import generate_schedule, time_from
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
    Coupon,
    CouponFixed,
    CouponFloating,
    DepositIbor,
    ForwardRateAgreement,
    Swap,
    ZeroCouponInflationSwap,
)
from .index import IborIndex

logger = logging.getLogger(__name__)

FixingSeries = Mapping[str, pd.Series]

_CONVERTERS: Dict[Type, Callable] = {}


def register_converter(definition_type: Type) -> Callable:
    """Decorator registering a converter for a definition type."""

    def decorator(function: Callable) -> Callable:
        _CONVERTERS[definition_type] = function
        return function

    return decorator


def to_derivative(definition, valuation_date: date, fixing_series: Optional[FixingSeries] = None):
    """Convert a definition into its time-based instrument at ``valuation_date``.

    Args:
        definition: Any registered definition
        valuation_date: Date from which times are measured
        fixing_series: Past fixings per index name, as date-indexed series

    Raises:
        TypeError: If no converter is registered for the definition type
        ValueError: If the definition has expired or a required fixing is missing
    """
    try:
        converter = _CONVERTERS[type(definition)]
    except KeyError:
        raise TypeError(
            f"Unsupported definition type: {type(definition).__name__}"
        ) from None
    return converter(definition, valuation_date, fixing_series or {})


def _fixing(series_by_index: FixingSeries, index_name: str, fixing_date: date) -> Optional[float]:
    series = series_by_index.get(index_name)
    if series is None:
        return None
    value = series.get(pd.Timestamp(fixing_date))
    if value is None or pd.isna(value):
        return None
    return float(value)


def _check_not_expired(end_date: date, valuation_date: date, what: str) -> None:
    if end_date <= valuation_date:
        raise ValueError(f"{what} ending {end_date} has expired at {valuation_date}")


@register_converter(CashDefinition)
def _cash(definition: CashDefinition, valuation_date: date, fixings: FixingSeries) -> Cash:
    _check_not_expired(definition.end_date, valuation_date, "Deposit")
    if definition.start_date < valuation_date:
        raise ValueError(f"Deposit started on {definition.start_date}, before {valuation_date}")
    day_count = get_day_count_convention(definition.day_count)
    return Cash(
        currency=definition.currency,
        start_time=time_from(valuation_date, definition.start_date),
        end_time=time_from(valuation_date, definition.end_date),
        accrual_factor=day_count.year_fraction(definition.start_date, definition.end_date),
        rate=definition.rate,
        notional=definition.notional,
        issuer=definition.issuer,
    )


@register_converter(DepositIborDefinition)
def _deposit_ibor(definition: DepositIborDefinition, valuation_date: date, fixings: FixingSeries) -> DepositIbor:
    _check_not_expired(definition.end_date, valuation_date, "Deposit")
    if definition.start_date < valuation_date:
        raise ValueError(f"Deposit started on {definition.start_date}, before {valuation_date}")
    day_count = get_day_count_convention(definition.index.day_count)
    return DepositIbor(
        currency=definition.currency,
        index=definition.index,
        start_time=time_from(valuation_date, definition.start_date),
        end_time=time_from(valuation_date, definition.end_date),
        accrual_factor=day_count.year_fraction(definition.start_date, definition.end_date),
        rate=definition.rate,
        notional=definition.notional,
    )


@register_converter(ForwardRateAgreementDefinition)
def _fra(definition: ForwardRateAgreementDefinition, valuation_date: date,
         fixings: FixingSeries) -> ForwardRateAgreement:
    index = definition.index
    fixing_date = definition.fixing_date or get_calendar(index.calendar).add_business_days(
        definition.accrual_start_date, -index.spot_lag
    )
    if fixing_date < valuation_date:
        raise ValueError(f"FRA fixed on {fixing_date}, before {valuation_date}")
    day_count = get_day_count_convention(index.day_count)
    accrual = day_count.year_fraction(definition.accrual_start_date, definition.accrual_end_date)
    start_time = time_from(valuation_date, definition.accrual_start_date)
    end_time = time_from(valuation_date, definition.accrual_end_date)
    return ForwardRateAgreement(
        currency=definition.currency,
        index=index,
        payment_time=start_time,
        payment_accrual_factor=accrual,
        fixing_period_start_time=start_time,
        fixing_period_end_time=end_time,
        fixing_accrual_factor=accrual,
        rate=definition.rate,
        notional=definition.notional,
    )


def _fixed_leg(valuation_date: date, schedule, rate: float, notional: float, day_count_name: str) -> List[Coupon]:
    day_count = get_day_count_convention(day_count_name)
    return [
        CouponFixed(
            payment_time=time_from(valuation_date, end),
            accrual_factor=day_count.year_fraction(start, end),
            rate=rate,
            notional=notional,
        )
        for start, end in schedule
        if end > valuation_date
    ]


def _floating_leg(valuation_date: date, schedule, index, spread: float, notional: float,
                  fixings: FixingSeries) -> List[Coupon]:
    """Floating coupons; coupons already fixed become fixed coupons."""
    day_count = get_day_count_convention(index.day_count)
    calendar = get_calendar(index.calendar)
    is_ibor = isinstance(index, IborIndex)
    coupons: List[Coupon] = []
    for start, end in schedule:
        if end <= valuation_date:
            continue
        accrual = day_count.year_fraction(start, end)
        payment_time = time_from(valuation_date, end)
        if is_ibor:
            fixing_date = calendar.add_business_days(start, -index.spot_lag)
            fixing_end = calendar.add_months(start, index.tenor_months)
        else:
            fixing_date = start
            fixing_end = end

        if fixing_date <= valuation_date:
            fixing = _fixing(fixings, index.name, fixing_date)
            if fixing is not None:
                coupons.append(CouponFixed(payment_time, accrual, fixing + spread, notional))
                continue
            if fixing_date < valuation_date:
                raise ValueError(f"Missing fixing of {index.name} on {fixing_date}")
            if not is_ibor and start < valuation_date:
                raise ValueError(
                    f"Overnight coupon of {index.name} started on {start} needs compounded fixings"
                )

        coupons.append(
            CouponFloating(
                index=index,
                payment_time=payment_time,
                accrual_factor=accrual,
                fixing_period_start_time=time_from(valuation_date, max(start, valuation_date)),
                fixing_period_end_time=time_from(valuation_date, fixing_end),
                fixing_accrual_factor=day_count.year_fraction(start, fixing_end),
                spread=spread,
                notional=notional,
            )
        )
    return coupons


def _default_period(index, fallback: int) -> int:
    return index.tenor_months if isinstance(index, IborIndex) else fallback


@register_converter(SwapFixedFloatDefinition)
def _swap_fixed_float(definition: SwapFixedFloatDefinition, valuation_date: date, fixings: FixingSeries) -> Swap:
    _check_not_expired(definition.maturity_date, valuation_date, "Swap")
    floating_months = definition.floating_period_months or _default_period(
        definition.index, definition.fixed_period_months
    )
    fixed_schedule = generate_schedule(
        definition.effective_date, definition.maturity_date, definition.fixed_period_months,
        definition.calendar, definition.business_day_adjustment,
    )
    floating_schedule = generate_schedule(
        definition.effective_date, definition.maturity_date, floating_months,
        definition.calendar, definition.business_day_adjustment,
    )
    fixed = _fixed_leg(valuation_date, fixed_schedule, definition.fixed_rate,
                       definition.notional, definition.fixed_day_count)
    floating = _floating_leg(valuation_date, floating_schedule, definition.index, 0.0,
                             definition.notional, fixings)
    return Swap(currency=definition.currency, quoted_leg=tuple(fixed), other_leg=tuple(floating))


@register_converter(BasisSwapDefinition)
def _basis_swap(definition: BasisSwapDefinition, valuation_date: date, fixings: FixingSeries) -> Swap:
    _check_not_expired(definition.maturity_date, valuation_date, "Swap")
    legs = []
    for index, months, spread in (
        (definition.first_index, definition.first_period_months, 0.0),
        (definition.second_index, definition.second_period_months, definition.spread),
    ):
        schedule = generate_schedule(
            definition.effective_date, definition.maturity_date, months or _default_period(index, 3),
            definition.calendar, definition.business_day_adjustment,
        )
        legs.append(_floating_leg(valuation_date, schedule, index, spread, definition.notional, fixings))
    return Swap(currency=definition.currency, quoted_leg=tuple(legs[1]), other_leg=tuple(legs[0]))


@register_converter(BillDefinition)
def _bill(definition: BillDefinition, valuation_date: date, fixings: FixingSeries) -> Bill:
    _check_not_expired(definition.maturity_date, valuation_date, "Bill")
    settlement = max(definition.settlement_date, valuation_date)
    day_count = get_day_count_convention(definition.day_count)
    return Bill(
        currency=definition.currency,
        issuer=definition.issuer,
        settlement_time=time_from(valuation_date, settlement),
        end_time=time_from(valuation_date, definition.maturity_date),
        accrual_factor=day_count.year_fraction(settlement, definition.maturity_date),
        yield_rate=definition.yield_rate,
        notional=definition.notional,
    )


def _months_between(start: date, end: date) -> int:
    delta = relativedelta(end, start)
    return 12 * delta.years + delta.months


@register_converter(InflationZeroCouponSwapDefinition)
def _zero_coupon_inflation(definition: InflationZeroCouponSwapDefinition, valuation_date: date,
                           fixings: FixingSeries) -> ZeroCouponInflationSwap:
    _check_not_expired(definition.maturity_date, valuation_date, "Inflation swap")
    lag = relativedelta(months=definition.month_lag)
    reference_start = definition.start_date - lag
    reference_end = definition.maturity_date - lag

    index_start = definition.index_start_value
    if index_start is None:
        series = fixings.get(definition.price_index.name)
        if series is None:
            raise ValueError(f"No fixing series for {definition.price_index.name}")
        index_start = series.sort_index().asof(pd.Timestamp(reference_start))
        if pd.isna(index_start):
            raise ValueError(
                f"No fixing of {definition.price_index.name} on or before {reference_start}"
            )

    months = _months_between(definition.start_date, definition.maturity_date)
    if months <= 0:
        raise ValueError(
            f"Inflation swap from {definition.start_date} to {definition.maturity_date} is shorter than a month"
        )
    logger.debug(
        "Inflation swap %s-%s: reference end %s, start index %.4f",
        definition.start_date, definition.maturity_date, reference_end, index_start,
    )
    return ZeroCouponInflationSwap(
        currency=definition.currency,
        price_index=definition.price_index,
        payment_time=time_from(valuation_date, definition.maturity_date),
        reference_end_time=time_from(valuation_date, reference_end),
        index_start_value=float(index_start),
        fixed_rate=definition.fixed_rate,
        maturity_years=months / 12.0,
        notional=definition.notional,
    )
