"""
Discounting formulas for the calibration instruments.

For each instrument kind: the par spread against its market quote, the
present value, and their curve sensitivities. Yield sensitivities are taken
with respect to the continuously compounded zero rate, so a discount factor
``P(t) = exp(-r(t) t)`` contributes ``-t P(t)``.
"""

from typing import Tuple

from ..instruments.derivatives import (
    Bill,
    Cash,
    CouponFixed,
    CouponFloating,
    DepositIbor,
    ForwardRateAgreement,
    Swap,
    ZeroCouponInflationSwap,
)
from ..provider.multicurve import MulticurveProvider
from ..provider.references import discounting, forward, issuer, price_index
from .sensitivity import MulticurveSensitivity


def _forward_with_sensitivity(provider: MulticurveProvider, index, start: float, end: float,
                              accrual: float) -> Tuple[float, MulticurveSensitivity]:
    name = provider.curve_name(forward(index))
    curve = provider.get_curve(name)
    ratio = curve.df(start) / curve.df(end)
    rate = (ratio - 1.0) / accrual
    sensitivity = MulticurveSensitivity.of_points(
        name, [(start, -start * ratio / accrual), (end, end * ratio / accrual)]
    )
    return rate, sensitivity


def _discount_with_sensitivity(provider: MulticurveProvider, reference, t: float,
                               ) -> Tuple[float, MulticurveSensitivity]:
    name = provider.curve_name(reference)
    df = provider.get_curve(name).df(t)
    return df, MulticurveSensitivity.of_point(name, t, -t * df)


# ----- Cash -----

def _cash_reference(cash: Cash):
    return issuer(cash.issuer) if cash.issuer is not None else discounting(cash.currency)


def cash_par_spread(cash: Cash, provider: MulticurveProvider) -> float:
    curve = provider.curve(_cash_reference(cash))
    return (curve.df(cash.start_time) / curve.df(cash.end_time) - 1.0) / cash.accrual_factor - cash.rate


def cash_par_spread_sensitivity(cash: Cash, provider: MulticurveProvider) -> MulticurveSensitivity:
    name = provider.curve_name(_cash_reference(cash))
    curve = provider.get_curve(name)
    ratio = curve.df(cash.start_time) / curve.df(cash.end_time)
    return MulticurveSensitivity.of_points(name, [
        (cash.start_time, -cash.start_time * ratio / cash.accrual_factor),
        (cash.end_time, cash.end_time * ratio / cash.accrual_factor),
    ])


def cash_present_value(cash: Cash, provider: MulticurveProvider) -> float:
    curve = provider.curve(_cash_reference(cash))
    final = 1.0 + cash.rate * cash.accrual_factor
    return cash.notional * (final * curve.df(cash.end_time) - curve.df(cash.start_time))


def cash_present_value_sensitivity(cash: Cash, provider: MulticurveProvider) -> MulticurveSensitivity:
    name = provider.curve_name(_cash_reference(cash))
    curve = provider.get_curve(name)
    final = 1.0 + cash.rate * cash.accrual_factor
    return MulticurveSensitivity.of_points(name, [
        (cash.start_time, cash.notional * cash.start_time * curve.df(cash.start_time)),
        (cash.end_time, -cash.notional * final * cash.end_time * curve.df(cash.end_time)),
    ])


# ----- Ibor deposit -----

def deposit_ibor_par_spread(deposit: DepositIbor, provider: MulticurveProvider) -> float:
    rate, _ = _forward_with_sensitivity(provider, deposit.index, deposit.start_time,
                                        deposit.end_time, deposit.accrual_factor)
    return rate - deposit.rate


def deposit_ibor_par_spread_sensitivity(deposit: DepositIbor, provider: MulticurveProvider) -> MulticurveSensitivity:
    _, sensitivity = _forward_with_sensitivity(provider, deposit.index, deposit.start_time,
                                               deposit.end_time, deposit.accrual_factor)
    return sensitivity


def deposit_ibor_present_value(deposit: DepositIbor, provider: MulticurveProvider) -> float:
    rate, _ = _forward_with_sensitivity(provider, deposit.index, deposit.start_time,
                                        deposit.end_time, deposit.accrual_factor)
    df = provider.discounting_curve(deposit.currency).df(deposit.end_time)
    return deposit.notional * deposit.accrual_factor * (rate - deposit.rate) * df


def deposit_ibor_present_value_sensitivity(deposit: DepositIbor,
                                           provider: MulticurveProvider) -> MulticurveSensitivity:
    rate, forward_sensitivity = _forward_with_sensitivity(
        provider, deposit.index, deposit.start_time, deposit.end_time, deposit.accrual_factor
    )
    df, df_sensitivity = _discount_with_sensitivity(provider, discounting(deposit.currency), deposit.end_time)
    amount = deposit.notional * deposit.accrual_factor
    return forward_sensitivity.multiplied_by(amount * df).plus(
        df_sensitivity.multiplied_by(amount * (rate - deposit.rate))
    )


# ----- FRA -----

def _fra_forward(fra: ForwardRateAgreement, provider: MulticurveProvider):
    return _forward_with_sensitivity(provider, fra.index, fra.fixing_period_start_time,
                                     fra.fixing_period_end_time, fra.fixing_accrual_factor)


def fra_par_spread(fra: ForwardRateAgreement, provider: MulticurveProvider) -> float:
    rate, _ = _fra_forward(fra, provider)
    return rate - fra.rate


def fra_par_spread_sensitivity(fra: ForwardRateAgreement, provider: MulticurveProvider) -> MulticurveSensitivity:
    _, sensitivity = _fra_forward(fra, provider)
    return sensitivity


def fra_present_value(fra: ForwardRateAgreement, provider: MulticurveProvider) -> float:
    rate, _ = _fra_forward(fra, provider)
    df = provider.discounting_curve(fra.currency).df(fra.payment_time)
    delta = fra.payment_accrual_factor
    return fra.notional * delta * (rate - fra.rate) * df / (1.0 + delta * rate)


def fra_present_value_sensitivity(fra: ForwardRateAgreement, provider: MulticurveProvider) -> MulticurveSensitivity:
    rate, forward_sensitivity = _fra_forward(fra, provider)
    df, df_sensitivity = _discount_with_sensitivity(provider, discounting(fra.currency), fra.payment_time)
    delta = fra.payment_accrual_factor
    settlement = 1.0 + delta * rate
    pv_over_df = fra.notional * delta * (rate - fra.rate) / settlement
    d_pv_d_forward = fra.notional * delta * df * (1.0 + delta * fra.rate) / settlement ** 2
    return forward_sensitivity.multiplied_by(d_pv_d_forward).plus(df_sensitivity.multiplied_by(pv_over_df))


# ----- Swap -----

def _coupon_value(coupon, currency: str, provider: MulticurveProvider,
                  ) -> Tuple[float, MulticurveSensitivity]:
    """Present value of a coupon and its curve sensitivity."""
    df, df_sensitivity = _discount_with_sensitivity(provider, discounting(currency), coupon.payment_time)
    if isinstance(coupon, CouponFixed):
        amount = coupon.notional * coupon.accrual_factor * coupon.rate
        return amount * df, df_sensitivity.multiplied_by(amount)
    if isinstance(coupon, CouponFloating):
        rate, forward_sensitivity = _forward_with_sensitivity(
            provider, coupon.index, coupon.fixing_period_start_time,
            coupon.fixing_period_end_time, coupon.fixing_accrual_factor,
        )
        scale = coupon.notional * coupon.accrual_factor
        amount = scale * (rate + coupon.spread)
        sensitivity = forward_sensitivity.multiplied_by(scale * df).plus(df_sensitivity.multiplied_by(amount))
        return amount * df, sensitivity
    raise TypeError(f"Unsupported coupon: {type(coupon).__name__}")


def _leg_value(leg, currency: str, provider: MulticurveProvider) -> Tuple[float, MulticurveSensitivity]:
    value, sensitivity = 0.0, MulticurveSensitivity()
    for coupon in leg:
        pv, pv_sensitivity = _coupon_value(coupon, currency, provider)
        value += pv
        sensitivity = sensitivity.plus(pv_sensitivity)
    return value, sensitivity


def _annuity(leg, currency: str, provider: MulticurveProvider) -> Tuple[float, MulticurveSensitivity]:
    """Present value of one unit of rate (or spread) paid on every coupon of the leg."""
    value, sensitivity = 0.0, MulticurveSensitivity()
    for coupon in leg:
        df, df_sensitivity = _discount_with_sensitivity(provider, discounting(currency), coupon.payment_time)
        scale = coupon.notional * coupon.accrual_factor
        value += scale * df
        sensitivity = sensitivity.plus(df_sensitivity.multiplied_by(scale))
    return value, sensitivity


def swap_par_spread(swap: Swap, provider: MulticurveProvider) -> float:
    """Amount to add to the quoted leg's rate or spread for the swap to be at par."""
    quoted, _ = _leg_value(swap.quoted_leg, swap.currency, provider)
    other, _ = _leg_value(swap.other_leg, swap.currency, provider)
    annuity, _ = _annuity(swap.quoted_leg, swap.currency, provider)
    return (other - quoted) / annuity


def swap_par_spread_sensitivity(swap: Swap, provider: MulticurveProvider) -> MulticurveSensitivity:
    quoted, quoted_sensitivity = _leg_value(swap.quoted_leg, swap.currency, provider)
    other, other_sensitivity = _leg_value(swap.other_leg, swap.currency, provider)
    annuity, annuity_sensitivity = _annuity(swap.quoted_leg, swap.currency, provider)
    numerator = other - quoted
    return (
        other_sensitivity.plus(quoted_sensitivity.multiplied_by(-1.0)).multiplied_by(1.0 / annuity)
        .plus(annuity_sensitivity.multiplied_by(-numerator / annuity ** 2))
    )


def swap_present_value(swap: Swap, provider: MulticurveProvider) -> float:
    """Value of receiving the other leg and paying the quoted leg."""
    quoted, _ = _leg_value(swap.quoted_leg, swap.currency, provider)
    other, _ = _leg_value(swap.other_leg, swap.currency, provider)
    return other - quoted


def swap_present_value_sensitivity(swap: Swap, provider: MulticurveProvider) -> MulticurveSensitivity:
    _, quoted_sensitivity = _leg_value(swap.quoted_leg, swap.currency, provider)
    _, other_sensitivity = _leg_value(swap.other_leg, swap.currency, provider)
    return other_sensitivity.plus(quoted_sensitivity.multiplied_by(-1.0))


# ----- Bill -----

def _bill_ratio(bill: Bill, provider: MulticurveProvider):
    settlement_name = provider.curve_name(discounting(bill.currency))
    issuer_name = provider.curve_name(issuer(bill.issuer))
    df_settlement = provider.get_curve(settlement_name).df(bill.settlement_time)
    df_end = provider.get_curve(issuer_name).df(bill.end_time)
    return settlement_name, issuer_name, df_settlement, df_end


def bill_par_spread(bill: Bill, provider: MulticurveProvider) -> float:
    _, _, df_settlement, df_end = _bill_ratio(bill, provider)
    return (df_settlement / df_end - 1.0) / bill.accrual_factor - bill.yield_rate


def bill_par_spread_sensitivity(bill: Bill, provider: MulticurveProvider) -> MulticurveSensitivity:
    settlement_name, issuer_name, df_settlement, df_end = _bill_ratio(bill, provider)
    ratio = df_settlement / df_end / bill.accrual_factor
    return MulticurveSensitivity.of_point(
        settlement_name, bill.settlement_time, -bill.settlement_time * ratio
    ).plus(MulticurveSensitivity.of_point(issuer_name, bill.end_time, bill.end_time * ratio))


def bill_present_value(bill: Bill, provider: MulticurveProvider) -> float:
    _, _, df_settlement, df_end = _bill_ratio(bill, provider)
    price = 1.0 / (1.0 + bill.yield_rate * bill.accrual_factor)
    return bill.notional * (df_end - price * df_settlement)


def bill_present_value_sensitivity(bill: Bill, provider: MulticurveProvider) -> MulticurveSensitivity:
    settlement_name, issuer_name, df_settlement, df_end = _bill_ratio(bill, provider)
    price = 1.0 / (1.0 + bill.yield_rate * bill.accrual_factor)
    return MulticurveSensitivity.of_point(
        issuer_name, bill.end_time, -bill.notional * bill.end_time * df_end
    ).plus(MulticurveSensitivity.of_point(
        settlement_name, bill.settlement_time, bill.notional * price * bill.settlement_time * df_settlement
    ))


# ----- Zero-coupon inflation swap -----

def _index_ratio(swap: ZeroCouponInflationSwap, provider: MulticurveProvider):
    name = provider.curve_name(price_index(swap.price_index))
    index_end = provider.get_curve(name).price_index(swap.reference_end_time)
    return name, index_end, index_end / swap.index_start_value


def zero_coupon_inflation_par_spread(swap: ZeroCouponInflationSwap, provider: MulticurveProvider) -> float:
    _, _, ratio = _index_ratio(swap, provider)
    return ratio ** (1.0 / swap.maturity_years) - 1.0 - swap.fixed_rate


def zero_coupon_inflation_par_spread_sensitivity(swap: ZeroCouponInflationSwap,
                                                 provider: MulticurveProvider) -> MulticurveSensitivity:
    name, index_end, ratio = _index_ratio(swap, provider)
    derivative = ratio ** (1.0 / swap.maturity_years) / (swap.maturity_years * index_end)
    return MulticurveSensitivity.of_point(name, swap.reference_end_time, derivative)


def zero_coupon_inflation_present_value(swap: ZeroCouponInflationSwap, provider: MulticurveProvider) -> float:
    """Value of receiving the inflation leg and paying the fixed leg."""
    _, _, ratio = _index_ratio(swap, provider)
    df = provider.discounting_curve(swap.currency).df(swap.payment_time)
    fixed = (1.0 + swap.fixed_rate) ** swap.maturity_years
    return swap.notional * df * (ratio - fixed)


def zero_coupon_inflation_present_value_sensitivity(swap: ZeroCouponInflationSwap,
                                                    provider: MulticurveProvider) -> MulticurveSensitivity:
    name, _, ratio = _index_ratio(swap, provider)
    df, df_sensitivity = _discount_with_sensitivity(provider, discounting(swap.currency), swap.payment_time)
    fixed = (1.0 + swap.fixed_rate) ** swap.maturity_years
    return MulticurveSensitivity.of_point(
        name, swap.reference_end_time, swap.notional * df / swap.index_start_value
    ).plus(df_sensitivity.multiplied_by(swap.notional * (ratio - fixed)))
