"""Hard-coded USD market data shared by the calibration tests (valuation 2024-01-02)."""

from datetime import date

import numpy as np

from multicurve.calibration import CalibrationBlock, CurveUnit
from multicurve.curves import SeasonalCurve
from multicurve.generators import (
    GeneratorCurveYieldInterpolated,
    GeneratorPriceIndexCurveInterpolated,
    with_seasonality,
)
from multicurve.instruments import (
    Bill,
    Cash,
    CouponFixed,
    CouponFloating,
    DepositIbor,
    IborIndex,
    IndexON,
    IndexPrice,
    Swap,
    ZeroCouponInflationSwap,
)
from multicurve.provider import CurveBindings

VALUATION_DATE = date(2024, 1, 2)
USD = "USD"
US_GOVT = "US GOVT"

FED_FUND = IndexON("FED FUND", USD)
USD_LIBOR_3M = IborIndex("USD LIBOR 3M", USD, 3)
US_CPI = IndexPrice("US CPI", USD)

DSC_NAME = "USD Dsc"
FWD3_NAME = "USD Fwd 3M"
CPI_NAME = "USD CPI"
GOVT_NAME = "US Govt"

ON_DAY = 1.0 / 365.0

DSC_ON_RATE = 0.0530
OIS_YEARS = [1, 2, 3, 5, 7, 10]
OIS_RATES = [0.0500, 0.0460, 0.0430, 0.0400, 0.0390, 0.0385]
DSC_QUOTES = [DSC_ON_RATE] + OIS_RATES

FWD_DEPOSIT_RATE = 0.0560
IRS_YEARS = [1, 2, 3, 5, 7, 10]
IRS_RATES = [0.0520, 0.0480, 0.0450, 0.0420, 0.0410, 0.0405]
FWD_QUOTES = [FWD_DEPOSIT_RATE] + IRS_RATES

CPI_START = 300.0
ZC_YEARS = [1, 2, 3, 5, 7, 10]
ZC_RATES = [0.0300, 0.0280, 0.0270, 0.0260, 0.0255, 0.0250]

GOVT_DEPOSIT_RATE = 0.0525
BILL_ENDS = [0.25, 0.5, 1.0]
BILL_YIELDS = [0.0520, 0.0505, 0.0480]

SEASONAL_FACTORS = [0.9990, 1.0020, 1.0035, 1.0030, 1.0015, 1.0010,
                    1.0000, 0.9995, 1.0005, 0.9990, 0.9980]
SEASONAL_CURVE = SeasonalCurve(np.arange(0, 15 * 12 + 1) / 12.0, SEASONAL_FACTORS)


# ----- Instrument builders -----

def overnight_deposit(rate: float, issuer: str = None) -> Cash:
    return Cash(USD, 0.0, ON_DAY, ON_DAY, rate, issuer=issuer)


def ois_swap(years: int, rate: float) -> Swap:
    fixed = tuple(CouponFixed(float(k), 1.0, rate) for k in range(1, years + 1))
    floating = tuple(
        CouponFloating(FED_FUND, float(k), 1.0, float(k - 1), float(k), 1.0)
        for k in range(1, years + 1)
    )
    return Swap(USD, fixed, floating)


def ibor_swap(years: int, rate: float) -> Swap:
    fixed = tuple(CouponFixed(0.5 * k, 0.5, rate) for k in range(1, 2 * years + 1))
    floating = tuple(
        CouponFloating(USD_LIBOR_3M, 0.25 * k, 0.25, 0.25 * (k - 1), 0.25 * k, 0.25)
        for k in range(1, 4 * years + 1)
    )
    return Swap(USD, fixed, floating)


def basis_swap(years: int, spread: float) -> Swap:
    """Fed fund (annual compounded) against Libor 3M plus spread."""
    overnight = tuple(
        CouponFloating(FED_FUND, float(k), 1.0, float(k - 1), float(k), 1.0)
        for k in range(1, years + 1)
    )
    libor = tuple(
        CouponFloating(USD_LIBOR_3M, 0.25 * k, 0.25, 0.25 * (k - 1), 0.25 * k, 0.25, spread=spread)
        for k in range(1, 4 * years + 1)
    )
    return Swap(USD, libor, overnight)


def ibor_deposit(rate: float) -> DepositIbor:
    return DepositIbor(USD, USD_LIBOR_3M, 0.0, 0.25, 0.25, rate)


def zero_coupon_inflation_swap(years: int, rate: float) -> ZeroCouponInflationSwap:
    return ZeroCouponInflationSwap(USD, US_CPI, float(years), years - 0.25, CPI_START, rate, float(years))


def bill(end_time: float, yield_rate: float) -> Bill:
    return Bill(USD, US_GOVT, ON_DAY, end_time, (end_time - ON_DAY) * 365.0 / 360.0, yield_rate)


def dsc_instruments(quotes=DSC_QUOTES):
    return [overnight_deposit(quotes[0])] + [ois_swap(y, r) for y, r in zip(OIS_YEARS, quotes[1:])]


def fwd_instruments(quotes=FWD_QUOTES):
    return [ibor_deposit(quotes[0])] + [ibor_swap(y, r) for y, r in zip(IRS_YEARS, quotes[1:])]


def cpi_instruments(rates=ZC_RATES):
    return [zero_coupon_inflation_swap(y, r) for y, r in zip(ZC_YEARS, rates)]


def govt_instruments(deposit_rate=GOVT_DEPOSIT_RATE, yields=BILL_YIELDS):
    return [overnight_deposit(deposit_rate, issuer=US_GOVT)] + [bill(e, y) for e, y in zip(BILL_ENDS, yields)]


# ----- Bindings and blocks -----

def bindings() -> CurveBindings:
    return CurveBindings(
        discounting={DSC_NAME: [USD]},
        forward_on={DSC_NAME: [FED_FUND]},
        forward_ibor={FWD3_NAME: [USD_LIBOR_3M]},
        price_index={CPI_NAME: [US_CPI]},
        issuer={GOVT_NAME: [US_GOVT]},
    )


def yield_generator():
    return GeneratorCurveYieldInterpolated(interpolation="STEP_FORWARD")


def cpi_generator():
    return with_seasonality(GeneratorPriceIndexCurveInterpolated(), SEASONAL_CURVE)


def dsc_fwd_block(dsc_quotes=DSC_QUOTES, fwd_quotes=FWD_QUOTES, single_unit: bool = False) -> CalibrationBlock:
    dsc = dsc_instruments(dsc_quotes)
    fwd = fwd_instruments(fwd_quotes)
    if single_unit:
        units = [CurveUnit([DSC_NAME, FWD3_NAME], [yield_generator(), yield_generator()], [dsc, fwd])]
    else:
        units = [
            CurveUnit([DSC_NAME], [yield_generator()], [dsc]),
            CurveUnit([FWD3_NAME], [yield_generator()], [fwd]),
        ]
    return CalibrationBlock(units, bindings())


def dsc_cpi_block(single_unit: bool = False, known_data=None) -> CalibrationBlock:
    dsc = dsc_instruments()
    cpi = cpi_instruments()
    if single_unit:
        units = [CurveUnit([DSC_NAME, CPI_NAME], [yield_generator(), cpi_generator()], [dsc, cpi])]
    else:
        units = [
            CurveUnit([DSC_NAME], [yield_generator()], [dsc]),
            CurveUnit([CPI_NAME], [cpi_generator()], [cpi]),
        ]
    return CalibrationBlock(units, bindings(), known_data=known_data)
