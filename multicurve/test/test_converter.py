"""Tests for date conventions, templates and the definition converter."""

from datetime import date

import pandas as pd
import pytest

from multicurve.conventions import (
    add_tenor,
    generate_schedule,
    get_calendar,
    get_day_count_convention,
    parse_tenor,
    tenor_to_months,
)
from multicurve.instruments import (
    BasisSwapTemplate,
    Bill,
    BillDefinition,
    BillTemplate,
    Cash,
    CashDefinition,
    CouponFixed,
    CouponFloating,
    DepositONTemplate,
    FRATemplate,
    InflationSwapTemplate,
    InflationZeroCouponSwapDefinition,
    Quote,
    SwapFixedFloatDefinition,
    SwapTemplate,
    create_definition_from_quote,
    to_derivative,
)
from multicurve.test import market_data as md

VALUATION = md.VALUATION_DATE

CPI_FIXINGS = {
    md.US_CPI.name: pd.Series(
        [307.0, 307.5, 308.0],
        index=pd.to_datetime(["2023-09-01", "2023-10-01", "2023-11-01"]),
    )
}


# ----- Conventions -----

def test_day_counts():
    act_360 = get_day_count_convention("act/360")
    assert act_360.day_count(date(2024, 1, 2), date(2024, 4, 2)) == 91
    assert act_360.year_fraction(date(2024, 1, 2), date(2024, 4, 2)) == pytest.approx(91.0 / 360.0)
    assert get_day_count_convention(act_360) is act_360
    with pytest.raises(ValueError):
        get_day_count_convention("BUS/252")


def test_calendars():
    weekend = get_calendar("WEEKEND")
    assert not weekend.is_business_day(date(2024, 1, 6))
    assert weekend.add_business_days(date(2024, 1, 8), -2) == date(2024, 1, 4)
    assert not get_calendar("USD").is_business_day(date(2024, 1, 1))
    with pytest.raises(ValueError):
        get_calendar("MARS")


@pytest.mark.parametrize("tenor, expected", [
    ("ON", (0, "D")), ("TN", (1, "D")), ("1w", (1, "W")), ("3M", (3, "M")), ("10Y", (10, "Y")),
])
def test_parse_tenor(tenor, expected):
    assert parse_tenor(tenor) == expected


def test_tenor_errors():
    with pytest.raises(ValueError):
        parse_tenor("3X")
    with pytest.raises(ValueError):
        tenor_to_months("2W")
    assert tenor_to_months("2Y") == 24


def test_add_tenor():
    assert add_tenor(date(2024, 1, 5), "1D") == date(2024, 1, 8)
    assert add_tenor(date(2024, 1, 4), "2Y") == date(2026, 1, 5)
    assert add_tenor(date(2024, 1, 4), "1W") == date(2024, 1, 11)


def test_schedule_merges_short_front_stub():
    schedule = generate_schedule(date(2024, 1, 4), date(2026, 1, 5), 12)
    assert schedule == [
        (date(2024, 1, 4), date(2025, 1, 6)),
        (date(2025, 1, 6), date(2026, 1, 5)),
    ]


def test_schedule_rejects_inverted_dates():
    with pytest.raises(ValueError):
        generate_schedule(date(2025, 1, 1), date(2024, 1, 1), 3)


# ----- Templates -----

def test_overnight_deposit_template():
    template = DepositONTemplate(md.USD, day_count="ACT/365F")
    overnight = create_definition_from_quote(VALUATION, Quote("0D", 0.053, template))
    tom_next = create_definition_from_quote(VALUATION, Quote("1D", 0.053, template))

    assert (overnight.start_date, overnight.end_date) == (date(2024, 1, 2), date(2024, 1, 3))
    assert (tom_next.start_date, tom_next.end_date) == (date(2024, 1, 3), date(2024, 1, 4))
    assert overnight.day_count == "ACT/365F"


def test_swap_template_starts_at_spot():
    definition = create_definition_from_quote(VALUATION, Quote("2Y", 0.046, SwapTemplate(md.FED_FUND)))

    assert isinstance(definition, SwapFixedFloatDefinition)
    assert definition.effective_date == date(2024, 1, 4)
    assert definition.maturity_date == date(2026, 1, 5)
    assert definition.fixed_rate == 0.046


def test_fra_template():
    definition = FRATemplate(md.USD_LIBOR_3M).generate(VALUATION, "3M", 0.05)
    assert definition.accrual_start_date == date(2024, 4, 4)
    assert definition.accrual_end_date == date(2024, 7, 4)


def test_bill_template_accepts_maturity_date():
    template = BillTemplate(md.USD, md.US_GOVT)
    definition = template.generate(VALUATION, date(2024, 7, 2), 0.0505)
    assert definition.settlement_date == date(2024, 1, 3)
    assert definition.maturity_date == date(2024, 7, 2)


def test_unsupported_template():
    with pytest.raises(TypeError):
        create_definition_from_quote(VALUATION, Quote("1Y", 0.05, object()))


# ----- Conversion -----

def test_cash_conversion():
    cash = to_derivative(CashDefinition(md.USD, date(2024, 1, 2), date(2024, 1, 3), 0.053), VALUATION)

    assert isinstance(cash, Cash)
    assert cash.start_time == 0.0
    assert cash.end_time == pytest.approx(1.0 / 365.0)
    assert cash.accrual_factor == pytest.approx(1.0 / 360.0)


def test_expired_definition():
    with pytest.raises(ValueError):
        to_derivative(CashDefinition(md.USD, date(2023, 12, 1), VALUATION, 0.05), VALUATION)


def test_unsupported_definition():
    with pytest.raises(TypeError):
        to_derivative("1Y swap", VALUATION)


def test_fra_conversion():
    fra = to_derivative(FRATemplate(md.USD_LIBOR_3M).generate(VALUATION, "3M", 0.05), VALUATION)
    assert fra.payment_time == pytest.approx(93.0 / 365.0)
    assert fra.fixing_period_end_time == pytest.approx(184.0 / 365.0)
    assert fra.fixing_accrual_factor == pytest.approx(91.0 / 360.0)


def _seasoned_swap(index):
    return SwapFixedFloatDefinition(
        md.USD, index, date(2023, 12, 15), date(2025, 12, 15), 0.048, fixed_period_months=12,
    )


def test_seasoned_swap_uses_past_fixing():
    fixings = {md.USD_LIBOR_3M.name: pd.Series([0.0565], index=pd.to_datetime(["2023-12-13"]))}
    swap = to_derivative(_seasoned_swap(md.USD_LIBOR_3M), VALUATION, fixings)

    assert len(swap.quoted_leg) == 2
    assert len(swap.other_leg) == 8
    first = swap.other_leg[0]
    assert isinstance(first, CouponFixed)
    assert first.rate == 0.0565
    assert first.payment_time == pytest.approx(73.0 / 365.0)
    assert all(isinstance(c, CouponFloating) for c in swap.other_leg[1:])
    assert swap.quote == 0.048


def test_seasoned_swap_missing_fixing():
    with pytest.raises(ValueError):
        to_derivative(_seasoned_swap(md.USD_LIBOR_3M), VALUATION)


def test_seasoned_overnight_swap_is_rejected():
    with pytest.raises(ValueError):
        to_derivative(_seasoned_swap(md.FED_FUND), VALUATION)


def test_bill_conversion():
    definition = BillDefinition(md.USD, md.US_GOVT, date(2024, 1, 3), date(2024, 7, 2), 0.0505)
    bill = to_derivative(definition, VALUATION)

    assert isinstance(bill, Bill)
    assert bill.settlement_time == pytest.approx(1.0 / 365.0)
    assert bill.end_time == pytest.approx(182.0 / 365.0)
    assert bill.accrual_factor == pytest.approx(181.0 / 360.0)


def test_inflation_swap_start_index_from_fixings():
    definition = InflationSwapTemplate(md.USD, md.US_CPI).generate(VALUATION, "5Y", 0.026)
    swap = to_derivative(definition, VALUATION, CPI_FIXINGS)

    assert definition.start_date == date(2024, 1, 4)
    assert swap.index_start_value == 307.5
    assert swap.maturity_years == 5.0
    assert swap.reference_end_time == pytest.approx((date(2028, 10, 4) - VALUATION).days / 365.0)


def test_inflation_swap_explicit_start_index():
    definition = InflationZeroCouponSwapDefinition(
        md.USD, md.US_CPI, date(2024, 1, 4), date(2026, 1, 4), 0.027, index_start_value=301.0,
    )
    assert to_derivative(definition, VALUATION).index_start_value == 301.0


def test_inflation_swap_without_fixings():
    definition = InflationSwapTemplate(md.USD, md.US_CPI).generate(VALUATION, "5Y", 0.026)
    with pytest.raises(ValueError):
        to_derivative(definition, VALUATION)


def test_basis_swap_spread_on_second_leg():
    definition = BasisSwapTemplate(md.FED_FUND, md.USD_LIBOR_3M).generate(VALUATION, "2Y", 0.002)
    swap = to_derivative(definition, VALUATION)

    assert len(swap.quoted_leg) == 8
    assert all(c.index == md.USD_LIBOR_3M and c.spread == 0.002 for c in swap.quoted_leg)
    assert all(c.index == md.FED_FUND and c.spread == 0.0 for c in swap.other_leg)
    assert swap.quote is None
