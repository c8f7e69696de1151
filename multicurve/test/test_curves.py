"""Tests for yield, spread and price index curves."""

import math

import numpy as np
import pytest

from multicurve.curves import (
    InterpolatedPriceIndexCurve,
    InterpolatedYieldCurve,
    SeasonalCurve,
    SeasonalPriceIndexCurve,
    SpreadYieldCurve,
)


def test_yield_curve_discount_factor_and_forward():
    curve = InterpolatedYieldCurve("USD", [1.0, 2.0], [0.03, 0.04], "LINEAR")
    assert curve.df(1.5) == pytest.approx(math.exp(-0.035 * 1.5))
    assert curve.df(0.0) == 1.0
    expected = (curve.df(1.0) / curve.df(2.0) - 1.0) / 0.5
    assert curve.forward(1.0, 2.0, 0.5) == pytest.approx(expected)
    with pytest.raises(ValueError):
        curve.forward(2.0, 1.0)


def test_yield_curve_exposes_parameters():
    curve = InterpolatedYieldCurve("USD", [1.0, 2.0, 3.0], [0.03, 0.04, 0.045])
    assert curve.number_of_parameters == 3
    np.testing.assert_array_equal(curve.x_data, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(curve.y_data, [0.03, 0.04, 0.045])
    assert curve.value(2.0) == pytest.approx(0.04)
    assert curve.parameter_sensitivity(2.0).sum() == pytest.approx(1.0)


def test_spread_curve_shifts_zero_rates_only():
    calibrated = InterpolatedYieldCurve("base", [1.0, 5.0], [0.03, 0.04], "LINEAR")
    fixed = InterpolatedYieldCurve("spread", [1.0], [0.002])
    added = SpreadYieldCurve("added", calibrated, fixed)
    subtracted = SpreadYieldCurve("subtracted", calibrated, fixed, subtract=True)

    assert added.zero(3.0) == pytest.approx(calibrated.zero(3.0) + 0.002)
    assert subtracted.zero(3.0) == pytest.approx(calibrated.zero(3.0) - 0.002)
    assert added.number_of_parameters == 2
    np.testing.assert_array_equal(added.parameter_sensitivity(3.0), calibrated.parameter_sensitivity(3.0))


def test_seasonal_curve_completes_year_to_neutral():
    factors = [1.001, 1.002, 0.999, 1.003, 1.0, 0.998, 1.001, 0.997, 1.002, 1.0, 0.999]
    seasonal = SeasonalCurve(np.arange(0, 25) / 12.0, factors)

    assert seasonal.value(-0.5) == 1.0
    assert seasonal.value(0.5 / 12.0) == 1.0
    assert seasonal.value(1.5 / 12.0) == pytest.approx(1.001)
    assert seasonal.value(2.5 / 12.0) == pytest.approx(1.001 * 1.002)
    assert seasonal.value(12.5 / 12.0) == pytest.approx(1.0, abs=1e-12)
    assert seasonal.value(13.5 / 12.0) == pytest.approx(1.001)


def test_additive_seasonal_curve():
    seasonal = SeasonalCurve(np.arange(0, 13) / 12.0, [0.1] * 11, additive=True)
    assert seasonal.value(1.5 / 12.0) == pytest.approx(0.1)
    assert seasonal.value(12.5 / 12.0) == pytest.approx(0.0, abs=1e-12)


def test_seasonal_curve_rejects_bad_factors():
    with pytest.raises(ValueError):
        SeasonalCurve([0.0, 1.0], [1.0] * 5)
    with pytest.raises(ValueError):
        SeasonalCurve([0.0, 1.0], [1.0] * 10 + [-1.0])


def test_seasonal_price_index_curve():
    base = InterpolatedPriceIndexCurve("CPI", [1.0, 2.0], [300.0, 310.0])
    seasonal = SeasonalCurve(np.arange(0, 37) / 12.0, [1.01] + [1.0] * 10)
    curve = SeasonalPriceIndexCurve("CPI", base, seasonal)

    t = 1.5
    assert curve.price_index(t) == pytest.approx(base.price_index(t) * seasonal.value(t))
    np.testing.assert_allclose(
        curve.parameter_sensitivity(t), base.parameter_sensitivity(t) * seasonal.value(t)
    )
    np.testing.assert_array_equal(curve.y_data, [300.0, 310.0])
