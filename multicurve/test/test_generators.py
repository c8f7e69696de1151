"""Tests for curve generators and maturity calculators."""

import numpy as np
import pytest

from multicurve.curves import InterpolatedYieldCurve, SeasonalPriceIndexCurve, SpreadYieldCurve
from multicurve.exceptions import InstrumentEvaluationError, StructuralConfigurationError
from multicurve.generators import (
    GeneratorCurveTransformed,
    GeneratorCurveYieldInterpolated,
    GeneratorCurveYieldInterpolatedNode,
    GeneratorPriceIndexCurveInterpolated,
    GeneratorPriceIndexCurveInterpolatedNode,
    last_fixing_start_time,
    last_time,
    with_seasonality,
    with_spread,
)
from multicurve.instruments import Cash
from multicurve.test import market_data as md


def _deposits(ends):
    return [Cash("USD", 0.0, end, end, 0.05) for end in ends]


def test_final_generator_places_nodes_at_maturities():
    generator = GeneratorCurveYieldInterpolated(interpolation="LINEAR")
    final = generator.final_generator(_deposits([0.25, 0.5, 1.0]))

    assert isinstance(final, GeneratorCurveYieldInterpolatedNode)
    assert final.number_of_parameters() == 3
    curve = final.generate_curve("USD Dsc", [0.01, 0.02, 0.03])
    np.testing.assert_array_equal(curve.x_data, [0.25, 0.5, 1.0])
    assert curve.zero(0.75) == pytest.approx(0.025)


def test_generator_must_be_finalised():
    generator = GeneratorCurveYieldInterpolated()
    with pytest.raises(StructuralConfigurationError):
        generator.number_of_parameters()
    with pytest.raises(StructuralConfigurationError):
        generator.generate_curve("USD Dsc", [0.01])


def test_unordered_instruments_are_rejected():
    with pytest.raises(StructuralConfigurationError):
        GeneratorCurveYieldInterpolated().final_generator(_deposits([0.5, 0.25]))
    with pytest.raises(StructuralConfigurationError):
        GeneratorCurveYieldInterpolated().final_generator(_deposits([0.5, 0.5]))


def test_generate_curve_checks_parameter_count():
    generator = GeneratorCurveYieldInterpolatedNode([1.0, 2.0])
    with pytest.raises(ValueError):
        generator.generate_curve("USD Dsc", [0.01, 0.02, 0.03])


def test_generation_is_deterministic():
    generator = GeneratorCurveYieldInterpolatedNode([1.0, 2.0, 5.0])
    first = generator.generate_curve("USD Dsc", [0.03, 0.035, 0.04])
    second = generator.generate_curve("USD Dsc", [0.03, 0.035, 0.04])
    for t in (0.3, 1.7, 4.2, 8.0):
        assert first.df(t) == second.df(t)


def test_initial_guess_uses_rates():
    generator = GeneratorCurveYieldInterpolatedNode([1.0, 2.0])
    np.testing.assert_array_equal(generator.initial_guess([0.03, 0.04]), [0.03, 0.04])
    np.testing.assert_array_equal(generator.initial_guess(None), [0.0, 0.0])


@pytest.mark.parametrize("generator", [
    GeneratorCurveYieldInterpolatedNode([1.0, 2.0, 3.0]),
    GeneratorPriceIndexCurveInterpolatedNode([1.0, 2.0, 3.0]),
])
def test_initial_guess_rejects_wrong_number_of_rates(generator):
    with pytest.raises(StructuralConfigurationError):
        generator.initial_guess([0.02, 0.04])


def test_price_index_initial_guess_defaults_to_100():
    generator = GeneratorPriceIndexCurveInterpolatedNode([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(generator.initial_guess([300.0, 0.0, -1.0]), [300.0, 100.0, 100.0])
    np.testing.assert_array_equal(generator.initial_guess(None), [100.0, 100.0, 100.0])


def test_price_index_generator_uses_last_fixing_start_time():
    instruments = md.cpi_instruments()
    final = GeneratorPriceIndexCurveInterpolated().final_generator(instruments)
    np.testing.assert_allclose(final.node_times, [y - 0.25 for y in md.ZC_YEARS])


def test_seasonality_decorator_passes_through():
    generator = with_seasonality(GeneratorPriceIndexCurveInterpolated(), md.SEASONAL_CURVE)
    final = generator.final_generator(md.cpi_instruments())

    assert isinstance(final, GeneratorCurveTransformed)
    assert final.number_of_parameters() == len(md.ZC_YEARS)
    np.testing.assert_array_equal(final.initial_guess([300.0] * 6), [300.0] * 6)

    curve = final.generate_curve(md.CPI_NAME, np.full(6, 300.0))
    assert isinstance(curve, SeasonalPriceIndexCurve)
    t = 2.4
    assert curve.price_index(t) == pytest.approx(300.0 * md.SEASONAL_CURVE.value(t))


def test_spread_decorator_adds_fixed_curve():
    fixed = InterpolatedYieldCurve("spread", [1.0], [0.001])
    generator = with_spread(GeneratorCurveYieldInterpolatedNode([1.0, 2.0], "LINEAR"), fixed)
    curve = generator.generate_curve("Issuer", [0.03, 0.04])

    assert isinstance(curve, SpreadYieldCurve)
    assert curve.zero(1.5) == pytest.approx(0.036)
    assert generator.final_generator([]) is generator


def test_maturity_calculators():
    swap = md.ois_swap(3, 0.04)
    assert last_time(swap) == 3.0
    zc = md.zero_coupon_inflation_swap(5, 0.025)
    assert last_fixing_start_time(zc) == 4.75
    with pytest.raises(InstrumentEvaluationError):
        last_fixing_start_time(swap)
    with pytest.raises(InstrumentEvaluationError):
        last_time(object())
