"""Shared fixtures for the multicurve tests."""

import pytest

from multicurve.calibration import CalibrationConfig, MulticurveBuildingRepository
from multicurve.curves import InterpolatedPriceIndexCurve, InterpolatedYieldCurve, SeasonalPriceIndexCurve
from multicurve.provider import MulticurveProvider
from multicurve.test import market_data as md

NODES = [0.5, 1.0, 2.0, 5.0, 10.0]

CURVE_VALUES = {
    md.DSC_NAME: [0.0510, 0.0480, 0.0450, 0.0410, 0.0400],
    md.FWD3_NAME: [0.0550, 0.0520, 0.0490, 0.0440, 0.0420],
    md.GOVT_NAME: [0.0500, 0.0470, 0.0445, 0.0405, 0.0395],
    md.CPI_NAME: [302.0, 309.0, 318.0, 345.0, 385.0],
}


def build_provider(values=None) -> MulticurveProvider:
    """Provider with interpolated curves on ``NODES``; ``values`` overrides node values per curve."""
    values = {**CURVE_VALUES, **(values or {})}
    bindings = md.bindings()
    provider = MulticurveProvider()
    for name in (md.DSC_NAME, md.FWD3_NAME, md.GOVT_NAME):
        curve = InterpolatedYieldCurve(name, NODES, values[name], "STEP_FORWARD")
        provider.add_curve(name, curve, bindings.references_for(name))
    base = InterpolatedPriceIndexCurve(md.CPI_NAME, NODES, values[md.CPI_NAME], "LOG_LINEAR")
    provider.add_curve(
        md.CPI_NAME,
        SeasonalPriceIndexCurve(md.CPI_NAME, base, md.SEASONAL_CURVE),
        bindings.references_for(md.CPI_NAME),
    )
    return provider


@pytest.fixture
def provider():
    return build_provider()


@pytest.fixture
def repository():
    return MulticurveBuildingRepository(CalibrationConfig())
