"""
Rate and price indices.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IborIndex:
    """Term deposit rate index (e.g. USD LIBOR 3M, EURIBOR 6M)."""

    name: str
    currency: str
    tenor_months: int
    day_count: str = "ACT/360"
    spot_lag: int = 2
    calendar: str = "WEEKEND"


@dataclass(frozen=True)
class IndexON:
    """Overnight rate index (e.g. FED FUND, ESTR)."""

    name: str
    currency: str
    day_count: str = "ACT/360"
    calendar: str = "WEEKEND"


@dataclass(frozen=True)
class IndexPrice:
    """Consumer price index (e.g. US CPI-U)."""

    name: str
    currency: str
