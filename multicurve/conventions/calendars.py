"""
QuantLib-backed business day calendars.
"""

from datetime import date, datetime
from enum import Enum
from typing import Union

import QuantLib as ql

from .daycount import to_ql_date


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"

    def to_ql(self) -> int:
        return _QL_ADJUSTMENTS[self]


_QL_ADJUSTMENTS = {
    BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayAdjustment.FOLLOWING: ql.Following,
    BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayAdjustment.PRECEDING: ql.Preceding,
    BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}


class Calendar:
    """Named business day calendar backed by a QuantLib calendar."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        """Add (or subtract, for negative ``days``) business days to a date."""
        ql_result = self._ql_calendar.advance(to_ql_date(start_date), days, ql.Days)
        return _to_py_date(ql_result)

    def adjust(
        self,
        dt: Union[date, datetime],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    ) -> date:
        return _to_py_date(self._ql_calendar.adjust(to_ql_date(dt), adjustment.to_ql()))

    def add_months(
        self,
        start_date: Union[date, datetime],
        months: int,
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        end_of_month: bool = False,
    ) -> date:
        """Add calendar months and adjust the result to a business day."""
        ql_result = self._ql_calendar.advance(
            to_ql_date(start_date),
            ql.Period(months, ql.Months),
            adjustment.to_ql(),
            end_of_month,
        )
        return _to_py_date(ql_result)

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


TARGET = Calendar("TARGET", ql.TARGET())
WEEKEND_ONLY = Calendar("WEEKEND", ql.WeekendsOnly())
USNY = Calendar("USNY", ql.UnitedStates(ql.UnitedStates.GovernmentBond))
UK = Calendar("UK", ql.UnitedKingdom())

CALENDARS = {
    "TARGET": TARGET,
    "EUR": TARGET,
    "WEEKEND": WEEKEND_ONLY,
    "USNY": USNY,
    "USD": USNY,
    "UK": UK,
    "GBP": UK,
}


def get_calendar(name: Union[str, Calendar]) -> Calendar:
    """Get a calendar by name (instances are passed through)."""
    if isinstance(name, Calendar):
        return name
    key = name.upper()
    if key not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
