"""
Tenor arithmetic, schedule generation and the curve time axis.
"""

import re
from datetime import date, timedelta
from typing import List, Tuple, Union

from dateutil.relativedelta import relativedelta

from .calendars import BusinessDayAdjustment, Calendar, get_calendar
from .daycount import ACT_365F

_TENOR_PATTERN = re.compile(r"^(\d+)([DWMY])$")

# Front stubs shorter than this are merged into the first regular period.
_MIN_STUB_DAYS = 7


def parse_tenor(tenor: str) -> Tuple[int, str]:
    """Split a tenor string such as ``'3M'`` into ``(3, 'M')``."""
    t = tenor.upper().strip()
    if t == "ON":
        return 0, "D"
    if t == "TN":
        return 1, "D"
    match = _TENOR_PATTERN.match(t)
    if match is None:
        raise ValueError(f"Unsupported tenor: {tenor}")
    return int(match.group(1)), match.group(2)


def tenor_to_months(tenor: str) -> int:
    """Convert tenor string (e.g., '3M', '2Y') to number of months."""
    n, unit = parse_tenor(tenor)
    if unit == "M":
        return n
    if unit == "Y":
        return 12 * n
    raise ValueError(f"Tenor {tenor} is not a whole number of months")


def add_tenor(
    start_date: date,
    tenor: str,
    calendar: Union[str, Calendar] = "WEEKEND",
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    end_of_month: bool = False,
) -> date:
    """Add a tenor to a date.

    Day tenors count business days, week tenors count calendar days and are then
    adjusted, month and year tenors use month arithmetic with adjustment.
    """
    cal = get_calendar(calendar)
    n, unit = parse_tenor(tenor)
    if unit == "D":
        return cal.add_business_days(start_date, n)
    if unit == "W":
        return cal.adjust(start_date + timedelta(days=7 * n), adjustment)
    months = n if unit == "M" else 12 * n
    return cal.add_months(start_date, months, adjustment, end_of_month)


def generate_schedule(
    effective_date: date,
    maturity_date: date,
    period_months: int,
    calendar: Union[str, Calendar] = "WEEKEND",
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
) -> List[Tuple[date, date]]:
    """Generate accrual periods rolling backward from maturity.

    Returns a list of ``(accrual_start, accrual_end)`` pairs. A short front stub
    of less than a week is merged into the first period.
    """
    if maturity_date <= effective_date:
        raise ValueError(
            f"Maturity {maturity_date} must be after effective date {effective_date}"
        )
    if period_months <= 0:
        raise ValueError(f"Period must be a positive number of months, got {period_months}")

    cal = get_calendar(calendar)
    unadjusted: List[date] = []
    k = 1
    while True:
        roll = maturity_date - relativedelta(months=period_months * k)
        if roll <= effective_date + timedelta(days=_MIN_STUB_DAYS):
            break
        unadjusted.append(roll)
        k += 1

    boundaries = [effective_date]
    boundaries.extend(cal.adjust(d, adjustment) for d in reversed(unadjusted))
    boundaries.append(maturity_date)
    return list(zip(boundaries[:-1], boundaries[1:]))


def time_from(valuation_date: date, target: date) -> float:
    """Time in years (ACT/365F) from the valuation date to ``target``."""
    return ACT_365F.year_fraction(valuation_date, target)
