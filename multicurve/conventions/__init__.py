"""Market conventions: day counts, calendars and date arithmetic."""

from .calendars import BusinessDayAdjustment, Calendar, get_calendar
from .daycount import ACT_360, ACT_365F, DayCountConvention, get_day_count_convention
from .dates import add_tenor, generate_schedule, parse_tenor, tenor_to_months, time_from

__all__ = [
    "ACT_360",
    "ACT_365F",
    "BusinessDayAdjustment",
    "Calendar",
    "DayCountConvention",
    "add_tenor",
    "generate_schedule",
    "get_calendar",
    "get_day_count_convention",
    "parse_tenor",
    "tenor_to_months",
    "time_from",
]
