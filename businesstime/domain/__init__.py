"""
Domain layer - Pure business time logic without I/O.
"""

from .business_time import BusinessTime
from .constraints import (
    All,
    Any,
    AnyTime,
    BetweenHoursOfDay,
    BetweenTimesOfDay,
    BusinessTimeConstraint,
    Dates,
    DaysOfWeek,
    Not,
    WeekDays,
    Weekends,
    minute_of_day,
    parse_time_of_day,
)
from .exceptions import BusinessTimeError, InvalidArgument, UnparseableTimestamp
from .interval import Interval, Unit

__all__ = [
    "All",
    "Any",
    "AnyTime",
    "BetweenHoursOfDay",
    "BetweenTimesOfDay",
    "BusinessTime",
    "BusinessTimeConstraint",
    "BusinessTimeError",
    "Dates",
    "DaysOfWeek",
    "Interval",
    "InvalidArgument",
    "Not",
    "Unit",
    "UnparseableTimestamp",
    "WeekDays",
    "Weekends",
    "minute_of_day",
    "parse_time_of_day",
]
