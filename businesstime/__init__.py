"""
businesstime - Count elapsed business time between two timestamps.
"""

from .domain import (
    All,
    Any,
    AnyTime,
    BetweenHoursOfDay,
    BetweenTimesOfDay,
    BusinessTime,
    BusinessTimeConstraint,
    BusinessTimeError,
    Dates,
    DaysOfWeek,
    Interval,
    InvalidArgument,
    Not,
    UnparseableTimestamp,
    WeekDays,
    Weekends,
)
from .services import BusinessTimeFactory

__version__ = "0.1.0"

__all__ = [
    "All",
    "Any",
    "AnyTime",
    "BetweenHoursOfDay",
    "BetweenTimesOfDay",
    "BusinessTime",
    "BusinessTimeConstraint",
    "BusinessTimeError",
    "BusinessTimeFactory",
    "Dates",
    "DaysOfWeek",
    "Interval",
    "InvalidArgument",
    "Not",
    "UnparseableTimestamp",
    "WeekDays",
    "Weekends",
]
