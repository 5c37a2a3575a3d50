"""
Domain-specific exception hierarchy for the business time engine.
"""


class BusinessTimeError(Exception):
    """Base class for all business time errors."""


class InvalidArgument(BusinessTimeError, ValueError):
    """Raised when an interval, constraint or precision is misconfigured."""


class UnparseableTimestamp(BusinessTimeError, ValueError):
    """Raised when a string cannot be turned into a timestamp."""
