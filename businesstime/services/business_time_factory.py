"""
Factory producing BusinessTime values that share one configuration.

Keeps the constraint set, precision and timestamp parser in one place so
callers (the CLI, application code) only hand over timestamps.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..adapters.timestamp_parser import PendulumTimestampParser, TimestampParser
from ..domain.business_time import BusinessTime, Moment
from ..domain.constraints import BusinessTimeConstraint, check_constraints, default_constraints
from ..domain.interval import Interval


class BusinessTimeFactory:
    """
    Builds ``BusinessTime`` instances with a shared configuration.

    Each instance gets its own copy of the settings, so adjusting the
    precision of one value never affects another.
    """

    def __init__(
        self,
        constraints: Optional[Sequence[BusinessTimeConstraint]] = None,
        precision: Optional[Interval] = None,
        parser: Optional[TimestampParser] = None,
    ) -> None:
        if constraints is None:
            constraints = default_constraints()
        self._constraints = check_constraints(constraints)
        self._precision = precision or Interval.hours(1)
        self._parser = parser or PendulumTimestampParser()

    @property
    def constraints(self) -> Tuple[BusinessTimeConstraint, ...]:
        return self._constraints

    @property
    def precision(self) -> Interval:
        return self._precision

    def make(self, moment: Moment = None) -> BusinessTime:
        """Create a BusinessTime for the given moment (now when omitted)."""
        return BusinessTime(
            moment,
            constraints=self._constraints,
            precision=self._precision,
            parser=self._parser,
        )

    def now(self) -> BusinessTime:
        return self.make(self._parser("now"))
