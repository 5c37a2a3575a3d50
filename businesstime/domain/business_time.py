"""
Business time values and the diff engine.

A ``BusinessTime`` is a timestamp plus the rules that decide what counts as
business time (a single top-level ``All`` constraint) and the precision used
to step between two timestamps. Diffing walks from the earlier timestamp to
the later one in precision-sized steps and counts every step whose starting
instant is business time.
"""

import logging
from datetime import datetime
from typing import Callable, Iterator, Optional, Sequence, Tuple, Union

import pendulum
from pendulum import DateTime

from .constraints import All, BusinessTimeConstraint, check_constraints, default_constraints
from .exceptions import BusinessTimeError, InvalidArgument
from .interval import Interval

logger = logging.getLogger(__name__)

Moment = Union[str, datetime, "BusinessTime", None]
Parser = Callable[[str], DateTime]

# Longest run of non-business time tolerated when moving by business time.
MAX_IDLE_MINUTES = 366 * 24 * 60


def default_parser(text: str) -> DateTime:
    from ..adapters.timestamp_parser import PendulumTimestampParser

    return PendulumTimestampParser()(text)


class BusinessTime:
    """
    A timestamp that knows which instants count as business time.

    Defaults to Monday to Friday, 09:00 to 17:00, with a precision of one
    hour. Diff and move operations never mutate the instance; only the
    explicit setters do.

    Args:
        moment: String, datetime, another BusinessTime, or None for now
        constraints: Constraints combined with AND semantics
        precision: Step size used when diffing
        parser: Callable turning strings into pendulum DateTimes
    """

    def __init__(
        self,
        moment: Moment = None,
        *,
        constraints: Optional[Sequence[BusinessTimeConstraint]] = None,
        precision: Optional[Interval] = None,
        parser: Optional[Parser] = None,
    ):
        self._parser = parser or default_parser
        self.moment: DateTime = self._to_datetime(moment)

        if constraints is None:
            constraints = default_constraints()
        self.set_constraints(*constraints)
        self.set_precision(precision or Interval.hours(1))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def constraint(self) -> All:
        """The single composite every instant is judged by."""
        return self._constraint

    @property
    def constraints(self) -> Tuple[BusinessTimeConstraint, ...]:
        return self._constraint.constraints

    def set_constraints(self, *constraints: BusinessTimeConstraint) -> "BusinessTime":
        """
        Replace the constraint set.

        An empty set means every instant is business time.
        """
        members = check_constraints(constraints)
        if not members:
            logger.info("No constraints configured; every instant counts as business time")
        self._constraint = All(*members)
        return self

    def add_constraints(self, *constraints: BusinessTimeConstraint) -> "BusinessTime":
        """Append constraints to the current set."""
        return self.set_constraints(*self.constraints, *constraints)

    @property
    def precision(self) -> Interval:
        return self._precision

    def set_precision(self, precision: Interval) -> "BusinessTime":
        """Replace the step size used by subsequent diffs."""
        if not isinstance(precision, Interval):
            raise InvalidArgument(f"Precision must be an Interval, got {precision!r}")
        self._precision = precision
        return self

    def copy(self, moment: Moment = None) -> "BusinessTime":
        """Return a new BusinessTime with the same configuration."""
        return BusinessTime(
            self.moment if moment is None else moment,
            constraints=self.constraints,
            precision=self._precision,
            parser=self._parser,
        )

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def is_business_time(self) -> bool:
        return self._constraint.is_business_time(self.moment)

    def narrate(self) -> str:
        """Describe this moment, e.g. "business time" or "the weekend"."""
        return self._constraint.narrate(self.moment)

    # ------------------------------------------------------------------
    # Diffing
    # ------------------------------------------------------------------

    def diff_in_business_minutes(self, other: Moment) -> int:
        """Business minutes between this moment and another, in either order."""
        return self._count_business_steps(other) * self._precision.to_minutes()

    def diff_in_business_hours(self, other: Moment) -> int:
        """
        Whole business hours between this moment and another.

        With a precision that does not divide an hour the total is floored.
        """
        return self.diff_in_business_minutes(other) // 60

    def diff_in_partial_business_hours(self, other: Moment) -> float:
        """Business hours between this moment and another, keeping fractions."""
        return self.diff_in_business_minutes(other) / 60.0

    def diff_in_business_time(
        self,
        other: Moment,
        interval: Optional[Interval] = None,
    ) -> float:
        """Business time between the two moments as a count of ``interval``."""
        interval = interval or self._precision
        return self.diff_in_business_minutes(other) / interval.to_minutes()

    def _count_business_steps(self, other: Moment) -> int:
        other_moment = self._to_datetime(other)
        start, end = sorted((self.moment, other_moment))
        step = self._precision.to_minutes()

        logger.debug(
            "Scanning %s to %s in %d-minute steps", start, end, step
        )

        return sum(
            1 for cursor in self._steps(start, end, step)
            if self._constraint.is_business_time(cursor)
        )

    @staticmethod
    def _steps(start: DateTime, end: DateTime, step: int) -> Iterator[DateTime]:
        """Yield the starting instant of every step in [start, end)."""
        cursor = start
        while cursor < end:
            yield cursor
            cursor = cursor.add(minutes=step)

    # ------------------------------------------------------------------
    # Moving by business time
    # ------------------------------------------------------------------

    def add_business_hours(self, hours: float) -> "BusinessTime":
        """Return a new BusinessTime after the given business hours have passed."""
        return self._move(round(hours * 60), forward=True)

    def sub_business_hours(self, hours: float) -> "BusinessTime":
        """Return a new BusinessTime the given business hours earlier."""
        return self._move(round(hours * 60), forward=False)

    def add_business_time(self, interval: Interval, count: int = 1) -> "BusinessTime":
        return self._move(interval.to_minutes() * count, forward=True)

    def sub_business_time(self, interval: Interval, count: int = 1) -> "BusinessTime":
        return self._move(interval.to_minutes() * count, forward=False)

    def _move(self, minutes: int, forward: bool) -> "BusinessTime":
        """
        Step in precision-sized slices until ``minutes`` of business time
        have been covered. Each slice is judged by its starting instant.
        """
        if minutes < 0:
            return self._move(-minutes, not forward)

        step = self._precision.to_minutes()
        cursor = self.moment
        covered = 0
        idle = 0

        while covered < minutes:
            slice_start = cursor if forward else cursor.subtract(minutes=step)
            if self._constraint.is_business_time(slice_start):
                covered += step
                idle = 0
            else:
                idle += step
                if idle > MAX_IDLE_MINUTES:
                    raise BusinessTimeError(
                        f"No business time found within a year of {cursor}"
                    )
            cursor = cursor.add(minutes=step) if forward else slice_start

        return self.copy(cursor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _to_datetime(self, moment: Moment) -> DateTime:
        if isinstance(moment, BusinessTime):
            return moment.moment
        if moment is None:
            return pendulum.now()
        if isinstance(moment, DateTime):
            return moment
        if isinstance(moment, datetime):
            return pendulum.instance(moment)
        if isinstance(moment, str):
            return self._parser(moment)
        raise InvalidArgument(f"Cannot use {moment!r} as a timestamp")

    def __eq__(self, other) -> bool:
        if not isinstance(other, BusinessTime):
            return NotImplemented
        return self.moment == other.moment

    def __hash__(self) -> int:
        return hash(self.moment)

    def __str__(self) -> str:
        return self.moment.to_iso8601_string()

    def __repr__(self) -> str:
        return f"BusinessTime('{self}', precision={self._precision})"
