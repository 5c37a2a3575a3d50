"""
Constraints deciding whether an instant counts as business time.

Every constraint answers two questions about an instant: is it business
time, and how would you describe it in a couple of words. Constraints can be
nested with ``All``, ``Any`` and ``Not`` to build richer definitions, for
example "weekdays, 09:00 to 17:00, except bank holidays".
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Iterable, Optional, Tuple, Union

import pendulum
from pendulum import DateTime
from pendulum.parsing.exceptions import ParserError

from .exceptions import InvalidArgument

if TYPE_CHECKING:
    from .business_time import BusinessTime

TimeOfDay = Union[str, time]
Instant = Union[datetime, "BusinessTime"]

DAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)

# Exclusive upper bound covering the last minute of the day
END_OF_DAY = "24:00"
MINUTES_PER_DAY = 24 * 60

_NAMED_TIMES = {"noon": time(12, 0), "midnight": time(0, 0)}


def _is_meridiem(text: str) -> bool:
    """'9am', '12:30 pm' and the like."""
    clock = text[:-2].strip().replace(":", "")
    return text.endswith(("am", "pm")) and clock.isdigit()


def parse_time_of_day(value: TimeOfDay) -> time:
    """
    Parse a time of day such as ``"09:00"``, ``"17:30:00"``, ``"9am"``,
    ``"12:30pm"`` or ``"noon"``.

    Clock times come back from pendulum as ``Time``; 12-hour times go
    through its dateutil fallback and come back as a ``DateTime`` for today.

    Raises:
        InvalidArgument: If the value is not a recognisable time of day
    """
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise InvalidArgument(f"Time of day must be a string, got {value!r}")

    text = value.strip().lower()

    if text in _NAMED_TIMES:
        return _NAMED_TIMES[text]

    if not text:
        raise InvalidArgument(f"Cannot parse time of day: '{value}'")

    try:
        parsed = pendulum.parse(text, exact=True, strict=False)
    except (ParserError, ValueError, OverflowError) as exc:
        raise InvalidArgument(f"Cannot parse time of day: '{value}'") from exc

    if isinstance(parsed, DateTime):
        if not _is_meridiem(text):
            raise InvalidArgument(f"Not a time of day: '{value}'")
        return parsed.time()
    if isinstance(parsed, time):
        return time(parsed.hour, parsed.minute, parsed.second)

    raise InvalidArgument(f"Not a time of day: '{value}'")


def minute_of_day(moment: Union[datetime, time]) -> int:
    """Minutes since midnight, from the hour and minute only (0..1439)."""
    return moment.hour * 60 + moment.minute


def _instant(value: Instant) -> datetime:
    # BusinessTime wraps its timestamp in ``moment``
    return getattr(value, "moment", value)


class BusinessTimeConstraint(ABC):
    """
    Base class for business time constraints.

    Subclasses implement ``is_business_time``. Narration picks one of two
    phrases based on the verdict; both can be overridden per instance.
    """
    business_narration = "business time"
    non_business_narration = "outside business time"

    def __init__(
        self,
        *,
        business_narration: Optional[str] = None,
        non_business_narration: Optional[str] = None,
    ):
        if business_narration is not None:
            self.business_narration = business_narration
        if non_business_narration is not None:
            self.non_business_narration = non_business_narration

    @abstractmethod
    def is_business_time(self, moment: Instant) -> bool:
        """Whether the given instant (or BusinessTime) is business time."""

    def narrate(self, moment: Instant) -> str:
        """Describe the given instant in a short phrase."""
        if self.is_business_time(moment):
            return self.business_narration
        return self.non_business_narration

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AnyTime(BusinessTimeConstraint):
    """Every instant is business time."""
    business_narration = "any time"
    non_business_narration = "any time"

    def is_business_time(self, moment: Instant) -> bool:
        return True


class WeekDays(BusinessTimeConstraint):
    """Monday to Friday."""
    business_narration = "a weekday"
    non_business_narration = "the weekend"

    def is_business_time(self, moment: Instant) -> bool:
        return _instant(moment).weekday() < 5


class Weekends(BusinessTimeConstraint):
    """Saturday and Sunday."""
    business_narration = "the weekend"
    non_business_narration = "a weekday"

    def is_business_time(self, moment: Instant) -> bool:
        return _instant(moment).weekday() >= 5


class DaysOfWeek(BusinessTimeConstraint):
    """
    Specific days of the week, given as indexes (0=Monday, 6=Sunday) or as
    English day names.
    """
    business_narration = "a business day"
    non_business_narration = "not a business day"

    def __init__(self, *days: Union[int, str], **narration):
        super().__init__(**narration)
        self.days = frozenset(self._day_index(day) for day in days)

    @staticmethod
    def _day_index(day: Union[int, str]) -> int:
        if isinstance(day, str):
            name = day.strip().lower()
            for index, day_name in enumerate(DAY_NAMES):
                if name in (day_name, day_name[:3]):
                    return index
            raise InvalidArgument(f"Unknown day of week: '{day}'")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise InvalidArgument(f"Day of week must be between 0 and 6, got {day!r}")
        return day

    def is_business_time(self, moment: Instant) -> bool:
        return _instant(moment).weekday() in self.days

    def __repr__(self) -> str:
        return f"DaysOfWeek({', '.join(str(day) for day in sorted(self.days))})"


class BetweenTimesOfDay(BusinessTimeConstraint):
    """
    Times of day in the half-open window [min, max).

    An instant exactly at ``min`` is business time and one exactly at
    ``max`` is not, so back-to-back windows such as 09:00-17:00 and
    17:00-24:00 never both claim the boundary minute. ``"24:00"`` as the
    maximum closes the window at the end of the day. When ``min`` is at or
    after ``max`` no instant matches; for overnight shifts combine two
    windows, e.g. ``Any(BetweenTimesOfDay("22:00", "24:00"),
    BetweenTimesOfDay("00:00", "06:00"))``.
    """
    business_narration = "business hours"
    non_business_narration = "outside business hours"

    def __init__(
        self,
        min_time: TimeOfDay = "09:00",
        max_time: TimeOfDay = "17:00",
        **narration,
    ):
        super().__init__(**narration)
        self.min_time = parse_time_of_day(min_time)
        self._min_minute = minute_of_day(self.min_time)

        if isinstance(max_time, str) and max_time.strip() in (END_OF_DAY, END_OF_DAY + ":00"):
            self.max_time = time(0, 0)
            self._max_minute = MINUTES_PER_DAY
        else:
            self.max_time = parse_time_of_day(max_time)
            self._max_minute = minute_of_day(self.max_time)

    def minute_of_day(self, moment: Instant) -> int:
        return minute_of_day(_instant(moment))

    def is_business_time(self, moment: Instant) -> bool:
        return self._min_minute <= self.minute_of_day(moment) < self._max_minute

    @staticmethod
    def _format_minute(minute: int) -> str:
        return f"{minute // 60:02d}:{minute % 60:02d}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}('{self._format_minute(self._min_minute)}', "
            f"'{self._format_minute(self._max_minute)}')"
        )


class BetweenHoursOfDay(BetweenTimesOfDay):
    """Whole hours of the day in [min_hour, max_hour); 24 means the end of the day."""

    def __init__(self, min_hour: int = 9, max_hour: int = 17, **narration):
        for hour in (min_hour, max_hour):
            if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 24:
                raise InvalidArgument(f"Hour must be between 0 and 24, got {hour!r}")

        self.min_hour = min_hour
        self.max_hour = max_hour
        super().__init__(time(min_hour % 24), time(max_hour % 24), **narration)
        self._min_minute = min_hour * 60
        self._max_minute = max_hour * 60

    def __repr__(self) -> str:
        return f"BetweenHoursOfDay({self.min_hour}, {self.max_hour})"


class Dates(BusinessTimeConstraint):
    """
    Specific calendar dates, given as ``date`` objects or ``YYYY-MM-DD``
    strings. Use ``Not(Dates(...))`` to exclude holidays.
    """
    business_narration = "a listed date"
    non_business_narration = "an unlisted date"

    def __init__(self, *dates: Union[date, str], **narration):
        super().__init__(**narration)
        self.dates = frozenset(self._as_date(value) for value in dates)

    @staticmethod
    def _as_date(value: Union[date, str]) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError as exc:
            raise InvalidArgument(f"Cannot parse date: '{value}'") from exc

    def is_business_time(self, moment: Instant) -> bool:
        instant = _instant(moment)
        return date(instant.year, instant.month, instant.day) in self.dates

    def __repr__(self) -> str:
        return f"Dates({len(self.dates)} dates)"


class Not(BusinessTimeConstraint):
    """Inverts another constraint, narrating with the wrapped constraint's words."""

    def __init__(self, constraint: BusinessTimeConstraint, **narration):
        super().__init__(**narration)
        self.constraint = _check_constraint(constraint)
        self._custom_narration = bool(narration)

    def is_business_time(self, moment: Instant) -> bool:
        return not self.constraint.is_business_time(moment)

    def narrate(self, moment: Instant) -> str:
        if self._custom_narration:
            return super().narrate(moment)
        return self.constraint.narrate(moment)

    def __repr__(self) -> str:
        return f"Not({self.constraint!r})"


class _Composite(BusinessTimeConstraint):
    """Holds an ordered sequence of member constraints."""

    def __init__(self, *constraints: BusinessTimeConstraint, **narration):
        super().__init__(**narration)
        self.constraints: Tuple[BusinessTimeConstraint, ...] = tuple(
            _check_constraint(constraint) for constraint in constraints
        )

    def __iter__(self):
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)

    def __repr__(self) -> str:
        members = ", ".join(repr(constraint) for constraint in self.constraints)
        return f"{type(self).__name__}({members})"


class All(_Composite):
    """
    Business time only when every member agrees. With no members every
    instant is business time.

    Narration names the first member that rejects the instant, or the
    generic positive phrase when all accept it.
    """

    def is_business_time(self, moment: Instant) -> bool:
        return all(constraint.is_business_time(moment) for constraint in self.constraints)

    def narrate(self, moment: Instant) -> str:
        for constraint in self.constraints:
            if not constraint.is_business_time(moment):
                return constraint.narrate(moment)
        return self.business_narration


class Any(_Composite):
    """
    Business time when at least one member agrees. With no members no
    instant is business time.

    Narration names the first member that accepts the instant, or the
    generic negative phrase when none does.
    """

    def is_business_time(self, moment: Instant) -> bool:
        return any(constraint.is_business_time(moment) for constraint in self.constraints)

    def narrate(self, moment: Instant) -> str:
        for constraint in self.constraints:
            if constraint.is_business_time(moment):
                return constraint.narrate(moment)
        return self.non_business_narration


def _check_constraint(constraint) -> BusinessTimeConstraint:
    if not isinstance(constraint, BusinessTimeConstraint):
        raise InvalidArgument(f"Not a business time constraint: {constraint!r}")
    return constraint


def default_constraints() -> Tuple[BusinessTimeConstraint, ...]:
    """Monday to Friday, 09:00 to 17:00."""
    return (WeekDays(), BetweenTimesOfDay())


def check_constraints(constraints: Iterable[BusinessTimeConstraint]) -> Tuple[BusinessTimeConstraint, ...]:
    """Validate and freeze a sequence of constraints."""
    return tuple(_check_constraint(constraint) for constraint in constraints)
