"""
Timestamp parsing adapter built on pendulum.

Turns flexible strings ("now", "noon", "9am", "Monday 2018-05-14 09:00",
"20th May 2018 10:00") into pendulum DateTimes. The engine only depends on
the ``TimestampParser`` protocol, so another parser can be injected.
"""

import logging
from typing import Protocol

import pendulum
from pendulum import DateTime
from pendulum.parsing.exceptions import ParserError
from pendulum.tz.exceptions import InvalidTimezone

from ..domain.constraints import DAY_NAMES, parse_time_of_day
from ..domain.exceptions import InvalidArgument, UnparseableTimestamp

logger = logging.getLogger(__name__)

_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "yesterday": -1}


class TimestampParser(Protocol):
    """Protocol describing what the engine needs from a parser."""

    def __call__(self, text: str) -> DateTime:
        """Return the timestamp described by ``text``."""


class PendulumTimestampParser:
    """
    Parse timestamps with pendulum, falling back to dateutil for free-form
    dates.

    Args:
        tz: Timezone used for relative terms and for strings without an offset

    Raises:
        InvalidArgument: If the timezone is unknown
    """

    def __init__(self, tz: str = "UTC"):
        try:
            self.tz = pendulum.timezone(tz)
        except (InvalidTimezone, ValueError, KeyError) as exc:
            raise InvalidArgument(f"Unknown timezone: '{tz}'") from exc

    def __call__(self, text: str) -> DateTime:
        return self.parse(text)

    def parse(self, text: str) -> DateTime:
        """
        Parse a timestamp string.

        Raises:
            UnparseableTimestamp: If the text cannot be read as a timestamp
        """
        if not isinstance(text, str) or not text.strip():
            raise UnparseableTimestamp(f"Cannot parse timestamp: {text!r}")

        cleaned = " ".join(text.split())
        lowered = cleaned.lower()

        if lowered == "now":
            return pendulum.now(self.tz)

        if lowered in _RELATIVE_DAYS:
            return pendulum.today(self.tz).add(days=_RELATIVE_DAYS[lowered])

        weekday, remainder = self._split_weekday(cleaned)

        moment = self._parse_time_of_day(remainder)
        if moment is None:
            moment = self._parse_date(remainder, original=text)

        if weekday is not None:
            # Like "next Monday" when the date falls on another weekday
            moment = moment.add(days=(weekday - moment.weekday()) % 7)

        return moment

    @staticmethod
    def _split_weekday(text: str):
        head, _, tail = text.partition(" ")
        name = head.rstrip(",").lower()
        for index, day_name in enumerate(DAY_NAMES):
            if name in (day_name, day_name[:3]):
                return index, tail.strip() or "today"
        return None, text

    def _parse_time_of_day(self, text: str):
        if text.lower() in _RELATIVE_DAYS:
            return pendulum.today(self.tz).add(days=_RELATIVE_DAYS[text.lower()])
        try:
            time_of_day = parse_time_of_day(text)
        except InvalidArgument:
            return None
        return pendulum.today(self.tz).at(time_of_day.hour, time_of_day.minute)

    def _parse_date(self, text: str, original: str) -> DateTime:
        try:
            parsed = pendulum.parse(text, tz=self.tz, strict=False)
        except (ParserError, ValueError, OverflowError) as exc:
            raise UnparseableTimestamp(f"Cannot parse timestamp: '{original}'") from exc

        if not isinstance(parsed, DateTime):
            if isinstance(parsed, pendulum.Date):
                return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=self.tz)
            raise UnparseableTimestamp(f"Not a point in time: '{original}'")

        logger.debug("Parsed '%s' as %s", original, parsed)
        return parsed
