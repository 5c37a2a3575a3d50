"""
Tests for business time constraints.
"""

from datetime import date, time

import pendulum
import pytest

from businesstime.adapters.timestamp_parser import PendulumTimestampParser
from businesstime.domain.business_time import BusinessTime
from businesstime.domain.constraints import (
    All,
    Any,
    AnyTime,
    BetweenHoursOfDay,
    BetweenTimesOfDay,
    Dates,
    DaysOfWeek,
    Not,
    WeekDays,
    Weekends,
    parse_time_of_day,
)
from businesstime.domain.exceptions import InvalidArgument


def at(time_of_day: str, day: str = "2018-05-14"):
    """A Monday (by default) at the given time of day."""
    return pendulum.parse(f"{day} {time_of_day}", tz="UTC")


class TestBetweenTimesOfDay:
    """Tests for the half-open time of day window."""

    @pytest.mark.parametrize(
        "min_time, max_time, moment, should_match",
        [
            ("09:00", "17:00", "12:00", True),
            ("09:00", "17:00", "08:59", False),
            ("09:00", "17:00", "09:00", True),
            ("09:00", "17:00", "15:30", True),
            ("09:00", "17:00", "17:00", False),
            ("09:00", "17:00", "17:01", False),
            ("09:30", "17:30", "09:29", False),
            ("09:30", "17:30", "09:30", True),
            ("09:30", "17:30", "17:29", True),
            ("09:30", "17:30", "17:30", False),
            ("00:00", "23:59", "00:00", True),
            ("00:00", "23:59", "23:58", True),
        ],
    )
    def test_between_times_of_day(self, min_time, max_time, moment, should_match):
        """The window includes its start and excludes its end."""
        constraint = BetweenTimesOfDay(min_time, max_time)

        assert constraint.is_business_time(BusinessTime(at(moment))) is should_match

    @pytest.mark.parametrize(
        "moment, expected_narration",
        [
            ("08:00", "outside business hours"),
            ("08:59", "outside business hours"),
            ("09:00", "business hours"),
            ("09:01", "business hours"),
            ("13:00", "business hours"),
            ("16:00", "business hours"),
            ("16:59", "business hours"),
            ("17:00", "outside business hours"),
            ("17:01", "outside business hours"),
            ("23:00", "outside business hours"),
        ],
    )
    def test_default_narration(self, moment, expected_narration):
        """Defaults to 09:00-17:00 and narrates business hours."""
        assert BetweenTimesOfDay().narrate(BusinessTime(at(moment))) == expected_narration

    def test_narration_at_custom_boundary(self):
        """Narration follows the configured window."""
        constraint = BetweenTimesOfDay("09:30", "17:30")

        assert constraint.narrate(at("17:29")) == "business hours"
        assert constraint.narrate(at("17:30")) == "outside business hours"

    @pytest.mark.parametrize(
        "moment, expected_minute",
        [
            ("00:00", 0),
            ("00:01", 1),
            ("00:30", 30),
            ("01:00", 60),
            ("01:30", 90),
            ("06:00", 360),
            ("08:00", 480),
            ("09:00", 540),
            ("9am", 540),
            ("12:00", 720),
            ("noon", 720),
            ("17:00", 1020),
            ("5pm", 1020),
            ("23:59", 1439),
        ],
    )
    def test_minute_of_day(self, moment, expected_minute):
        """Minute of the day counts from midnight using hour and minute only."""
        parsed = PendulumTimestampParser(tz="Europe/London")(moment)

        assert BetweenTimesOfDay().minute_of_day(parsed) == expected_minute

    def test_minute_of_day_ignores_seconds(self):
        """Seconds never push an instant into the next minute."""
        moment = pendulum.datetime(2018, 5, 14, 16, 59, 59)

        assert BetweenTimesOfDay().minute_of_day(moment) == 1019
        assert BetweenTimesOfDay().is_business_time(moment)

    def test_back_to_back_windows_partition_the_day(self):
        """Adjacent shifts never both claim the boundary minute."""
        day_shift = BetweenTimesOfDay("09:00", "17:00")
        late_shift = BetweenTimesOfDay("17:00", "23:00")

        for moment in ("16:59", "17:00", "17:01"):
            verdicts = [day_shift.is_business_time(at(moment)), late_shift.is_business_time(at(moment))]
            assert verdicts.count(True) == 1

    def test_min_after_max_matches_nothing(self):
        """An inverted window is empty rather than an error."""
        constraint = BetweenTimesOfDay("17:00", "01:00")

        assert not constraint.is_business_time(at("18:00"))
        assert not constraint.is_business_time(at("00:30"))

    def test_equal_bounds_match_nothing(self):
        """A zero-width window never matches."""
        assert not BetweenTimesOfDay("09:00", "09:00").is_business_time(at("09:00"))

    def test_accepts_times_with_seconds(self):
        """Clock times may carry a seconds component."""
        constraint = BetweenTimesOfDay("09:00:00", "17:30:00")

        assert constraint.is_business_time(at("09:00"))
        assert constraint.is_business_time(at("17:29"))
        assert not constraint.is_business_time(at("17:30"))

    def test_end_of_day_maximum(self):
        """A maximum of 24:00 closes the window after the last minute of the day."""
        constraint = BetweenTimesOfDay("22:00", "24:00")

        assert constraint.is_business_time(at("23:59"))
        assert not constraint.is_business_time(at("00:00"))
        assert not constraint.is_business_time(at("21:59"))
        assert repr(constraint) == "BetweenTimesOfDay('22:00', '24:00')"

    def test_accepts_time_objects(self):
        """Times of day may be given as datetime.time."""
        constraint = BetweenTimesOfDay(time(8, 0), time(12, 0))

        assert constraint.is_business_time(at("08:00"))
        assert not constraint.is_business_time(at("12:00"))

    @pytest.mark.parametrize("bad", ["", "9", "25:00", "12:60", "13pm", "teatime", None])
    def test_unparseable_time_of_day_raises(self, bad):
        """Malformed times of day fail at construction."""
        with pytest.raises(InvalidArgument):
            BetweenTimesOfDay(bad, "17:00")


class TestParseTimeOfDay:
    """Tests for time of day parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("09:00", time(9, 0)),
            ("9:05", time(9, 5)),
            ("9am", time(9, 0)),
            ("12am", time(0, 0)),
            ("12pm", time(12, 0)),
            ("12:30pm", time(12, 30)),
            ("5 PM", time(17, 0)),
            ("17:30:00", time(17, 30)),
            ("noon", time(12, 0)),
            ("midnight", time(0, 0)),
        ],
    )
    def test_parse_time_of_day(self, text, expected):
        assert parse_time_of_day(text) == expected


class TestBetweenHoursOfDay:
    """Tests for whole-hour windows."""

    def test_whole_hours(self):
        constraint = BetweenHoursOfDay(8, 18)

        assert constraint.is_business_time(at("08:00"))
        assert constraint.is_business_time(at("17:59"))
        assert not constraint.is_business_time(at("18:00"))

    def test_twenty_four_means_end_of_day(self):
        constraint = BetweenHoursOfDay(20, 24)

        assert constraint.is_business_time(at("23:59"))
        assert not constraint.is_business_time(at("00:00"))

    @pytest.mark.parametrize("min_hour, max_hour", [(24, 24), (24, 9), (17, 17), (17, 9)])
    def test_empty_or_inverted_windows_match_nothing(self, min_hour, max_hour):
        """A minimum of 24 is the end of the day, not midnight at the start."""
        constraint = BetweenHoursOfDay(min_hour, max_hour)

        for moment in ("00:00", "08:59", "10:00", "17:00", "23:59"):
            assert not constraint.is_business_time(at(moment))

    @pytest.mark.parametrize("hour", [-1, 25, 9.5])
    def test_rejects_invalid_hours(self, hour):
        with pytest.raises(InvalidArgument, match="Hour must be between"):
            BetweenHoursOfDay(hour, 17)


class TestDayConstraints:
    """Tests for weekday, weekend and day of week constraints."""

    def test_weekdays(self):
        """Monday to Friday are weekdays."""
        constraint = WeekDays()

        assert constraint.is_business_time(at("12:00", "2018-05-14"))  # Monday
        assert constraint.is_business_time(at("12:00", "2018-05-18"))  # Friday
        assert not constraint.is_business_time(at("12:00", "2018-05-19"))  # Saturday
        assert constraint.narrate(at("12:00", "2018-05-20")) == "the weekend"
        assert constraint.narrate(at("12:00", "2018-05-16")) == "a weekday"

    def test_weekends(self):
        constraint = Weekends()

        assert constraint.is_business_time(at("12:00", "2018-05-19"))
        assert constraint.is_business_time(at("12:00", "2018-05-20"))
        assert not constraint.is_business_time(at("12:00", "2018-05-21"))

    def test_days_of_week_by_index_and_name(self):
        """Days may be given as indexes or names."""
        constraint = DaysOfWeek(0, "wednesday", "Sat")

        assert constraint.is_business_time(at("12:00", "2018-05-14"))  # Monday
        assert constraint.is_business_time(at("12:00", "2018-05-16"))  # Wednesday
        assert constraint.is_business_time(at("12:00", "2018-05-19"))  # Saturday
        assert not constraint.is_business_time(at("12:00", "2018-05-15"))  # Tuesday
        assert constraint.narrate(at("12:00", "2018-05-15")) == "not a business day"

    @pytest.mark.parametrize("day", [7, -1, "funday"])
    def test_days_of_week_rejects_invalid_days(self, day):
        with pytest.raises(InvalidArgument):
            DaysOfWeek(day)

    def test_dates(self):
        """Specific dates match regardless of time of day."""
        constraint = Dates("2018-05-14", date(2018, 12, 25))

        assert constraint.is_business_time(at("00:00", "2018-05-14"))
        assert constraint.is_business_time(at("23:59", "2018-12-25"))
        assert not constraint.is_business_time(at("12:00", "2018-05-15"))

    def test_dates_rejects_garbage(self):
        with pytest.raises(InvalidArgument, match="Cannot parse date"):
            Dates("next tuesday")


class TestCompositeConstraints:
    """Tests for All, Any and Not."""

    def test_all_requires_every_member(self):
        constraint = All(WeekDays(), BetweenTimesOfDay())

        assert constraint.is_business_time(at("10:00", "2018-05-14"))
        assert not constraint.is_business_time(at("10:00", "2018-05-19"))
        assert not constraint.is_business_time(at("18:00", "2018-05-14"))

    def test_all_narrates_the_failing_member(self):
        """Negative verdicts are explained by the first member that rejects them."""
        constraint = All(WeekDays(), BetweenTimesOfDay())

        assert constraint.narrate(at("10:00", "2018-05-14")) == "business time"
        assert constraint.narrate(at("18:00", "2018-05-14")) == "outside business hours"
        assert constraint.narrate(at("18:00", "2018-05-19")) == "the weekend"

    def test_empty_all_is_always_business_time(self):
        assert All().is_business_time(at("03:00", "2018-05-20"))

    def test_any_requires_one_member(self):
        """Overnight shifts can be modelled as two windows."""
        overnight = Any(BetweenTimesOfDay("22:00", "24:00"), BetweenTimesOfDay("00:00", "06:00"))

        assert overnight.is_business_time(at("22:30"))
        assert overnight.is_business_time(at("23:59"))
        assert overnight.is_business_time(at("00:00"))
        assert overnight.is_business_time(at("05:59"))
        assert not overnight.is_business_time(at("06:00"))
        assert overnight.narrate(at("22:30")) == "business hours"
        assert overnight.narrate(at("12:00")) == "outside business time"

    def test_empty_any_is_never_business_time(self):
        assert not Any().is_business_time(at("12:00"))

    def test_not_inverts_and_keeps_narration(self):
        """Holidays are the negation of a list of dates."""
        holidays = Not(Dates("2018-05-14", business_narration="a holiday"))

        assert not holidays.is_business_time(at("12:00", "2018-05-14"))
        assert holidays.is_business_time(at("12:00", "2018-05-15"))
        assert holidays.narrate(at("12:00", "2018-05-14")) == "a holiday"

    def test_nested_composites(self):
        constraint = All(Any(WeekDays(), Dates("2018-05-19")), BetweenTimesOfDay())

        assert constraint.is_business_time(at("10:00", "2018-05-19"))
        assert not constraint.is_business_time(at("10:00", "2018-05-20"))

    def test_any_time(self):
        assert AnyTime().is_business_time(at("03:00", "2018-05-20"))
        assert AnyTime().narrate(at("03:00")) == "any time"

    def test_members_must_be_constraints(self):
        with pytest.raises(InvalidArgument, match="Not a business time constraint"):
            All(WeekDays(), "weekdays")

    def test_narration_overrides(self):
        constraint = WeekDays(business_narration="open", non_business_narration="closed")

        assert constraint.narrate(at("12:00", "2018-05-14")) == "open"
        assert constraint.narrate(at("12:00", "2018-05-19")) == "closed"
