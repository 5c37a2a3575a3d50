"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date
from pathlib import Path
from typing import List

import pendulum
import yaml
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .adapters.timestamp_parser import PendulumTimestampParser
from .domain.constraints import (
    END_OF_DAY,
    BetweenTimesOfDay,
    BusinessTimeConstraint,
    Dates,
    DaysOfWeek,
    Not,
    WeekDays,
    parse_time_of_day,
)
from .domain.exceptions import InvalidArgument
from .domain.interval import Interval
from .services.business_time_factory import BusinessTimeFactory

WEEKDAY_INDEXES = [0, 1, 2, 3, 4]


class BusinessHoursConfig(BaseModel):
    """Which days and times of day count as business time."""
    start_time: str = "09:00"
    end_time: str = "17:00"
    working_days: List[int] = Field(default_factory=lambda: list(WEEKDAY_INDEXES))  # 0=Monday
    holidays: List[date] = Field(default_factory=list)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_of_day(cls, value: str, info: ValidationInfo) -> str:
        """Ensure the value is a recognisable time of day ("24:00" may end the day)."""
        if info.field_name == "end_time" and value.strip() == END_OF_DAY:
            return value
        try:
            parse_time_of_day(value)
        except InvalidArgument as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"working_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "UTC"
    precision: str = "1h"
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is known to pendulum."""
        try:
            pendulum.timezone(value)
        except (InvalidTimezone, ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @field_validator("precision")
    @classmethod
    def validate_precision(cls, value: str) -> str:
        """Ensure the precision is a positive interval such as '15m'."""
        try:
            Interval.parse(value)
        except InvalidArgument as exc:
            raise ValueError(str(exc)) from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a businesstime.yaml file or omit --config to use the defaults."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def get_precision(self) -> Interval:
        return Interval.parse(self.precision)

    def build_constraints(self) -> List[BusinessTimeConstraint]:
        """Translate the business hours section into constraints."""
        hours = self.business_hours

        if sorted(hours.working_days) == WEEKDAY_INDEXES:
            constraints: List[BusinessTimeConstraint] = [WeekDays()]
        else:
            constraints = [DaysOfWeek(*hours.working_days)]

        constraints.append(BetweenTimesOfDay(hours.start_time, hours.end_time))

        if hours.holidays:
            constraints.append(Not(Dates(
                *hours.holidays,
                business_narration="a holiday",
                non_business_narration="not a holiday",
            )))

        return constraints

    def build_factory(self) -> BusinessTimeFactory:
        """Create a factory producing BusinessTime values for this configuration."""
        return BusinessTimeFactory(
            constraints=self.build_constraints(),
            precision=self.get_precision(),
            parser=PendulumTimestampParser(tz=self.timezone),
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for businesstime.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "businesstime.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "businesstime.yaml"

    return config_path
