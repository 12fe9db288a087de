"""Domain models for carb statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotal:
    """Total grams for one calendar day."""

    day: date
    total: float


@dataclass(frozen=True)
class WeeklyAverage:
    """Average daily grams for one calendar week."""

    week_start: date
    average: float


@dataclass(frozen=True)
class DayExtreme:
    """The lowest or highest day in a series."""

    day: date
    value: float


@dataclass(frozen=True)
class CarbStatistics:
    daily: list[DailyTotal]
    weekly: list[WeeklyAverage]
    weekly_average: float
    monthly_total: float
    lowest_day: DayExtreme | None
    highest_day: DayExtreme | None
