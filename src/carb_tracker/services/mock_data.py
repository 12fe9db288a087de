"""Mock carb entries for development and demos."""

import random
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from carb_tracker.domain.entries import CarbEntry
from carb_tracker.services.entries import EntryService

COMMON_VALUES = [0.1, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
VARIABLE_VALUES = [*COMMON_VALUES, 8.0, 10.0]
DEFAULT_DAYS = 35


class Scenario(str, Enum):
    """Patterns of generated intake."""

    RANDOM = "random"
    INCREASING_TREND = "increasing_trend"
    DECREASING_TREND = "decreasing_trend"
    HIGH_VARIABILITY = "high_variability"


@dataclass
class MockDataGenerator:
    """Builds plausible entries for the trailing ``days`` local days."""

    tz: ZoneInfo
    rng: random.Random = field(default_factory=random.Random)

    def generate(
        self,
        now: datetime,
        days: int = DEFAULT_DAYS,
        scenario: Scenario = Scenario.RANDOM,
    ) -> list[CarbEntry]:
        today = now.astimezone(self.tz).date()
        entries: list[CarbEntry] = []
        for day_offset in range(days):
            day = today - timedelta(days=day_offset)
            for _ in range(self._entry_count(scenario)):
                value = self._value(scenario, day_offset, days)
                hour_low, hour_high = _HOURS[scenario]
                hour = self.rng.randint(hour_low, hour_high)
                at = time(hour, self.rng.randint(0, 59))
                timestamp = datetime.combine(day, at, tzinfo=self.tz)
                entries.append(CarbEntry(timestamp=timestamp, value=value))
        return entries

    def _entry_count(self, scenario: Scenario) -> int:
        if scenario == Scenario.HIGH_VARIABILITY:
            return self.rng.randint(2, 7)
        return self.rng.randint(3, 5)

    def _value(self, scenario: Scenario, day_offset: int, days: int) -> float:
        if scenario == Scenario.RANDOM:
            return self.rng.choice(COMMON_VALUES)
        if scenario == Scenario.HIGH_VARIABILITY:
            return self.rng.choice(VARIABLE_VALUES)
        # Recent days sit near the top of the list for an increasing trend.
        progress = (days - day_offset) / days
        if scenario == Scenario.DECREASING_TREND:
            progress = 1.0 - progress
        last_index = len(COMMON_VALUES) - 1
        index = min(int(progress * last_index), last_index)
        jittered = index + self.rng.randint(-1, 1)
        return COMMON_VALUES[max(0, min(jittered, last_index))]


_HOURS = {
    Scenario.RANDOM: (6, 22),
    Scenario.INCREASING_TREND: (7, 21),
    Scenario.DECREASING_TREND: (7, 21),
    Scenario.HIGH_VARIABILITY: (6, 23),
}


def load_mock_data(
    entry_service: EntryService,
    generator: MockDataGenerator,
    now: datetime,
    days: int = DEFAULT_DAYS,
    scenario: Scenario = Scenario.RANDOM,
    clear_existing: bool = True,
) -> int:
    """Replace (or extend) stored entries with generated ones."""
    if clear_existing:
        entry_service.clear()
    return entry_service.seed(generator.generate(now, days=days, scenario=scenario))
