"""Statistics service for carb entries."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from babel import Locale

from carb_tracker.domain.entries import DayGroup
from carb_tracker.domain.stats import CarbStatistics
from carb_tracker.services import aggregation
from carb_tracker.services.entries import EntryService


def first_week_day(locale_name: str) -> int:
    """Return the locale's first day of week, Monday being 0."""
    return Locale.parse(locale_name).first_week_day


@dataclass
class StatsService:
    """Service for computing carb statistics in the configured timezone."""

    entry_service: EntryService
    timezone_name: str = "UTC"
    locale: str = "en_US"
    window_days: int = aggregation.DEFAULT_WINDOW_DAYS
    clock: Callable[[], datetime] | None = None

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    def now(self) -> datetime:
        if self.clock is not None:
            return self.clock()
        return datetime.now(tz=UTC)

    def get_today_total(self) -> float:
        """Return today's total in the configured timezone."""
        entries = self.entry_service.list_entries()
        return aggregation.total_for_today(entries, self.tz, self.now())

    def get_history(self) -> list[DayGroup]:
        """Return all entries grouped by day, newest first."""
        return aggregation.group_by_day(self.entry_service.list_entries(), self.tz)

    def get_statistics(self) -> CarbStatistics:
        """Return the daily and weekly series with summary figures."""
        entries = self.entry_service.list_entries()
        tz = self.tz
        now = self.now()
        daily = aggregation.daily_series(entries, tz, now, self.window_days)
        return CarbStatistics(
            daily=daily,
            weekly=aggregation.weekly_series(daily, first_week_day(self.locale)),
            weekly_average=aggregation.weekly_average(entries, tz, now),
            monthly_total=aggregation.monthly_total(entries, tz, now),
            lowest_day=aggregation.lowest_day(daily),
            highest_day=aggregation.highest_day(daily),
        )
