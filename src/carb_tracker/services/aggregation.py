"""Pure aggregation functions over carb entries.

Every function works on a full snapshot of entries and recomputes from
scratch. Calendar days are taken in the given timezone, so an entry logged
at 23:30 local time counts towards that local day regardless of its UTC
offset.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from carb_tracker.domain.entries import CarbEntry, DayGroup
from carb_tracker.domain.stats import DailyTotal, DayExtreme, WeeklyAverage

DEFAULT_WINDOW_DAYS = 30
DAYS_PER_WEEK = 7


def local_day(timestamp: datetime, tz: ZoneInfo) -> date:
    """Return the calendar day of a timestamp in the given timezone."""
    return timestamp.astimezone(tz).date()


def total_for_day(entries: Iterable[CarbEntry], day: date, tz: ZoneInfo) -> float:
    """Sum the values of entries logged on ``day``."""
    return sum(
        (entry.value for entry in entries if local_day(entry.timestamp, tz) == day),
        0.0,
    )


def total_for_today(
    entries: Iterable[CarbEntry], tz: ZoneInfo, now: datetime
) -> float:
    return total_for_day(entries, now.astimezone(tz).date(), tz)


def group_by_day(entries: Iterable[CarbEntry], tz: ZoneInfo) -> list[DayGroup]:
    """Partition entries into day groups, newest day and newest entry first."""
    grouped: dict[date, DayGroup] = {}
    for entry in entries:
        day = local_day(entry.timestamp, tz)
        if day not in grouped:
            grouped[day] = DayGroup(day=day)
        grouped[day].entries.append(entry)

    groups = sorted(grouped.values(), key=lambda group: group.day, reverse=True)
    for group in groups:
        group.entries.sort(key=lambda entry: entry.timestamp, reverse=True)
    return groups


def daily_series(
    entries: Iterable[CarbEntry],
    tz: ZoneInfo,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[DailyTotal]:
    """Return one total per day for the trailing window, oldest first."""
    today = now.astimezone(tz).date()
    first_day = today - timedelta(days=window_days - 1)
    totals: dict[date, float] = {}
    for entry in entries:
        day = local_day(entry.timestamp, tz)
        if first_day <= day <= today:
            totals[day] = totals.get(day, 0.0) + entry.value

    daily = []
    for offset in range(window_days):
        day = first_day + timedelta(days=offset)
        daily.append(DailyTotal(day=day, total=totals.get(day, 0.0)))
    return daily


def week_start(day: date, first_week_day: int = 0) -> date:
    """Return the first day of the calendar week containing ``day``.

    ``first_week_day`` uses Python's weekday numbering (Monday is 0).
    """
    return day - timedelta(days=(day.weekday() - first_week_day) % DAYS_PER_WEEK)


def weekly_series(
    daily: Iterable[DailyTotal], first_week_day: int = 0
) -> list[WeeklyAverage]:
    """Average the daily totals per calendar week, oldest week first.

    Partial weeks at the edges of the series are averaged over the days
    the series contains for them.
    """
    weeks: dict[date, list[float]] = {}
    for item in daily:
        weeks.setdefault(week_start(item.day, first_week_day), []).append(item.total)
    return [
        WeeklyAverage(week_start=start, average=sum(totals) / len(totals))
        for start, totals in sorted(weeks.items())
    ]


def weekly_average(entries: Iterable[CarbEntry], tz: ZoneInfo, now: datetime) -> float:
    """Return the trailing seven day total divided by seven."""
    today = now.astimezone(tz).date()
    first_day = today - timedelta(days=DAYS_PER_WEEK - 1)
    week_total = sum(
        (
            entry.value
            for entry in entries
            if first_day <= local_day(entry.timestamp, tz) <= today
        ),
        0.0,
    )
    return week_total / DAYS_PER_WEEK


def monthly_total(entries: Iterable[CarbEntry], tz: ZoneInfo, now: datetime) -> float:
    """Return the total from the start of the current local month until now."""
    local_now = now.astimezone(tz)
    month_start = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return sum(
        (
            entry.value
            for entry in entries
            if month_start <= entry.timestamp.astimezone(tz) <= local_now
        ),
        0.0,
    )


def lowest_day(daily: Iterable[DailyTotal]) -> DayExtreme | None:
    """Return the day with the smallest positive total.

    Ties resolve to the first day in the series.
    """
    days_with_carbs = [item for item in daily if item.total > 0]
    if not days_with_carbs:
        return None
    lowest = min(days_with_carbs, key=lambda item: item.total)
    return DayExtreme(day=lowest.day, value=lowest.total)


def highest_day(daily: Iterable[DailyTotal]) -> DayExtreme | None:
    """Return the day with the largest total, or None if every day is zero.

    Ties resolve to the first day in the series.
    """
    items = list(daily)
    if not items:
        return None
    highest = max(items, key=lambda item: item.total)
    if highest.total <= 0:
        return None
    return DayExtreme(day=highest.day, value=highest.total)
