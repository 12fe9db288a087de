"""Today summaries for widgets, the watch and voice shortcuts."""

from dataclasses import dataclass

from carb_tracker.domain.entries import CarbEntry
from carb_tracker.domain.thresholds import DisplayClass, ThresholdSettings
from carb_tracker.services import aggregation
from carb_tracker.services.formatting import format_grams, format_spoken_grams
from carb_tracker.services.stats import StatsService
from carb_tracker.services.thresholds import ThresholdService, evaluate

WARNING_MESSAGE = "⚠️\nYou are exceeding\nyour carb limit"


@dataclass(frozen=True)
class TodaySnapshot:
    """Everything a glanceable view needs about today."""

    total: float
    total_text: str
    entry_count: int
    display_class: DisplayClass
    is_exceeding_warn: bool
    is_exceeding_caution: bool
    thresholds: ThresholdSettings
    revision: int

    @property
    def show_warning_icon(self) -> bool:
        return self.display_class == DisplayClass.WARNING

    def as_dict(self) -> dict[str, object]:
        return {
            "total": self.total,
            "total_text": self.total_text,
            "entry_count": self.entry_count,
            "display_class": self.display_class.value,
            "is_exceeding_warn": self.is_exceeding_warn,
            "is_exceeding_caution": self.is_exceeding_caution,
            "show_warning_icon": self.show_warning_icon,
            "warning_message": WARNING_MESSAGE if self.show_warning_icon else None,
            "warn_limit": self.thresholds.warn_limit,
            "caution_limit": self.thresholds.caution_limit,
            "revision": self.revision,
        }


@dataclass
class SummaryService:
    """Builds today snapshots and spoken summaries."""

    stats_service: StatsService
    threshold_service: ThresholdService

    def today(self) -> TodaySnapshot:
        entry_service = self.stats_service.entry_service
        entries = entry_service.list_entries()
        tz = self.stats_service.tz
        today = self.stats_service.now().astimezone(tz).date()
        todays_entries = [
            entry
            for entry in entries
            if aggregation.local_day(entry.timestamp, tz) == today
        ]
        total = aggregation.total_for_day(todays_entries, today, tz)
        thresholds = self.threshold_service.get_thresholds()
        status = evaluate(total, thresholds)
        return TodaySnapshot(
            total=total,
            total_text=format_grams(total, self.stats_service.locale),
            entry_count=len(todays_entries),
            display_class=status.display_class,
            is_exceeding_warn=status.is_exceeding_warn,
            is_exceeding_caution=status.is_exceeding_caution,
            thresholds=thresholds,
            revision=entry_service.notifier.revision,
        )

    def daily_summary_message(self) -> str:
        """Return the spoken answer to "how many carbs today"."""
        snapshot = self.today()
        if snapshot.entry_count == 0:
            return "You haven't logged any carbs today."
        thresholds = snapshot.thresholds
        total_text = format_spoken_grams(snapshot.total)
        remaining = max(0.0, thresholds.warn_limit - snapshot.total)
        status = ""
        if snapshot.is_exceeding_warn:
            over = snapshot.total - thresholds.warn_limit
            status = f" You're {format_spoken_grams(over)} grams over your limit."
        elif snapshot.is_exceeding_caution:
            status = " You're approaching your limit."
        elif remaining > 0:
            status = f" You have {format_spoken_grams(remaining)} grams remaining."
        noun = "entry" if snapshot.entry_count == 1 else "entries"
        return (
            f"Today you've consumed {total_text} grams of carbs from "
            f"{snapshot.entry_count} {noun}.{status}"
        )


def logged_message(entry: CarbEntry) -> str:
    """Return the spoken confirmation after a shortcut logged an entry."""
    return f"Logged {format_spoken_grams(entry.value)} grams of carbs"
