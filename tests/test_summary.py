"""Tests for today snapshots and spoken summaries."""

from datetime import UTC, datetime, timedelta

from carb_tracker.domain.thresholds import DisplayClass
from carb_tracker.services.entries import EntryService
from carb_tracker.services.stats import StatsService
from carb_tracker.services.summary import (
    WARNING_MESSAGE,
    SummaryService,
    logged_message,
)
from carb_tracker.services.thresholds import ThresholdService
from tests.conftest import FIXED_NOW, InMemoryThresholdRepository, make_entry


def _summary(entry_service: EntryService, **thresholds: object) -> SummaryService:
    stats_service = StatsService(entry_service=entry_service, clock=lambda: FIXED_NOW)
    threshold_service = ThresholdService(InMemoryThresholdRepository())
    if thresholds:
        threshold_service.update_thresholds(**thresholds)
    return SummaryService(stats_service, threshold_service)


def test_today_snapshot_counts_only_today(entry_service) -> None:
    entry_service.seed(
        [
            make_entry(FIXED_NOW - timedelta(hours=2), 6.0),
            make_entry(FIXED_NOW - timedelta(days=1), 40.0),
        ]
    )
    entry_service.add_carbs(10.5)

    snapshot = _summary(entry_service).today()

    assert snapshot.total == 16.5
    assert snapshot.total_text == "16.5g"
    assert snapshot.entry_count == 2
    assert snapshot.display_class == DisplayClass.CAUTION
    assert snapshot.show_warning_icon is False
    assert snapshot.revision == 2


def test_today_snapshot_warning_payload(entry_service) -> None:
    entry_service.add_carbs(25.0)

    payload = _summary(entry_service).today().as_dict()

    assert payload["display_class"] == "warning"
    assert payload["show_warning_icon"] is True
    assert payload["warning_message"] == WARNING_MESSAGE
    assert payload["warn_limit"] == 20.0


def test_today_snapshot_uses_local_day(entry_service) -> None:
    # 16:00 UTC on the 14th is already the 15th in Tokyo.
    entry_service.seed([make_entry(datetime(2024, 3, 14, 16, 0, tzinfo=UTC), 5.0)])
    stats_service = StatsService(
        entry_service=entry_service,
        timezone_name="Asia/Tokyo",
        clock=lambda: FIXED_NOW,
    )
    service = SummaryService(
        stats_service, ThresholdService(InMemoryThresholdRepository())
    )

    assert service.today().total == 5.0


def test_daily_summary_without_entries(entry_service) -> None:
    message = _summary(entry_service).daily_summary_message()

    assert message == "You haven't logged any carbs today."


def test_daily_summary_with_remaining_budget(entry_service) -> None:
    entry_service.add_carbs(4.0)

    message = _summary(entry_service).daily_summary_message()

    assert message == (
        "Today you've consumed 4 grams of carbs from 1 entry. "
        "You have 16 grams remaining."
    )


def test_daily_summary_approaching_limit(entry_service) -> None:
    entry_service.add_carbs(10.0)
    entry_service.add_carbs(6.5)

    message = _summary(entry_service).daily_summary_message()

    assert message == (
        "Today you've consumed 16.5 grams of carbs from 2 entries. "
        "You're approaching your limit."
    )


def test_daily_summary_over_limit(entry_service) -> None:
    entry_service.add_carbs(23.5)

    message = _summary(entry_service, warn_limit=20.0).daily_summary_message()

    assert message.endswith("You're 3.5 grams over your limit.")


def test_logged_message() -> None:
    entry = make_entry(FIXED_NOW, 12.0)

    assert logged_message(entry) == "Logged 12 grams of carbs"
