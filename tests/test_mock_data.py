"""Tests for mock data generation."""

import random
from zoneinfo import ZoneInfo

import pytest

from carb_tracker.services import aggregation
from carb_tracker.services.entries import EntryService
from carb_tracker.services.mock_data import (
    COMMON_VALUES,
    VARIABLE_VALUES,
    MockDataGenerator,
    Scenario,
    load_mock_data,
)
from tests.conftest import FIXED_NOW

UTC_ZONE = ZoneInfo("UTC")


def _generator(seed: int = 7) -> MockDataGenerator:
    return MockDataGenerator(tz=UTC_ZONE, rng=random.Random(seed))


@pytest.mark.parametrize("scenario", list(Scenario))
def test_generate_covers_every_day(scenario: Scenario) -> None:
    entries = _generator().generate(FIXED_NOW, days=10, scenario=scenario)

    groups = aggregation.group_by_day(entries, UTC_ZONE)

    assert len(groups) == 10
    assert groups[0].day == FIXED_NOW.date()
    assert all(entry.value in VARIABLE_VALUES for entry in entries)


def test_random_scenario_uses_common_values() -> None:
    entries = _generator().generate(FIXED_NOW, days=5)

    groups = aggregation.group_by_day(entries, UTC_ZONE)

    assert all(entry.value in COMMON_VALUES for entry in entries)
    assert all(3 <= len(group.entries) <= 5 for group in groups)


def test_increasing_trend_rises_towards_today() -> None:
    entries = _generator().generate(
        FIXED_NOW, days=30, scenario=Scenario.INCREASING_TREND
    )
    groups = aggregation.group_by_day(entries, UTC_ZONE)

    def average(group_slice) -> float:  # type: ignore[no-untyped-def]
        values = [entry.value for group in group_slice for entry in group.entries]
        return sum(values) / len(values)

    assert average(groups[:7]) > average(groups[-7:])


def test_load_mock_data_replaces_existing_entries(entry_service: EntryService) -> None:
    entry_service.add_carbs(99.0)

    created = load_mock_data(entry_service, _generator(), now=FIXED_NOW, days=3)

    values = [entry.value for entry in entry_service.list_entries()]
    assert created == len(values)
    assert 99.0 not in values


def test_load_mock_data_can_keep_existing_entries(entry_service: EntryService) -> None:
    entry_service.add_carbs(99.0)

    created = load_mock_data(
        entry_service, _generator(), now=FIXED_NOW, days=2, clear_existing=False
    )

    assert len(entry_service.list_entries()) == created + 1
