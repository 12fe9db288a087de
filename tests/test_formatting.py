"""Tests for rounding and display formatting."""

import math

import pytest

from carb_tracker.domain.thresholds import ThresholdSettings
from carb_tracker.services.formatting import (
    format_day_total,
    format_grams,
    format_spoken_grams,
    round_for_storage,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12.555, 12.56),
        (12.554, 12.55),
        (5.125, 5.13),
        (0.005, 0.01),
        (0.004, 0.0),
        (1.0, 1.0),
        (-2.345, -2.35),
    ],
)
def test_round_for_storage_half_away_from_zero(value: float, expected: float) -> None:
    assert round_for_storage(value) == expected


def test_round_for_storage_is_idempotent() -> None:
    for value in [0.1, 12.555, 3.14159, 99.995, 1e-9, 123456.789]:
        once = round_for_storage(value)
        assert round_for_storage(once) == once


def test_round_for_storage_normalises_negative_zero() -> None:
    rounded = round_for_storage(-0.001)

    assert rounded == 0.0
    assert math.copysign(1.0, rounded) == 1.0


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_round_for_storage_rejects_non_finite(value: float) -> None:
    with pytest.raises(ValueError):
        round_for_storage(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12.5, "12.5g"),
        (10.0, "10g"),
        (12.555, "12.56g"),
        (0, "0g"),
        (-1, "-1g"),
        (1234.5, "1234.5g"),
        (0.1, "0.1g"),
    ],
)
def test_format_grams(value: float, expected: str) -> None:
    assert format_grams(value) == expected


def test_format_grams_uses_locale_decimal_separator() -> None:
    assert format_grams(12.5, locale="de_DE") == "12,5g"
    assert format_grams(1234.56, locale="de_DE") == "1234,56g"


def test_format_grams_drops_trailing_fraction_zeros() -> None:
    assert format_grams(1.0) == "1g"
    assert format_grams(2.50) == "2.5g"
    assert format_grams(7.10) == "7.1g"


def test_format_day_total_adds_warning_suffix_only_above_warn() -> None:
    thresholds = ThresholdSettings(warn_limit=20.0, caution_limit=15.0)

    assert format_day_total(20.0, thresholds) == "Total: 20g"
    assert format_day_total(20.5, thresholds) == "Total: 20.5g ⚠️"
    assert format_day_total(17.0, thresholds) == "Total: 17g"


def test_format_day_total_without_warning_when_disabled() -> None:
    thresholds = ThresholdSettings(warn_enabled=False)

    assert format_day_total(50.0, thresholds) == "Total: 50g"


def test_format_spoken_grams() -> None:
    assert format_spoken_grams(12.0) == "12"
    assert format_spoken_grams(12.34) == "12.3"
    assert format_spoken_grams(3.5) == "3.5"
