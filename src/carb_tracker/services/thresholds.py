"""Threshold evaluation and threshold settings service."""

from dataclasses import dataclass, replace
from typing import Protocol

from carb_tracker.domain.thresholds import (
    DisplayClass,
    ThresholdSettings,
    ThresholdStatus,
)


def evaluate(total: float, thresholds: ThresholdSettings) -> ThresholdStatus:
    """Classify a total against the configured thresholds.

    The warning state wins over caution whenever both are exceeded; the two
    limits are never compared with each other.
    """
    is_exceeding_warn = thresholds.warn_enabled and total > thresholds.warn_limit
    is_exceeding_caution = (
        thresholds.caution_enabled and total > thresholds.caution_limit
    )
    if is_exceeding_warn:
        display_class = DisplayClass.WARNING
    elif is_exceeding_caution:
        display_class = DisplayClass.CAUTION
    else:
        display_class = DisplayClass.NORMAL
    return ThresholdStatus(
        is_exceeding_warn=is_exceeding_warn,
        is_exceeding_caution=is_exceeding_caution,
        display_class=display_class,
    )


class ThresholdRepository(Protocol):
    """Persistence interface for threshold settings."""

    def get_thresholds(self) -> dict[str, object] | None:
        """Return the stored threshold values, if any."""

    def save_thresholds(self, values: dict[str, object]) -> None:
        """Persist threshold values."""


@dataclass
class ThresholdService:
    """Service for reading and updating threshold settings."""

    repository: ThresholdRepository

    def get_thresholds(self) -> ThresholdSettings:
        """Return stored thresholds, falling back to defaults per field."""
        stored = self.repository.get_thresholds() or {}
        defaults = ThresholdSettings()
        return ThresholdSettings(
            warn_limit=_as_float(stored.get("warn_limit"), defaults.warn_limit),
            caution_limit=_as_float(
                stored.get("caution_limit"), defaults.caution_limit
            ),
            warn_enabled=_as_bool(stored.get("warn_enabled"), defaults.warn_enabled),
            caution_enabled=_as_bool(
                stored.get("caution_enabled"), defaults.caution_enabled
            ),
        )

    def update_thresholds(self, **changes: object) -> ThresholdSettings:
        """Apply the given changes and persist the full settings."""
        current = self.get_thresholds()
        updated = replace(
            current,
            **{key: value for key, value in changes.items() if value is not None},
        )
        self.repository.save_thresholds(
            {
                "warn_limit": updated.warn_limit,
                "caution_limit": updated.caution_limit,
                "warn_enabled": updated.warn_enabled,
                "caution_enabled": updated.caution_enabled,
            }
        )
        return updated

    def evaluate(self, total: float) -> ThresholdStatus:
        return evaluate(total, self.get_thresholds())


def _as_float(value: object, default: float) -> float:
    if value is None:
        return default
    return float(value)


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    return bool(value)
