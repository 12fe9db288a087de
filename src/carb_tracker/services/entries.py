"""Carb entry service with the validated creation gate."""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from carb_tracker.domain.entries import CarbEntry, DayGroup
from carb_tracker.services.formatting import round_for_storage
from carb_tracker.services.refresh import RefreshNotifier

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for carb entries."""

    def insert(self, entry: CarbEntry) -> UUID:
        """Store an entry and return its id."""

    def delete(self, entry_id: UUID) -> bool:
        """Delete an entry by id, returning False if it does not exist."""

    def list_all(self) -> list[CarbEntry]:
        """Return every stored entry in no particular order."""

    def delete_all(self) -> int:
        """Delete every entry and return how many were removed."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class EntryService:
    """Creates, deletes and lists carb entries."""

    repository: EntryRepository
    notifier: RefreshNotifier = field(default_factory=RefreshNotifier)
    clock: Callable[[], datetime] = _utc_now

    def add_carbs(self, amount: float | None) -> CarbEntry | None:
        """Validate, round and store a gram amount.

        Returns None without touching the store when the amount is missing,
        not positive, or rounds down to zero.
        """
        if amount is None or not math.isfinite(amount) or amount <= 0:
            _logger.info("Rejected carb amount: %s", amount)
            return None
        value = round_for_storage(amount)
        if value <= 0:
            _logger.info("Rejected carb amount %s rounding to %s", amount, value)
            return None
        entry = CarbEntry(timestamp=self.clock(), value=value)
        self.repository.insert(entry)
        _logger.info("Logged carb entry: id=%s value=%s", entry.id, entry.value)
        self.notifier.notify("insert")
        return entry

    def quick_add(self, value: float) -> CarbEntry | None:
        return self.add_carbs(value)

    def log_shortcut(self, amount: float | None) -> CarbEntry | None:
        """Log an amount coming from a voice or shortcut integration."""
        return self.add_carbs(amount)

    def add_from_food(
        self, carbs_per_100g: float | None, amount_eaten: float | None
    ) -> CarbEntry | None:
        """Log the carbs contained in ``amount_eaten`` grams of a food.

        The product is passed to the gate unrounded; rounding happens once.
        """
        if carbs_per_100g is None or amount_eaten is None:
            return None
        if carbs_per_100g <= 0 or amount_eaten <= 0:
            return None
        return self.add_carbs(carbs_per_100g / 100.0 * amount_eaten)

    def seed(self, entries: Iterable[CarbEntry]) -> int:
        """Insert pre-built entries without validation."""
        count = 0
        for entry in entries:
            self.repository.insert(entry)
            count += 1
        if count:
            self.notifier.notify("seed")
        return count

    def delete(self, entry_id: UUID) -> bool:
        deleted = self.repository.delete(entry_id)
        if deleted:
            _logger.info("Deleted carb entry: id=%s", entry_id)
            self.notifier.notify("delete")
        return deleted

    def delete_entries(self, group: DayGroup, offsets: Iterable[int]) -> int:
        """Delete the entries at ``offsets`` within a day group."""
        indices = sorted(set(offsets))
        for index in indices:
            if not 0 <= index < len(group.entries):
                raise IndexError(f"Offset {index} is outside the day group")
        targets = [group.entries[index] for index in indices]
        deleted = 0
        for entry in targets:
            if self.repository.delete(entry.id):
                deleted += 1
        if deleted:
            _logger.info("Deleted %s entries from %s", deleted, group.day)
            self.notifier.notify("delete")
        return deleted

    def clear(self) -> int:
        removed = self.repository.delete_all()
        if removed:
            self.notifier.notify("clear")
        return removed

    def list_entries(self) -> list[CarbEntry]:
        """Return a fresh snapshot of all entries."""
        return list(self.repository.list_all())
