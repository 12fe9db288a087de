"""Domain models for carb entries."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class CarbEntry:
    """A single timestamped amount of carbohydrates in grams."""

    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    value: float = 0.0
    id: UUID = field(default_factory=uuid4)


@dataclass
class DayGroup:
    """Entries sharing one local calendar day."""

    day: date
    entries: list[CarbEntry] = field(default_factory=list)

    def total(self) -> float:
        """Return the sum of all entry values in the group."""
        return sum((entry.value for entry in self.entries), 0.0)
