"""Expiring in-memory cache for lookup results."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-item expiry."""

    def get(self, key: str) -> object | None:
        """Return the value stored under ``key`` unless it has expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""

    def clear(self) -> None:
        """Drop every stored value."""


@dataclass
class _Slot:
    value: object
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries vanish on restart."""

    clock: Callable[[], datetime] = _utc_now
    _slots: dict[str, _Slot] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        slot = self._slots.get(key)
        if slot is None:
            return None
        if self.clock() >= slot.expires_at:
            del self._slots[key]
            return None
        return slot.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._slots[key] = _Slot(
            value=value, expires_at=self.clock() + timedelta(seconds=ttl_seconds)
        )

    def clear(self) -> None:
        self._slots.clear()
