"""Supabase repository for carb entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from carb_tracker.domain.entries import CarbEntry
from carb_tracker.services.entries import EntryRepository

TABLE = "carb_entries"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for carb entries."""

    client: Client

    def insert(self, entry: CarbEntry) -> UUID:
        """Insert an entry row and return its id."""
        response = (
            self.client.table(TABLE)
            .insert(
                {
                    "id": str(entry.id),
                    "logged_at": entry.timestamp.isoformat(),
                    "value_g": entry.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create carb entry")
        return UUID(response.data[0]["id"])

    def delete(self, entry_id: UUID) -> bool:
        """Delete an entry row by id."""
        response = self.client.table(TABLE).delete().eq("id", str(entry_id)).execute()
        return bool(response.data)

    def list_all(self) -> list[CarbEntry]:
        """Return all entry rows."""
        response = (
            self.client.table(TABLE)
            .select("id, logged_at, value_g")
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_all(self) -> int:
        """Delete every entry row."""
        response = (
            self.client.table(TABLE)
            .delete()
            .gte("logged_at", datetime.min.replace(tzinfo=UTC).isoformat())
            .execute()
        )
        return len(response.data or [])


def _parse_row(row: dict[str, object]) -> CarbEntry:
    logged_at = datetime.fromisoformat(str(row["logged_at"]))
    if logged_at.tzinfo is None:
        logged_at = logged_at.replace(tzinfo=UTC)
    return CarbEntry(
        id=UUID(str(row["id"])),
        timestamp=logged_at,
        value=float(row.get("value_g", 0.0)),
    )
