"""Supabase repository for threshold settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from carb_tracker.services.thresholds import ThresholdRepository

TABLE = "threshold_settings"
_COLUMNS = "warn_limit, caution_limit, warn_enabled, caution_enabled"
# Single-user app: settings live in one well-known row.
SETTINGS_ROW_ID = 1


@dataclass
class SupabaseThresholdRepository(ThresholdRepository):
    """Supabase implementation for threshold settings."""

    client: Client

    def get_thresholds(self) -> dict[str, object] | None:
        """Return the stored threshold row."""
        response = (
            self.client.table(TABLE)
            .select(_COLUMNS)
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def save_thresholds(self, values: dict[str, object]) -> None:
        """Insert or update the threshold row."""
        self.client.table(TABLE).upsert(
            {
                "id": SETTINGS_ROW_ID,
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
