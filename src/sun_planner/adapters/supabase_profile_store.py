"""Supabase-backed key/value store for profile blobs."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from sun_planner.services.profiles import ProfileStore


@dataclass
class SupabaseProfileStore(ProfileStore):
    """Supabase implementation storing blobs in a key/value table."""

    client: Client
    table: str = "app_state"

    def load(self, key: str) -> str | None:
        """Return the stored blob for a key, if present."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def save(self, key: str, blob: str) -> None:
        """Insert or replace the blob for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": blob,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def delete(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table).delete().eq("key", key).execute()
