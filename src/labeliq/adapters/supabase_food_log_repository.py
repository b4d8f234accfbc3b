"""Supabase repository for food log entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from labeliq.domain.food_log import FoodLogEntry
from labeliq.domain.scoring import NUTRIENT_FIELDS, NutrientProfile
from labeliq.services.food_log import FoodLogRepository

_COLUMNS = (
    "id, user_id, fdc_id, description, brand_name, category, serving_size, "
    "serving_unit, servings, notes, calories, protein, carbs, fat, fiber, "
    "sodium, created_at"
)


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for the food log."""

    client: Client

    def create_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert a log row and return it."""
        payload: dict[str, object] = {
            "id": str(entry.id),
            "user_id": str(entry.user_id),
            "fdc_id": entry.fdc_id,
            "description": entry.description,
            "brand_name": entry.brand_name,
            "category": entry.category,
            "serving_size": entry.serving_size,
            "serving_unit": entry.serving_unit,
            "servings": entry.servings,
            "notes": entry.notes,
            "created_at": entry.created_at.isoformat(),
        }
        for name in NUTRIENT_FIELDS:
            payload[name] = getattr(entry.nutrients, name)
        response = self.client.table("food_log_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return _parse_row(response.data[0])

    def get_entry(self, entry_id: UUID) -> FoodLogEntry | None:
        """Return a log row by id."""
        response = (
            self.client.table("food_log_entries")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update_entry(
        self, entry_id: UUID, servings: float, notes: str | None
    ) -> FoodLogEntry | None:
        """Update servings and notes on a log row."""
        response = (
            self.client.table("food_log_entries")
            .update({"servings": servings, "notes": notes})
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a log row."""
        self.client.table("food_log_entries").delete().eq(
            "id", str(entry_id)
        ).execute()

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodLogEntry]:
        """Return a user's rows in the time range, newest first."""
        response = (
            self.client.table("food_log_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> FoodLogEntry:
    nutrients = NutrientProfile(
        **{
            name: float(row[name]) if row.get(name) is not None else None
            for name in NUTRIENT_FIELDS
        }
    )
    serving_size = row.get("serving_size")
    return FoodLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        description=str(row.get("description") or ""),
        servings=float(row.get("servings") or 1.0),
        nutrients=nutrients,
        created_at=datetime.fromisoformat(str(row["created_at"])),
        fdc_id=str(row["fdc_id"]) if row.get("fdc_id") is not None else None,
        brand_name=row.get("brand_name"),
        category=row.get("category"),
        serving_size=float(serving_size) if serving_size is not None else None,
        serving_unit=row.get("serving_unit"),
        notes=row.get("notes"),
    )
