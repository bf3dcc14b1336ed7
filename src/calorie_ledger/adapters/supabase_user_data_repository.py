"""Supabase repository for the per-user document."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from calorie_ledger.adapters.user_document import (
    DOCUMENT_FIELDS,
    decode_user_data,
    encode_user_data,
)
from calorie_ledger.domain.errors import PersistenceError
from calorie_ledger.domain.user_data import UserData
from calorie_ledger.services.tracker import UserDataRepository

_logger = logging.getLogger(__name__)

_COLUMNS = {
    "profiles": "profiles",
    "currentProfileId": "current_profile_id",
    "foodEntries": "food_entries",
    "exerciseEntries": "exercise_entries",
    "ingredients": "ingredients",
    "customFoods": "custom_foods",
}


@dataclass
class SupabaseUserDataRepository(UserDataRepository):
    """Stores each user's document as one row with a JSON column per field."""

    client: Client
    table: str = "user_data"

    def load_user_data(self, user_id: str) -> UserData | None:
        """Return the user's document, or None if no row exists."""
        try:
            response = (
                self.client.table(self.table)
                .select("user_id, " + ", ".join(_COLUMNS.values()))
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            _logger.exception("Failed to load user data: user_id=%s", user_id)
            raise PersistenceError(
                "Error loading your data. Please try again."
            ) from exc
        if not response.data:
            return None
        row = response.data[0]
        document = {field: row.get(column) for field, column in _COLUMNS.items()}
        return decode_user_data(document)

    def save_user_data(self, user_id: str, data: UserData) -> None:
        """Upsert the document; columns not sent are left untouched."""
        document = encode_user_data(data)
        payload: dict[str, object] = {
            _COLUMNS[field]: document[field] for field in DOCUMENT_FIELDS
        }
        payload["user_id"] = user_id
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        try:
            self.client.table(self.table).upsert(
                payload, on_conflict="user_id"
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            _logger.exception("Failed to save user data: user_id=%s", user_id)
            raise PersistenceError(
                "Error saving your data. Please try again."
            ) from exc
