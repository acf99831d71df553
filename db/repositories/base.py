"""Base repository with shared DB access and typed response helpers."""

from typing import Any

from postgrest import AsyncRequestBuilder

from bot.exceptions import AppError
from db.client import SupabaseClient


class BaseRepository:
    """Base class for repositories. Provides table access via SupabaseClient.

    The static helpers keep postgrest's loose response types in one place.
    """

    def __init__(self, db: SupabaseClient) -> None:
        self._db = db

    def _table(self, name: str) -> AsyncRequestBuilder:
        return self._db.table(name)

    @staticmethod
    def _single(resp: Any) -> dict[str, Any] | None:
        """Extract single row dict from maybe_single() response."""
        if resp is None:
            return None
        return resp.data if resp.data else None  # type: ignore[no-any-return]

    @staticmethod
    def _require_first(resp: Any) -> dict[str, Any]:
        """Extract first row from an insert/upsert response. Raises AppError if empty."""
        if resp.data:
            return resp.data[0]  # type: ignore[no-any-return]
        raise AppError("Database write returned no data")
