"""Repository for user_profiles table."""

from typing import Protocol

import structlog

from db.models import UserProfile
from db.repositories.base import BaseRepository

log = structlog.get_logger()

_TABLE = "user_profiles"


class ProfileStore(Protocol):
    """Keyed profile storage the conversation service depends on."""

    async def get(self, user_id: int) -> UserProfile | None: ...

    async def upsert(self, profile: UserProfile) -> UserProfile: ...


class ProfilesRepository(BaseRepository):
    """Supabase-backed ProfileStore."""

    async def get(self, user_id: int) -> UserProfile | None:
        """Get profile by Telegram ID. Returns None if not found."""
        resp = await self._table(_TABLE).select("*").eq("id", user_id).maybe_single().execute()
        row = self._single(resp)
        return UserProfile(**row) if row else None

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Insert or fully replace the row keyed by profile.id."""
        payload = profile.model_dump(mode="json")
        resp = await self._table(_TABLE).upsert(payload, on_conflict="id").execute()
        row = self._require_first(resp)
        log.debug("profile_upserted", user_id=profile.id, state=profile.state)
        return UserProfile(**row)
