"""Async Supabase PostgREST client wrapper."""

from postgrest import AsyncPostgrestClient, AsyncRequestBuilder


class SupabaseClient:
    """Thin wrapper around AsyncPostgrestClient with service-role auth headers.

    Created once in bot.main.create_app and shared by every repository.
    """

    def __init__(self, url: str, key: str, schema: str = "public") -> None:
        headers = {"apikey": key, "Authorization": f"Bearer {key}"}
        self._client = AsyncPostgrestClient(f"{url}/rest/v1", headers=headers, schema=schema)

    def table(self, name: str) -> AsyncRequestBuilder:
        return self._client.table(name)

    async def close(self) -> None:
        """Close the underlying HTTP connections."""
        await self._client.aclose()
