"""Shared mock fixtures for repository tests.

Uses a MockSupabaseClient that records calls and returns configurable responses.
The mock auto-handles maybe_single() semantics:
- dict data + maybe_single() → returns dict (single row)
- dict data + no maybe_single() → wraps in list (for upsert)
- list data + maybe_single() → returns first element or None
- None/[] + maybe_single() → returns None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Mock PostgREST chain
# ---------------------------------------------------------------------------


@dataclass
class MockResponse:
    """Simulated PostgREST response."""

    data: Any = None
    count: int | None = None


class MockRequestBuilder:
    """Chainable mock that records method calls and returns configurable response."""

    def __init__(self, response: MockResponse | None = None) -> None:
        self._response = response or MockResponse()
        self._is_maybe_single = False
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def _chain(self, method: str, *args: Any, **kwargs: Any) -> MockRequestBuilder:
        self.calls.append((method, args, kwargs))
        return self

    def select(self, *args: Any, **kwargs: Any) -> MockRequestBuilder:
        return self._chain("select", *args, **kwargs)

    def upsert(self, *args: Any, **kwargs: Any) -> MockRequestBuilder:
        return self._chain("upsert", *args, **kwargs)

    def eq(self, *args: Any, **kwargs: Any) -> MockRequestBuilder:
        return self._chain("eq", *args, **kwargs)

    def limit(self, *args: Any, **kwargs: Any) -> MockRequestBuilder:
        return self._chain("limit", *args, **kwargs)

    def maybe_single(self) -> MockRequestBuilder:
        self._is_maybe_single = True
        return self._chain("maybe_single")

    async def execute(self) -> MockResponse:
        data = self._response.data
        count = self._response.count

        if self._is_maybe_single:
            resolved = (data[0] if data else None) if isinstance(data, list) else data
            return MockResponse(data=resolved, count=count)

        if data is None:
            return MockResponse(data=[], count=count)
        if isinstance(data, dict):
            return MockResponse(data=[data], count=count)
        return self._response


@dataclass
class MockSupabaseClient:
    """SupabaseClient mock that returns preconfigured responses per table.

    Creates a NEW MockRequestBuilder for each table() call and keeps it in
    ``builders`` so tests can inspect the query chain.
    """

    _responses: dict[str, MockResponse] = field(default_factory=dict)
    builders: list[tuple[str, MockRequestBuilder]] = field(default_factory=list)

    def set_response(self, table: str, response: MockResponse) -> None:
        self._responses[table] = response

    def table(self, name: str) -> MockRequestBuilder:
        builder = MockRequestBuilder(self._responses.get(name, MockResponse()))
        self.builders.append((name, builder))
        return builder


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_response() -> type[MockResponse]:
    """MockResponse class for direct use."""
    return MockResponse


@pytest.fixture
def mock_db() -> MockSupabaseClient:
    """MockSupabaseClient instance."""
    return MockSupabaseClient()
