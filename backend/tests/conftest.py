"""
Notes API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── fake_store:    In-memory stand-in for the Supabase client (PostgREST
    │                  builder chain + auth.get_user), seeded per test
    ├── verifier:      StaticTokenVerifier mapping tokens to principals
    ├── alice / bob:   Principals used across tests
    └── test_client:   HTTPX AsyncClient wired to the app with the store and
                       verifier swapped in through dependency_overrides
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ["LOG_LEVEL"] = "WARNING"

from notes_api.schemas.note import AuthenticatedPrincipal  # noqa: E402
from notes_api.services.auth_base import TokenVerifier  # noqa: E402


ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Supabase Fake
# ══════════════════════════════════════════════════════════════════════════

class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    """
    Mimics the postgrest request builder closely enough for NoteService:
    select/insert, eq filters, order, range, execute. Every call is recorded
    on the owning store so tests can assert on the query shape.
    """

    def __init__(self, store: "FakeStore", table: str):
        self.store = store
        self.table = table
        self.operation: Optional[str] = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.window: Optional[tuple] = None
        self.count: Optional[str] = None
        self.head = False
        self.row: Optional[Dict[str, Any]] = None

    def select(self, *columns: str, count: Optional[str] = None, head: Optional[bool] = None):
        self.operation = "count" if head else "select"
        self.count = count
        self.head = bool(head)
        return self

    def insert(self, row: Dict[str, Any]):
        self.operation = "insert"
        self.row = dict(row)
        return self

    def eq(self, column: str, value: Any):
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def range(self, start: int, end: int):
        self.window = (start, end)
        return self

    def _matching(self) -> List[Dict[str, Any]]:
        rows = [
            r for r in self.store.rows
            if all(r.get(column) == value for column, value in self.filters)
        ]
        if self.order_by:
            column, desc = self.order_by
            rows.sort(key=lambda r: r[column], reverse=desc)
        return rows

    def execute(self) -> FakeResponse:
        self.store.executed.append(self)
        if self.operation in self.store.fail_on:
            raise RuntimeError(f'relation "{self.table}" {self.operation} failed')

        if self.operation == "insert":
            row = {
                "id": self.store.next_id(),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **self.row,
            }
            self.store.rows.append(row)
            return FakeResponse(data=[] if self.store.empty_insert else [row])

        rows = self._matching()
        if self.operation == "count":
            return FakeResponse(data=[], count=len(rows))

        if self.window:
            start, end = self.window
            rows = rows[start:end + 1]
        return FakeResponse(data=rows)


class FakeStore:
    """Stand-in for supabase.Client: `.table()` plus recorded executions."""

    def __init__(self):
        self.rows: List[Dict[str, Any]] = []
        self.executed: List[FakeQuery] = []
        self.fail_on: set = set()
        self.empty_insert = False
        self._id = 0

    def next_id(self) -> int:
        self._id += 1
        return self._id

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add_note(self, user_id: str, title: str, status: str = "active", age_minutes: int = 0) -> Dict[str, Any]:
        created = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=age_minutes)
        row = {
            "id": self.next_id(),
            "user_id": user_id,
            "title": title,
            "content": f"{title} body",
            "status": status,
            "created_at": created.isoformat(),
        }
        self.rows.append(row)
        return row


class StaticTokenVerifier(TokenVerifier):
    """Maps known tokens to principals; anything else is rejected."""

    def __init__(self, principals: Dict[str, AuthenticatedPrincipal]):
        self.principals = principals
        self.seen_tokens: List[str] = []

    async def verify(self, token: str) -> Optional[AuthenticatedPrincipal]:
        self.seen_tokens.append(token)
        if token == "explode":
            raise RuntimeError("invalid JWT: unable to parse or verify signature")
        return self.principals.get(token)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def alice() -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(id="user-alice", email="alice@example.com")


@pytest.fixture
def bob() -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(id="user-bob", email="bob@example.com")


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def verifier(alice, bob) -> StaticTokenVerifier:
    return StaticTokenVerifier({ALICE_TOKEN: alice, BOB_TOKEN: bob})


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest_asyncio.fixture
async def test_client(fake_store, verifier):
    """
    HTTPX AsyncClient routed straight into the app.

    raise_app_exceptions=False lets the catch-all 500 handler's response reach
    the test instead of the re-raised exception.
    """
    from notes_api.database import get_supabase_client
    from notes_api.dependencies import get_token_verifier
    from notes_api.main import app

    app.dependency_overrides[get_supabase_client] = lambda: fake_store
    app.dependency_overrides[get_token_verifier] = lambda: verifier

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
