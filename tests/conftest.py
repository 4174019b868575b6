# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase table/storage builders
# - FastAPI TestClient with the datastore and gateways placed on app.state
# - Token helpers for admin, participant and judge callers
# =============================================================================

import os
from copy import deepcopy
from types import SimpleNamespace

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "test-admin-pass")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("MAX_UPLOAD_SIZE_MB", "1")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from core.models.user import UserCreate, UserRole
from core.services.user_service import UserService
from lib.security import create_access_token
from lib.supabase_client import SupabaseClient


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeQuery:
    """
    Chainable imitation of the PostgREST query builder.

    Supports the subset the services use: select / insert / update / delete,
    eq / neq / in_ filters, order, limit and execute.
    """

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.columns: list[str] | None = None
        self.payload = None
        self.filters: list = []
        self.order_by: list[tuple[str, bool]] = []
        self.limit_count: int | None = None

    # Actions ------------------------------------------------------------------

    def select(self, columns: str = "*", count: str | None = None):
        self.action = "select"
        if columns.strip() != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    # Filters ------------------------------------------------------------------

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        allowed = list(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column, desc: bool = False):
        self.order_by.append((column, desc))
        return self

    def limit(self, count: int):
        self.limit_count = count
        return self

    # Execution ----------------------------------------------------------------

    def _matches(self, row) -> bool:
        return all(f(row) for f in self.filters)

    def execute(self):
        if self.table_name in self.db.failing_tables:
            raise RuntimeError(f"simulated failure on {self.table_name}")

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [deepcopy(r) for r in new_rows]
            rows.extend(inserted)
            return SimpleNamespace(data=deepcopy(inserted), count=None)

        matched = [r for r in rows if self._matches(r)]

        if self.action == "update":
            for row in matched:
                row.update(deepcopy(self.payload))
            return SimpleNamespace(data=deepcopy(matched), count=None)

        if self.action == "delete":
            self.db.tables[self.table_name] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=deepcopy(matched), count=None)

        result = list(matched)
        for column, desc in reversed(self.order_by):
            result.sort(
                key=lambda r: (r.get(column) is not None, r.get(column) if r.get(column) is not None else 0),
                reverse=desc,
            )
        if self.limit_count is not None:
            result = result[: self.limit_count]
        if self.columns:
            result = [{c: r.get(c) for c in self.columns} for r in result]
        return SimpleNamespace(data=deepcopy(result), count=len(result))


class FakeBucket:
    """Imitation of the Storage bucket proxy."""

    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.db.fail_uploads:
            raise RuntimeError("simulated upload failure")
        self.db.objects[path] = {"content": file, "options": file_options}
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"{os.environ['SUPABASE_URL']}/storage/v1/object/public/{self.name}/{path}"

    def remove(self, paths):
        if self.db.fail_removals:
            raise RuntimeError("simulated storage outage")
        for path in paths:
            self.db.objects.pop(path, None)
        self.db.removed.extend(paths)
        return [{"name": p} for p in paths]


class FakeSupabase(SupabaseClient):
    """SupabaseClient whose tables and buckets live in memory."""

    def __init__(self):
        super().__init__("https://test-project.supabase.co", "test-service-key")
        self.tables: dict[str, list[dict]] = {}
        self.objects: dict[str, dict] = {}
        self.removed: list[str] = []
        self.failing_tables: set[str] = set()
        self.fail_uploads = False
        self.fail_removals = False

    @property
    def is_connected(self) -> bool:
        return True

    def table(self, name: str):
        return FakeQuery(self, name)

    def bucket(self, name: str):
        return FakeBucket(self, name)

    def ping(self) -> None:
        self.table("fish").select("id").limit(1).execute()

    def list_buckets(self) -> list:
        return [SimpleNamespace(name=settings.STORAGE_BUCKET)]

    def rows(self, table: str) -> list[dict]:
        return self.tables.get(table, [])


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Empty in-memory datastore."""
    return FakeSupabase()


@pytest.fixture
def app(fake_db):
    """
    Application with in-memory collaborators.

    The lifespan is not run; everything it would create is set directly.
    """
    from app.main import create_app

    application = create_app()
    application.state.db = fake_db
    application.state.payment = None
    application.state.shipping = None
    application.state.assistant = None
    application.state.prize_picker = lambda prizes: prizes[0]
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def make_headers(subject: str, role: UserRole, username: str | None = None) -> dict:
    token, _ = create_access_token(
        subject=subject,
        role=role.value,
        secret_key=settings.SECRET_KEY,
        expires_minutes=30,
        algorithm=settings.JWT_ALGORITHM,
        extra_claims={"username": username} if username else None,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return make_headers("admin", UserRole.ADMIN, "admin")


@pytest.fixture
def create_account(fake_db):
    """Create a stored account and return (user row, auth headers)."""

    def _create(username: str = "budi", role: UserRole = UserRole.USER):
        user = UserService(fake_db).create_user(
            UserCreate(username=username, password="secret-pass", full_name=username.title()),
            role=role,
        )
        return user, make_headers(user["id"], role, user["username"])

    return _create


@pytest.fixture
def sample_fish_payload():
    """The certificate used throughout the workflow tests."""
    return {
        "id": "FISH-AB12CD",
        "species": "Betta",
        "origin": "Medan",
        "weight": 0.02,
        "method": "Ternak sendiri",
        "catchDate": "2024-01-01",
    }
