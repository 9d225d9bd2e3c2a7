import os

# Must be set before app.config.settings is imported
os.environ["MOCK_DELAY_MS"] = "0"
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)

import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database.memory_store import MemoryStore, seed_demo_data, get_store
from app.database.content_store import ContentStore, get_content_store
from app.modules.approvals.routes import get_client_factory


class FakeProviderError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []
        self._single = False

    def select(self, *columns):
        self.op = "select"
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def single(self):
        self._single = True
        return self

    def execute(self):
        if self.table in self.db.failing_tables:
            raise FakeProviderError(f"{self.table} is unavailable")
        rows = [
            r for r in self.db.tables.setdefault(self.table, [])
            if all(r.get(c) == v for c, v in self.filters)
        ]
        if self.op == "select":
            if self._single:
                if len(rows) != 1:
                    raise FakeProviderError("JSON object requested, multiple (or no) rows returned")
                return SimpleNamespace(data=dict(rows[0]))
            return SimpleNamespace(data=[dict(r) for r in rows])
        if self.op == "update":
            if self.op in self.db.failing_ops:
                raise FakeProviderError("update failed")
            for row in rows:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(r) for r in rows])
        raise AssertionError(f"unsupported op {self.op}")


class FakeAuthAdmin:
    def __init__(self):
        self.created = []
        self._ids = itertools.count(1)

    def create_user(self, attributes):
        if any(u["email"] == attributes["email"] for u in self.created):
            raise FakeProviderError("A user with this email address has already been registered")
        user_id = f"auth-{next(self._ids)}"
        self.created.append({**attributes, "id": user_id})
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=attributes["email"]))


class FakeSupabase:
    """Covers the slice of the supabase Client used by the approval functions."""

    def __init__(self):
        self.tables = {}
        self.failing_tables = set()
        self.failing_ops = set()
        self.auth = SimpleNamespace(admin=FakeAuthAdmin())

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def store():
    s = MemoryStore(delay=0, session_ttl=3600, session_max_count=100)
    s.add_admin("admin@example.com", "admin", "Admin User", admin_id="admin1")
    seed_demo_data(s)
    return s


@pytest.fixture
def content_store():
    return ContentStore()


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def client(store, content_store, fake_supabase):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_content_store] = lambda: content_store
    app.dependency_overrides[get_client_factory] = lambda: (lambda: fake_supabase)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _login(client, path, email, password):
    response = client.post(path, json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def user_headers(client):
    token = _login(client, "/api/v1/auth/login", "user@example.com", "password")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    token = _login(client, "/api/v1/auth/admin/login", "admin@example.com", "admin")
    return {"Authorization": f"Bearer {token}"}
