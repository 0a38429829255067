import pytest
from fastapi.testclient import TestClient

from database import build_engine, build_sessionmaker, init_models
from main import create_app

PASSWORD = "correct-horse-battery"


@pytest.fixture
def database_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def database_url(database_path):
    return f"sqlite+aiosqlite:///{database_path}"


@pytest.fixture
def client(database_url):
    with TestClient(create_app(database_url)) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Register a user and return bearer headers for them."""
    def _make(email, name="Test User"):
        resp = client.post("/auth/register", json={"name": name, "email": email, "password": PASSWORD})
        assert resp.status_code == 201, resp.text
        resp = client.post("/auth/login", data={"username": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice@budgetapp.io", "Alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob@budgetapp.io", "Bob")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def db(anyio_backend, database_url):
    engine = build_engine(database_url)
    await init_models(engine)
    async with build_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()
