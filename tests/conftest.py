"""Shared fixtures: in-memory MongoDB (mongomock) behind the FastAPI app.

Every test gets a fresh database with the unique `id` indexes in place.
The get_db dependency is overridden, so no real server is contacted.
"""

import mongomock
import pytest
from httpx import ASGITransport, AsyncClient

import database
from database import ensure_indexes, get_db
from main import app


@pytest.fixture(autouse=True)
def fresh_index_state(monkeypatch):
    monkeypatch.setattr(database, "indexes_ready", False)


@pytest.fixture
def test_db():
    db = mongomock.MongoClient()["boutique-jeux-test"]
    ensure_indexes(db)
    return db


@pytest.fixture
async def make_client():
    """Build a client whose get_db returns whatever db_factory gives."""
    clients = []

    async def _make(db_factory):
        app.dependency_overrides[get_db] = db_factory
        c = AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        )
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client, test_db):
    return await make_client(lambda: test_db)


@pytest.fixture
def game_payload():
    return {
        "id": 1,
        "title": "Jeu 1",
        "editor": "Ed1",
        "platforms": ["PC", "PS5"],
        "quantity": 10,
    }


@pytest.fixture
def customer_payload():
    return {
        "id": 1,
        "name": "Doe",
        "firstName": "John",
        "dateOfBirth": "1990-01-01",
        "address": "123 Rue de la Rue",
        "phoneNumber": "123-456-7890",
        "points": 100,
    }
