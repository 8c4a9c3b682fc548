"""Application wiring: CORS, catch-all error handler, health probe."""

from unittest.mock import MagicMock

import mongomock
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

import database
import main
from main import app


async def test_root(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert "message" in res.json()


async def test_cors_allows_any_origin(client):
    res = await client.get("/api/games", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] in ("*", "http://example.com")


async def test_cors_preflight(client):
    res = await client.options(
        "/api/customers",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert res.status_code == 200


async def test_unhandled_error_gets_generic_500(make_client):
    def no_database():
        raise RuntimeError("Database not initialized")

    client = await make_client(no_database)

    res = await client.get("/api/games", headers={"Origin": "http://example.com"})
    assert res.status_code == 500
    assert res.json() == {"error": "Une erreur est survenue sur le serveur"}
    assert "access-control-allow-origin" in res.headers


async def test_malformed_json_gets_generic_500(client):
    res = await client.post(
        "/api/games",
        content=b"{not json",
        headers={"Content-Type": "application/json", "Origin": "http://example.com"},
    )
    assert res.status_code == 500
    assert res.json() == {"error": "Une erreur est survenue sur le serveur"}
    assert res.headers["access-control-allow-origin"] in ("*", "http://example.com")


async def test_health_ok(make_client):
    db = MagicMock()
    db.command.return_value = {"ok": 1.0}
    client = await make_client(lambda: db)

    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "database": "connected"}
    db.command.assert_called_once_with("ping")


async def test_health_degraded_when_store_is_down(make_client):
    db = MagicMock()
    db.command.side_effect = ConnectionFailure("no server")
    client = await make_client(lambda: db)

    res = await client.get("/api/health")
    assert res.status_code == 503
    assert res.json()["database"] == "unavailable"


async def test_unique_index_created_after_store_was_down_at_startup(monkeypatch):
    def store_down(db):
        raise ServerSelectionTimeoutError("127.0.0.1:27017: connection refused")

    monkeypatch.setattr(database, "MongoClient", mongomock.MongoClient)
    monkeypatch.setattr(main, "ensure_indexes_once", store_down)

    async with main.lifespan(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            first = await c.post("/api/games", json={"id": 7, "title": "A"})
            second = await c.post("/api/games", json={"id": 7, "title": "B"})
            listed = (await c.get("/api/games")).json()

    assert first.status_code == 201
    assert second.status_code == 500
    assert [g["title"] for g in listed] == ["A"]
