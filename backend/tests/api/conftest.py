"""API test fixtures: ASGI client bound to the per-test store."""

import pytest
from httpx import ASGITransport, AsyncClient

from gameshop.infrastructure import database
from gameshop.main import app


@pytest.fixture
async def client(store, catalog, monkeypatch):
    monkeypatch.setattr(database, "db_manager", store)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sign_in(client):
    """Register + sign in; returns Authorization headers. Client cookies are cleared."""

    async def _sign_in(login: str = "hero01", password: str = "secret123") -> dict:
        resp = await client.post("/api/v1/accounts/sign-up", json={
            "login": login, "password": password,
            "confirm_password": password, "name": login.title(),
        })
        assert resp.status_code == 201, resp.text
        resp = await client.post("/api/v1/accounts/sign-in", json={
            "login": login, "password": password,
        })
        assert resp.status_code == 200, resp.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _sign_in


@pytest.fixture
def create_character(client):
    async def _create(headers: dict, name: str = "Hero") -> str:
        resp = await client.post(
            "/api/v1/characters", json={"name": name}, headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _create
