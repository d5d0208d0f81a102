from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from usermgmt.api.app import create_app
from usermgmt.config import Settings
from usermgmt.database import Database


@pytest.fixture
def client(database_url):
    database = Database(database_url)

    async def prepare():
        await database.create_all()
        # The TestClient runs its own event loop; hand it an empty pool
        await database.engine.dispose()

    asyncio.run(prepare())

    settings = Settings(database_url=database_url, debug=False, environment="test")
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


def graphql(client: TestClient, query: str, **variables):
    resp = client.post("/graphql", json={"query": query, "variables": variables or None})
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_health_endpoint(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "test"
    assert body["uptime"] >= 0
    assert "X-Request-ID" in resp.headers


def test_root_endpoint(client):
    body = client.get("/").json()

    assert body["graphql"] == "/graphql"
    assert body["health"] == "/health"


def test_startup_seeds_cities_and_serves_graphql(client):
    created = graphql(
        client,
        """
        mutation CreateUser($data: CreateUserInput!) {
          createUser(data: $data) { id city birthDate }
        }
        """,
        data={
            "firstName": "John",
            "lastName": "Doe",
            "birthDate": "1990-01-01",
            "city": "HAIFA",
        },
    )

    assert "errors" not in created
    assert created["data"]["createUser"]["city"] == "HAIFA"
    assert created["data"]["createUser"]["birthDate"] == "1990-01-01"

    listed = graphql(client, "query GetUsers { users { id } }")
    assert [u["id"] for u in listed["data"]["users"]] == [created["data"]["createUser"]["id"]]


def test_graphql_error_code_is_preserved(client):
    body = graphql(
        client,
        "mutation DeleteUser($id: ID!) { deleteUser(id: $id) }",
        id="42",
    )

    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"
    assert body["errors"][0]["message"] == "User with ID 42 not found"


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc123"})

    assert resp.headers["X-Request-ID"] == "abc123"
