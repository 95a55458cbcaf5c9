import json

import pytest

from perks_api.core.exceptions import (
    STATUS_BY_KIND,
    DatabaseError,
    DuplicateKeyError,
    ErrorKind,
    NotFoundError,
    ValidationError,
    error_response,
)
from perks_api.services import perks as perk_service


@pytest.mark.parametrize("kind,status_code", [
    (ErrorKind.VALIDATION, 400),
    (ErrorKind.NOT_FOUND, 404),
    (ErrorKind.DUPLICATE_KEY, 409),
    (ErrorKind.UNCLASSIFIED, 500),
])
def test_error_response_maps_kind_to_status(kind, status_code):
    response = error_response(kind, "boom")
    assert response.status_code == status_code
    assert json.loads(response.body) == {"message": "boom"}


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_exception_defaults():
    assert NotFoundError().message == "Perk not found"
    assert DuplicateKeyError().message == "Duplicate perk for this merchant"
    assert ValidationError("bad").status_code == 400
    assert DatabaseError().kind is ErrorKind.UNCLASSIFIED
    assert DuplicateKeyError().code == "duplicate_key"


@pytest.mark.asyncio
async def test_unexpected_error_returns_500(client, monkeypatch):
    async def broken(session):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(perk_service, "list_perks", broken)

    response = await client.get("/perks")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert response.headers["X-Error-ID"].startswith("err_")


@pytest.mark.asyncio
async def test_update_merchant_collision_is_unclassified(client):
    await client.post("/perks", json={"title": "One", "merchant": "Acme"})
    other = (await client.post("/perks", json={"title": "Two", "merchant": "Globex"})).json()["perk"]

    response = await client.patch(f"/perks/{other['id']}", json={"merchant": "Acme"})

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


@pytest.mark.asyncio
async def test_request_id_is_propagated(client):
    response = await client.get("/perks", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Response-Time" in response.headers


@pytest.mark.asyncio
async def test_request_id_is_generated(client):
    response = await client.get("/perks")
    assert response.headers["X-Request-ID"]
