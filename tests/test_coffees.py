"""Coffee endpoint tests."""
import uuid

import pytest
from httpx import AsyncClient

BASE = "/api/v1/coffee"


@pytest.mark.asyncio
async def test_create_and_get_coffee(async_client: AsyncClient):
    resp = await async_client.post(BASE, json={"name": "Flat White"})
    assert resp.status_code == 201
    coffee = resp.json()
    assert set(coffee) == {"id", "name", "createdAt", "updatedAt"}
    assert resp.headers["location"].endswith(f"{BASE}/{coffee['id']}")

    detail = await async_client.get(f"{BASE}/{coffee['id']}")
    assert detail.status_code == 200
    assert detail.json() == coffee


@pytest.mark.asyncio
async def test_coffee_name_limit_is_100(async_client: AsyncClient):
    ok = await async_client.post(BASE, json={"name": "c" * 100})
    assert ok.status_code == 201

    too_long = await async_client.post(BASE, json={"name": "c" * 101})
    assert too_long.status_code == 400
    assert too_long.json() == {
        "error": "Name must not exceed 100 characters",
        "code": "VALIDATION_ERROR",
    }


@pytest.mark.asyncio
async def test_coffee_description_is_not_part_of_the_contract(async_client: AsyncClient):
    resp = await async_client.post(BASE, json={"name": "Cortado", "description": "ignored"})
    assert resp.status_code == 201
    assert "description" not in resp.json()


@pytest.mark.asyncio
async def test_duplicate_coffee_is_409(async_client: AsyncClient):
    await async_client.post(BASE, json={"name": "Latte"})
    resp = await async_client.post(BASE, json={"name": "LATTE"})
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATE_NAME"


@pytest.mark.asyncio
async def test_update_and_delete_coffee(async_client: AsyncClient):
    coffee = (await async_client.post(BASE, json={"name": "Latte"})).json()

    resp = await async_client.put(f"{BASE}/{coffee['id']}", json={"name": "Caffe Latte"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Caffe Latte"

    assert (await async_client.get(f"{BASE}/{coffee['id']}")).json()["name"] == "Caffe Latte"

    assert (await async_client.delete(f"{BASE}/{coffee['id']}")).status_code == 204
    assert (await async_client.get(f"{BASE}/{coffee['id']}")).status_code == 404
    assert (await async_client.put(f"{BASE}/{coffee['id']}", json={"name": "Latte"})).status_code == 404


@pytest.mark.asyncio
async def test_list_coffees_sorted_by_created_at(async_client: AsyncClient):
    for name in ("Mocha", "Americano", "Latte"):
        await async_client.post(BASE, json={"name": name})

    resp = await async_client.get(BASE, params={"sortBy": "createdAt"})
    assert [c["name"] for c in resp.json()["items"]] == ["Mocha", "Americano", "Latte"]

    resp = await async_client.get(BASE, params={"sortBy": "createdAt", "sortDescending": "true"})
    assert [c["name"] for c in resp.json()["items"]] == ["Latte", "Americano", "Mocha"]


@pytest.mark.asyncio
async def test_get_coffee_unknown_id(async_client: AsyncClient):
    resp = await async_client.get(f"{BASE}/{uuid.uuid4()}")
    assert resp.status_code == 404
