"""Ingredient endpoint tests, including the isActive flag and filter."""
import pytest
from httpx import AsyncClient

BASE = "/api/v1/ingredient"


async def _create(client: AsyncClient, name: str, **extra) -> dict:
    resp = await client.post(BASE, json={"name": name, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_create_defaults_to_active(async_client: AsyncClient):
    body = await _create(async_client, "Whole Milk", description="Full fat")
    assert body["isActive"] is True
    assert body["description"] == "Full fat"
    assert set(body) == {"id", "name", "description", "isActive", "createdAt", "updatedAt"}


@pytest.mark.asyncio
async def test_create_inactive(async_client: AsyncClient):
    body = await _create(async_client, "Hazelnut Syrup", isActive=False)
    assert body["isActive"] is False


@pytest.mark.asyncio
async def test_is_active_filter(async_client: AsyncClient):
    await _create(async_client, "Whole Milk")
    await _create(async_client, "Oat Milk")
    await _create(async_client, "Hazelnut Syrup", isActive=False)

    active = (await async_client.get(BASE, params={"isActive": "true"})).json()
    assert [i["name"] for i in active["items"]] == ["Oat Milk", "Whole Milk"]

    inactive = (await async_client.get(BASE, params={"isActive": "false"})).json()
    assert [i["name"] for i in inactive["items"]] == ["Hazelnut Syrup"]

    everything = (await async_client.get(BASE)).json()
    assert everything["totalCount"] == 3


@pytest.mark.asyncio
async def test_is_active_filter_combines_with_search(async_client: AsyncClient):
    await _create(async_client, "Whole Milk")
    await _create(async_client, "Condensed Milk", isActive=False)

    resp = await async_client.get(BASE, params={"isActive": "true", "search": "milk"})
    assert [i["name"] for i in resp.json()["items"]] == ["Whole Milk"]


@pytest.mark.asyncio
async def test_deactivate_moves_ingredient_between_filtered_lists(async_client: AsyncClient):
    milk = await _create(async_client, "Whole Milk")
    before = (await async_client.get(BASE, params={"isActive": "true"})).json()
    assert before["totalCount"] == 1

    resp = await async_client.put(f"{BASE}/{milk['id']}", json={"name": "Whole Milk", "isActive": False})
    assert resp.status_code == 200
    assert resp.json()["isActive"] is False

    after = (await async_client.get(BASE, params={"isActive": "true"})).json()
    assert after["totalCount"] == 0


@pytest.mark.asyncio
async def test_sort_by_is_active(async_client: AsyncClient):
    await _create(async_client, "Whole Milk")
    await _create(async_client, "Hazelnut Syrup", isActive=False)

    resp = await async_client.get(BASE, params={"sortBy": "isActive", "sortDescending": "true"})
    assert [i["name"] for i in resp.json()["items"]] == ["Whole Milk", "Hazelnut Syrup"]


@pytest.mark.asyncio
async def test_invalid_is_active_value_is_400(async_client: AsyncClient):
    resp = await async_client.get(BASE, params={"isActive": "sometimes"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_ingredient_name_limit_is_50(async_client: AsyncClient):
    resp = await async_client.post(BASE, json={"name": "i" * 51})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Name must not exceed 50 characters"
