"""Tests for room and room type endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _create_room_type(client: AsyncClient, headers: dict, name: str = "Suite") -> dict:
    response = await client.post(
        "/api/v1/room-types",
        json={"name": name, "base_price": "3500.50", "description": "Sea view"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def _create_room(client: AsyncClient, headers: dict, room_type_id: str, number: str = "301") -> dict:
    response = await client.post(
        "/api/v1/rooms",
        json={"room_number": number, "room_type_id": room_type_id, "floor": 3},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


# ---------------------------------------------------------------------------
# Room types
# ---------------------------------------------------------------------------


class TestRoomTypes:
    async def test_create_and_list(self, client: AsyncClient, manager_headers: dict) -> None:
        created = await _create_room_type(client, manager_headers)
        assert created["name"] == "Suite"
        assert created["base_price"] == "3500.50"

        response = await client.get("/api/v1/room-types", headers=manager_headers)
        assert response.status_code == 200
        assert [rt["id"] for rt in response.json()] == [created["id"]]

    async def test_duplicate_name(self, client: AsyncClient, manager_headers: dict) -> None:
        await _create_room_type(client, manager_headers)
        response = await client.post("/api/v1/room-types", json={"name": "Suite"}, headers=manager_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "conflict"

    async def test_staff_cannot_create(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.post("/api/v1/room-types", json={"name": "Suite"}, headers=staff_headers)
        assert response.status_code == 403
        assert response.json()["kind"] == "forbidden"

    async def test_update_price(self, client: AsyncClient, manager_headers: dict) -> None:
        created = await _create_room_type(client, manager_headers)
        response = await client.put(
            f"/api/v1/room-types/{created['id']}",
            json={"base_price": 4000},
            headers=manager_headers,
        )
        assert response.status_code == 200
        assert response.json()["base_price"] == "4000.00"
        assert response.json()["name"] == "Suite"

    async def test_rejects_three_decimal_places(self, client: AsyncClient, manager_headers: dict) -> None:
        response = await client.post(
            "/api/v1/room-types",
            json={"name": "Odd", "base_price": "10.005"},
            headers=manager_headers,
        )
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


class TestRooms:
    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/rooms")
        assert response.status_code == 401

    async def test_create_get_list(self, client: AsyncClient, manager_headers: dict, staff_headers: dict) -> None:
        room_type = await _create_room_type(client, manager_headers)
        room = await _create_room(client, manager_headers, room_type["id"])
        assert room["status"] == "AVAILABLE"
        assert room["room_type"]["name"] == "Suite"

        response = await client.get(f"/api/v1/rooms/{room['id']}", headers=staff_headers)
        assert response.status_code == 200
        assert response.json()["room_number"] == "301"

        response = await client.get("/api/v1/rooms", params={"status": "AVAILABLE"}, headers=staff_headers)
        assert response.json()["total"] == 1
        response = await client.get("/api/v1/rooms", params={"status": "OCCUPIED"}, headers=staff_headers)
        assert response.json()["total"] == 0

    async def test_duplicate_number(self, client: AsyncClient, manager_headers: dict) -> None:
        room_type = await _create_room_type(client, manager_headers)
        await _create_room(client, manager_headers, room_type["id"])
        response = await client.post(
            "/api/v1/rooms",
            json={"room_number": "301", "room_type_id": room_type["id"]},
            headers=manager_headers,
        )
        assert response.status_code == 409

    async def test_unknown_room(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.get(f"/api/v1/rooms/{uuid.uuid4()}", headers=staff_headers)
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    async def test_status_is_not_editable(self, client: AsyncClient, manager_headers: dict) -> None:
        room_type = await _create_room_type(client, manager_headers)
        room = await _create_room(client, manager_headers, room_type["id"])
        response = await client.put(
            f"/api/v1/rooms/{room['id']}",
            json={"floor": 4, "status": "OCCUPIED"},
            headers=manager_headers,
        )
        assert response.status_code == 200
        assert response.json()["floor"] == 4
        assert response.json()["status"] == "AVAILABLE"

    async def test_delete(self, client: AsyncClient, manager_headers: dict, staff_headers: dict) -> None:
        room_type = await _create_room_type(client, manager_headers)
        room = await _create_room(client, manager_headers, room_type["id"])

        response = await client.delete(f"/api/v1/rooms/{room['id']}", headers=staff_headers)
        assert response.status_code == 403

        response = await client.delete(f"/api/v1/rooms/{room['id']}", headers=manager_headers)
        assert response.status_code == 200
        response = await client.get(f"/api/v1/rooms/{room['id']}", headers=manager_headers)
        assert response.status_code == 404

    async def test_delete_occupied_room(self, client: AsyncClient, manager_headers: dict, room, booking) -> None:
        response = await client.delete(f"/api/v1/rooms/{room.id}", headers=manager_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "in_use"
