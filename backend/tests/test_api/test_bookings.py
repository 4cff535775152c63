"""Tests for booking, food order and checkout endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

JSON = {"format": "json"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _check_in(client: AsyncClient, headers: dict, room_id, **overrides) -> dict:
    payload = {
        "room_id": str(room_id),
        "guest_name": "Vikram Singh",
        "id_type": "DL",
        "id_number": "JH02 2019 0001234",
        "room_price": "1500",
    }
    payload.update(overrides)
    response = await client.post("/api/v1/bookings", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _order(client: AsyncClient, headers: dict, booking_id, food_item_id, quantity=1):
    return await client.post(
        "/api/v1/bookings/food",
        json={"booking_id": str(booking_id), "food_item_id": str(food_item_id), "quantity": quantity},
        headers=headers,
    )


# ---------------------------------------------------------------------------
# POST /api/v1/bookings
# ---------------------------------------------------------------------------


class TestCreateBooking:
    async def test_check_in(self, client: AsyncClient, staff_headers: dict, room) -> None:
        data = await _check_in(client, staff_headers, room.id)
        assert data["status"] == "ACTIVE"
        assert data["room_price"] == "1500.00"
        assert data["checkout_date"] is None
        assert data["room"]["status"] == "OCCUPIED"

    async def test_occupied_room(self, client: AsyncClient, staff_headers: dict, room) -> None:
        await _check_in(client, staff_headers, room.id)
        response = await client.post(
            "/api/v1/bookings",
            json={"room_id": str(room.id), "guest_name": "Late Arrival", "id_type": "OTHER", "room_price": 1000},
            headers=staff_headers,
        )
        assert response.status_code == 409
        assert response.json()["kind"] == "room_not_available"

    async def test_unknown_room(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.post(
            "/api/v1/bookings",
            json={"room_id": str(uuid.uuid4()), "guest_name": "X", "id_type": "OTHER", "room_price": 1000},
            headers=staff_headers,
        )
        assert response.status_code == 404

    async def test_zero_price(self, client: AsyncClient, staff_headers: dict, room) -> None:
        response = await client.post(
            "/api/v1/bookings",
            json={"room_id": str(room.id), "guest_name": "X", "id_type": "OTHER", "room_price": 0},
            headers=staff_headers,
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    async def test_requires_auth(self, client: AsyncClient, room) -> None:
        response = await client.post("/api/v1/bookings", json={"room_id": str(room.id)})
        assert response.status_code == 401


# ---------------------------------------------------------------------------
# GET / PUT / DELETE /api/v1/bookings/{id}
# ---------------------------------------------------------------------------


class TestBookingCrud:
    async def test_list_by_status(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.get("/api/v1/bookings", params={"status": "ACTIVE"}, headers=staff_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 1
        response = await client.get("/api/v1/bookings", params={"status": "CHECKED_OUT"}, headers=staff_headers)
        assert response.json()["items"] == []

    async def test_update_guest(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.put(
            f"/api/v1/bookings/{booking.id}",
            json={"guest_mobile": "+91 91111 11111", "tariff": "2500"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert response.json()["guest_mobile"] == "+91 91111 11111"
        assert response.json()["tariff"] == "2500.00"

    async def test_edit_dates_with_offset_after_checkout(
        self, client: AsyncClient, staff_headers: dict, booking
    ) -> None:
        await client.post(f"/api/v1/bookings/{booking.id}/checkout", params=JSON, json={}, headers=staff_headers)

        response = await client.put(
            f"/api/v1/bookings/{booking.id}",
            json={"check_in_date": "2020-01-01T05:30:00+05:30"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert response.json()["check_in_date"] == "2020-01-01T00:00:00"

        response = await client.put(
            f"/api/v1/bookings/{booking.id}",
            json={"checkout_date": "2019-12-31T00:00:00Z"},
            headers=staff_headers,
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    async def test_check_in_with_offset(self, client: AsyncClient, staff_headers: dict, room) -> None:
        data = await _check_in(client, staff_headers, room.id, check_in_date="2026-03-01T12:00:00Z")
        assert data["check_in_date"] == "2026-03-01T12:00:00"

    @pytest.mark.parametrize("payload", [{"status": "CHECKED_OUT"}, {"room_id": str(uuid.uuid4())}])
    async def test_update_rejects_protected_fields(
        self, client: AsyncClient, staff_headers: dict, booking, payload: dict
    ) -> None:
        response = await client.put(f"/api/v1/bookings/{booking.id}", json=payload, headers=staff_headers)
        assert response.status_code == 422

    async def test_delete_active_booking(self, client: AsyncClient, manager_headers: dict, booking) -> None:
        response = await client.delete(f"/api/v1/bookings/{booking.id}", headers=manager_headers)
        assert response.status_code == 409

    async def test_delete_after_checkout(
        self, client: AsyncClient, manager_headers: dict, staff_headers: dict, booking
    ) -> None:
        await client.post(f"/api/v1/bookings/{booking.id}/checkout", params=JSON, json={}, headers=staff_headers)

        response = await client.delete(f"/api/v1/bookings/{booking.id}", headers=staff_headers)
        assert response.status_code == 403
        response = await client.delete(f"/api/v1/bookings/{booking.id}", headers=manager_headers)
        assert response.status_code == 200
        response = await client.get(f"/api/v1/bookings/{booking.id}", headers=manager_headers)
        assert response.status_code == 404


# ---------------------------------------------------------------------------
# Food orders
# ---------------------------------------------------------------------------


class TestFoodOrders:
    async def test_add_and_list(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        response = await _order(client, staff_headers, booking.id, food_item.id, 2)
        assert response.status_code == 201
        assert response.json()["line_total"] == "300.00"
        assert response.json()["invoice_id"] is None

        response = await client.get(f"/api/v1/bookings/{booking.id}/food-orders", headers=staff_headers)
        assert response.status_code == 200
        assert len(response.json()["items"]) == 1
        assert response.json()["unbilled_total"] == "300.00"

    @pytest.mark.parametrize("quantity", [0, -1, "2", 1.5])
    async def test_bad_quantity(self, client: AsyncClient, staff_headers: dict, booking, food_item, quantity) -> None:
        response = await _order(client, staff_headers, booking.id, food_item.id, quantity)
        assert response.status_code == 422

    async def test_disabled_item(
        self, client: AsyncClient, manager_headers: dict, staff_headers: dict, booking, food_item
    ) -> None:
        await client.put(f"/api/v1/food/{food_item.id}", json={"enabled": False}, headers=manager_headers)
        response = await _order(client, staff_headers, booking.id, food_item.id)
        assert response.status_code == 400
        assert response.json()["kind"] == "item_disabled"

    async def test_remove_unbilled(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        order = (await _order(client, staff_headers, booking.id, food_item.id)).json()
        response = await client.delete(f"/api/v1/bookings/food/{order['id']}", headers=staff_headers)
        assert response.status_code == 200
        listing = await client.get(f"/api/v1/bookings/{booking.id}/food-orders", headers=staff_headers)
        assert listing.json()["items"] == []

    async def test_remove_billed(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        order = (await _order(client, staff_headers, booking.id, food_item.id)).json()
        await client.post(f"/api/v1/bookings/{booking.id}/kitchen-bill", params=JSON, json={}, headers=staff_headers)

        response = await client.delete(f"/api/v1/bookings/food/{order['id']}", headers=staff_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "already_invoiced"


# ---------------------------------------------------------------------------
# Kitchen bills
# ---------------------------------------------------------------------------


class TestKitchenBill:
    async def test_json_bill(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        await _order(client, staff_headers, booking.id, food_item.id, 2)
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/kitchen-bill",
            params=JSON,
            json={"show_gst": True, "gst_percent": "5"},
            headers=staff_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_type"] == "FOOD"
        assert data["invoice_number"].startswith("KITCHEN-")
        assert data["food_charges"] == "300.00"
        assert data["gst_amount"] == "15.00"
        assert data["total_amount"] == "315.00"

        response = await client.get(f"/api/v1/bookings/{booking.id}/kitchen-bill", headers=staff_headers)
        assert [i["id"] for i in response.json()] == [data["id"]]

    async def test_nothing_to_bill(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        await _order(client, staff_headers, booking.id, food_item.id)
        first = await client.post(
            f"/api/v1/bookings/{booking.id}/kitchen-bill", params=JSON, json={}, headers=staff_headers
        )
        assert first.status_code == 201

        second = await client.post(
            f"/api/v1/bookings/{booking.id}/kitchen-bill", params=JSON, json={}, headers=staff_headers
        )
        assert second.status_code == 409
        assert second.json()["kind"] == "nothing_to_settle"

    async def test_pdf_by_default(self, client: AsyncClient, staff_headers: dict, booking, food_item) -> None:
        await _order(client, staff_headers, booking.id, food_item.id)
        response = await client.post(f"/api/v1/bookings/{booking.id}/food-invoice", json={}, headers=staff_headers)
        assert response.status_code == 201
        assert response.headers["content-type"] == "application/pdf"
        assert "FOOD-INV-" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------


class TestCheckout:
    async def test_checkout(self, client: AsyncClient, staff_headers: dict, room, booking, food_item) -> None:
        await _order(client, staff_headers, booking.id, food_item.id, 2)
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout", params=JSON, json={}, headers=staff_headers
        )
        assert response.status_code == 201
        data = response.json()
        assert data["invoice_type"] == "ROOM"
        assert data["is_manual"] is False
        assert data["nights"] == 1
        assert data["room_charges"] == "1500.00"
        assert data["food_charges"] == "300.00"
        assert data["total_amount"] == "1800.00"

        booking_view = (await client.get(f"/api/v1/bookings/{booking.id}", headers=staff_headers)).json()
        assert booking_view["status"] == "CHECKED_OUT"
        assert booking_view["checkout_date"] is not None
        assert booking_view["room"]["status"] == "AVAILABLE"

        response = await _order(client, staff_headers, booking.id, food_item.id)
        assert response.status_code == 409
        assert response.json()["kind"] == "booking_not_active"

    async def test_hotel_default_gst_rate(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout", params=JSON, json={"show_gst": True}, headers=staff_headers
        )
        assert response.status_code == 201
        assert response.json()["gst_enabled"] is True
        assert response.json()["gst_amount"] == "75.00"
        assert response.json()["total_amount"] == "1575.00"

    async def test_checkout_twice(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        url = f"/api/v1/bookings/{booking.id}/checkout"
        assert (await client.post(url, params=JSON, json={}, headers=staff_headers)).status_code == 201
        response = await client.post(url, params=JSON, json={}, headers=staff_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "already_settled"

    async def test_with_payment(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout",
            params=JSON,
            json={"advance_amount": "500", "round_off": "-0.50", "payment_mode": "ONLINE", "payment_status": "PENDING"},
            headers=staff_headers,
        )
        assert response.status_code == 201
        assert response.json()["total_amount"] == "1000.50"

        payments = await client.get("/api/v1/payments", params={"booking_id": str(booking.id)}, headers=staff_headers)
        assert payments.json()["total"] == 1
        assert payments.json()["items"][0]["status"] == "PENDING"
        assert payments.json()["items"][0]["amount"] == "1000.50"

        pending = await client.get("/api/v1/bookings", params={"payment_pending": True}, headers=staff_headers)
        assert [b["id"] for b in pending.json()["items"]] == [str(booking.id)]

    async def test_advance_covers_bill(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout",
            params=JSON,
            json={"advance_amount": "1500", "payment_mode": "CASH"},
            headers=staff_headers,
        )
        assert response.status_code == 201
        assert response.json()["total_amount"] == "0.00"

        payments = await client.get("/api/v1/payments", params={"booking_id": str(booking.id)}, headers=staff_headers)
        assert payments.json()["total"] == 0

    async def test_advance_over_bill(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout",
            params=JSON,
            json={"advance_amount": "2000", "payment_mode": "CASH"},
            headers=staff_headers,
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

        booking_view = (await client.get(f"/api/v1/bookings/{booking.id}", headers=staff_headers)).json()
        assert booking_view["status"] == "ACTIVE"
        assert booking_view["room"]["status"] == "OCCUPIED"

    async def test_payment_status_needs_mode(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(
            f"/api/v1/bookings/{booking.id}/checkout",
            params=JSON,
            json={"payment_status": "PAID"},
            headers=staff_headers,
        )
        assert response.status_code == 422

    async def test_pdf_by_default(self, client: AsyncClient, staff_headers: dict, booking) -> None:
        response = await client.post(f"/api/v1/bookings/{booking.id}/checkout", json={}, headers=staff_headers)
        assert response.status_code == 201
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
