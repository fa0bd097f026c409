"""
Tests for the booking lifecycle endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, test_user, test_event):
    """New bookings start CONFIRMED with the supplied plan, price and guests."""
    response = await client.post(
        "/api/v1/bookings/",
        json={
            "user_id": test_user.id,
            "event_id": test_event.id,
            "plan": "Silver",
            "price": 2500,
            "guests": 12,
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "CONFIRMED"
    assert data["plan"] == "Silver"
    assert data["price"] == 2500
    assert data["guests"] == 12
    assert data["payment_date"] is None

    detail = await client.get(f"/api/v1/bookings/{data['id']}")
    assert detail.status_code == 200
    assert detail.json()["status"] == "CONFIRMED"
    assert detail.json()["event_name"] == "Birthday"
    assert detail.json()["username"] == "testuser"


@pytest.mark.asyncio
async def test_create_booking_missing_ids(client: AsyncClient, test_event):
    """Missing user or event ID is a 400, not a schema error."""
    response = await client.post(
        "/api/v1/bookings/",
        json={"event_id": test_event.id, "plan": "Gold", "price": 100, "guests": 2},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


@pytest.mark.asyncio
async def test_create_booking_unknown_event(client: AsyncClient, test_user):
    response = await client.post(
        "/api/v1/bookings/",
        json={"user_id": test_user.id, "event_id": 99999, "plan": "Gold", "price": 100, "guests": 2},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_booking_rejects_zero_guests(client: AsyncClient, test_user, test_event):
    response = await client.post(
        "/api/v1/bookings/",
        json={"user_id": test_user.id, "event_id": test_event.id, "plan": "Gold", "price": 100, "guests": 0},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_agree_booking(client: AsyncClient, test_booking):
    response = await client.put(f"/api/v1/bookings/{test_booking.id}/agree")
    assert response.status_code == 200
    assert response.json()["success"] is True

    detail = await client.get(f"/api/v1/bookings/{test_booking.id}")
    assert detail.json()["status"] == "AGREED"


@pytest.mark.asyncio
async def test_agree_missing_booking(client: AsyncClient):
    response = await client.put("/api/v1/bookings/99999/agree")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pay_without_coupon(client: AsyncClient, test_booking):
    """Without a coupon the quoted price is stored as given."""
    response = await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json={"price": 5000})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "PAID"
    assert data["price"] == 5000
    assert data["payment_date"] is not None
    assert data["coupon_code"] is None
    assert data["venue"] == "Lakeview Hall"


@pytest.mark.asyncio
async def test_pay_with_coupon(client: AsyncClient, test_booking, valid_coupon):
    response = await client.post(
        f"/api/v1/bookings/{test_booking.id}/pay",
        json={"price": 4500, "coupon": "SAVE10"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "PAID"
    assert data["price"] == 4500
    assert data["coupon_code"] == "SAVE10"


@pytest.mark.asyncio
async def test_retry_pay_with_coupon_succeeds(client: AsyncClient, test_booking, valid_coupon):
    """Repeating a successful coupon payment gives the same result."""
    payload = {"price": 4500, "coupon": "SAVE10"}

    first = await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json=payload)
    retry = await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json=payload)

    assert first.status_code == 200
    assert retry.status_code == 200
    assert retry.json()["price"] == 4500
    assert retry.json()["list_price"] == 5000
    assert retry.json()["status"] == "PAID"


@pytest.mark.asyncio
async def test_coupon_discount_does_not_compound(client: AsyncClient, test_booking, valid_coupon):
    """A second payment cannot apply the coupon on top of the discounted price."""
    await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json={"price": 4500, "coupon": "SAVE10"})

    response = await client.post(
        f"/api/v1/bookings/{test_booking.id}/pay",
        json={"price": 4050, "coupon": "SAVE10"},
    )
    assert response.status_code == 400

    detail = (await client.get(f"/api/v1/bookings/{test_booking.id}")).json()
    assert detail["price"] == 4500
    assert detail["list_price"] == 5000


@pytest.mark.asyncio
async def test_pay_with_coupon_price_mismatch(client: AsyncClient, test_booking, valid_coupon):
    """The server computes the discount; a made-up price is rejected."""
    response = await client.post(
        f"/api/v1/bookings/{test_booking.id}/pay",
        json={"price": 1, "coupon": "SAVE10"},
    )
    assert response.status_code == 400

    detail = await client.get(f"/api/v1/bookings/{test_booking.id}")
    assert detail.json()["status"] == "CONFIRMED"
    assert detail.json()["price"] == 5000


@pytest.mark.asyncio
async def test_pay_with_expired_coupon(client: AsyncClient, test_booking, expired_coupon):
    """Expired coupon fails and leaves the booking untouched."""
    await client.put(f"/api/v1/bookings/{test_booking.id}/agree")

    response = await client.post(
        f"/api/v1/bookings/{test_booking.id}/pay",
        json={"price": 4000, "coupon": "OLD20"},
    )
    assert response.status_code == 410
    assert response.json()["error"] == "coupon_expired"

    detail = await client.get(f"/api/v1/bookings/{test_booking.id}")
    assert detail.json()["status"] == "AGREED"
    assert detail.json()["payment_date"] is None


@pytest.mark.asyncio
async def test_pay_with_unknown_coupon(client: AsyncClient, test_booking):
    response = await client.post(
        f"/api/v1/bookings/{test_booking.id}/pay",
        json={"price": 4500, "coupon": "NOPE"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pay_missing_booking(client: AsyncClient):
    response = await client.post("/api/v1/bookings/99999/pay", json={"price": 100})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pay_requires_positive_price(client: AsyncClient, test_booking):
    missing = await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json={})
    assert missing.status_code == 400

    zero = await client.post(f"/api/v1/bookings/{test_booking.id}/pay", json={"price": 0})
    assert zero.status_code == 400


@pytest.mark.asyncio
async def test_update_booking(client: AsyncClient, test_booking):
    response = await client.put(
        f"/api/v1/bookings/{test_booking.id}",
        json={"date": "2026-12-24", "plan": "Platinum", "guests": 40},
    )
    assert response.status_code == 200

    detail = (await client.get(f"/api/v1/bookings/{test_booking.id}")).json()
    assert detail["plan"] == "Platinum"
    assert detail["guests"] == 40
    assert detail["booking_date"].startswith("2026-12-24")
    assert detail["status"] == "CONFIRMED"


@pytest.mark.asyncio
async def test_update_missing_booking(client: AsyncClient):
    response = await client.put(
        "/api/v1/bookings/99999",
        json={"date": "2026-12-24", "plan": "Gold", "guests": 5},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_is_idempotent(client: AsyncClient, test_booking):
    first = await client.post(f"/api/v1/bookings/{test_booking.id}/cancel")
    second = await client.post(f"/api/v1/bookings/{test_booking.id}/cancel")
    assert first.status_code == 200
    assert second.status_code == 200

    detail = await client.get(f"/api/v1/bookings/{test_booking.id}")
    assert detail.json()["status"] == "CANCELLED"


@pytest.mark.asyncio
async def test_cancel_missing_booking(client: AsyncClient):
    response = await client.post("/api/v1/bookings/99999/cancel")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_booking(client: AsyncClient, test_booking):
    response = await client.delete(f"/api/v1/bookings/{test_booking.id}")
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/bookings/{test_booking.id}")).status_code == 404
    assert (await client.delete(f"/api/v1/bookings/{test_booking.id}")).status_code == 404


@pytest.mark.asyncio
async def test_list_bookings_for_user(client: AsyncClient, test_user, test_booking):
    by_id = await client.get(f"/api/v1/bookings/user/{test_user.id}")
    assert by_id.status_code == 200
    assert [b["id"] for b in by_id.json()] == [test_booking.id]

    by_name = await client.get("/api/v1/bookings/username/testuser")
    assert by_name.status_code == 200
    assert by_name.json()[0]["event_name"] == "Birthday"

    nobody = await client.get("/api/v1/bookings/username/nobody")
    assert nobody.json() == []


@pytest.mark.asyncio
async def test_full_lifecycle(client: AsyncClient, test_user, test_event, valid_coupon):
    """Create -> agree -> pay with a coupon."""
    created = await client.post(
        "/api/v1/bookings/",
        json={
            "user_id": test_user.id,
            "event_id": test_event.id,
            "plan": "Gold",
            "price": 5000,
            "guests": 20,
        },
    )
    booking_id = created.json()["id"]

    assert (await client.put(f"/api/v1/bookings/{booking_id}/agree")).status_code == 200

    paid = await client.post(
        f"/api/v1/bookings/{booking_id}/pay",
        json={"price": 4500, "coupon": "SAVE10"},
    )
    assert paid.status_code == 200
    data = paid.json()
    assert data["status"] == "PAID"
    assert data["price"] == 4500
    assert data["coupon_code"] == "SAVE10"
    assert data["payment_date"] is not None
