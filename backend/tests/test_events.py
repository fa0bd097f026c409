"""
Tests for event endpoints.
"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/v1/events/",
        json={
            "name": "Anniversary",
            "description": "Tenth anniversary dinner",
            "event_date": (date.today() + timedelta(days=14)).isoformat(),
            "city": "Hyderabad",
            "venue": "Banjara Hall",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Anniversary"
    assert data["created_by"] == "testuser"


@pytest.mark.asyncio
async def test_create_event_unauthorized(client: AsyncClient):
    response = await client.post(
        "/api/v1/events/",
        json={
            "name": "Unauthorized",
            "event_date": (date.today() + timedelta(days=14)).isoformat(),
            "city": "Pune",
            "venue": "Nowhere",
        },
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_event_in_past(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/v1/events/",
        json={
            "name": "Yesterday",
            "event_date": (date.today() - timedelta(days=3)).isoformat(),
            "city": "Pune",
            "venue": "Old Hall",
        },
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_events(client: AsyncClient, test_event):
    response = await client.get("/api/v1/events/")
    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["Birthday"]


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/v1/events/{test_event.id}")
    assert response.status_code == 200
    assert response.json()["venue"] == "Lakeview Hall"


@pytest.mark.asyncio
async def test_get_missing_event(client: AsyncClient):
    response = await client.get("/api/v1/events/99999")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "not_found", "message": "Event 99999 not found"}


@pytest.mark.asyncio
async def test_lookup_event_by_name(client: AsyncClient, test_event):
    response = await client.get("/api/v1/events/lookup/birthday")
    assert response.status_code == 200
    assert response.json()["event_id"] == test_event.id

    missing = await client.get("/api/v1/events/lookup/funeral")
    assert missing.status_code == 404
