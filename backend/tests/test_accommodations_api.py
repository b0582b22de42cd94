"""Accommodation API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_accommodation_admin_crud(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]
    partner_id = str(app_context["partner_id"])

    create_resp = await client.post(
        "/api/v1/admin/accommodations",
        json={
            "name": "Chambre Étoile",
            "partner_id": partner_id,
            "accommodation_type": "room",
            "capacity": 2,
            "price_per_night": 25_000,
            "commission_rate": "12.5",
            "amenities": ["wifi", "ac"],
        },
        headers=headers,
    )
    assert create_resp.status_code == 201
    room = create_resp.json()
    assert room["slug"] == "chambre-etoile"
    assert room["status"] == "active"
    assert room["partner"]["name"] == "Atlantic Stays"
    assert "iban" not in room["partner"]

    duplicate = await client.post(
        "/api/v1/admin/accommodations",
        json={
            "name": "Chambre Etoile",
            "partner_id": partner_id,
            "accommodation_type": "room",
            "capacity": 2,
            "price_per_night": 25_000,
        },
        headers=headers,
    )
    assert duplicate.status_code == 400

    updated = await client.patch(
        f"/api/v1/admin/accommodations/{room['id']}",
        json={"price_per_night": 30_000},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["price_per_night"] == 30_000

    by_slug = await client.get("/api/v1/accommodations/chambre-etoile")
    assert by_slug.status_code == 200

    deactivated = await client.delete(
        f"/api/v1/admin/accommodations/{room['id']}", headers=headers
    )
    assert deactivated.json()["status"] == "inactive"
    assert (await client.get("/api/v1/accommodations/chambre-etoile")).status_code == 404

    everything = await client.get("/api/v1/admin/accommodations", headers=headers)
    assert len(everything.json()) == 2


async def test_public_listing_filters(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]
    accommodation_id = str(app_context["accommodation_id"])

    assert len((await client.get("/api/v1/accommodations")).json()) == 1
    assert (
        await client.get("/api/v1/accommodations", params={"type": "room"})
    ).json() == []
    assert (
        await client.get("/api/v1/accommodations", params={"min_capacity": 5})
    ).json() == []
    assert (
        await client.get("/api/v1/accommodations", params={"max_price": 10_000})
    ).json() == []

    block = await client.put(
        f"/api/v1/admin/accommodations/{accommodation_id}/availability",
        json={"dates": ["2030-09-10", "2030-09-11"]},
        headers=headers,
    )
    assert block.status_code == 200
    assert block.json() == ["2030-09-10", "2030-09-11"]

    blocked_stay = await client.get(
        "/api/v1/accommodations",
        params={"check_in": "2030-09-09", "check_out": "2030-09-12"},
    )
    assert blocked_stay.json() == []

    free_stay = await client.get(
        "/api/v1/accommodations",
        params={"check_in": "2030-09-12", "check_out": "2030-09-14"},
    )
    assert [item["id"] for item in free_stay.json()] == [accommodation_id]

    unavailable = await client.get(
        f"/api/v1/accommodations/{accommodation_id}/unavailable-dates"
    )
    assert unavailable.json()["dates"] == ["2030-09-10", "2030-09-11"]

    unblock = await client.put(
        f"/api/v1/admin/accommodations/{accommodation_id}/availability",
        json={"dates": ["2030-09-10"], "blocked": False},
        headers=headers,
    )
    assert unblock.status_code == 200
    unavailable = await client.get(
        f"/api/v1/accommodations/{accommodation_id}/unavailable-dates"
    )
    assert unavailable.json()["dates"] == ["2030-09-11"]
