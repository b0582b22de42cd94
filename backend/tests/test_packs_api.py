"""Pack API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_pack_catalogue_and_requests(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]

    create_resp = await client.post(
        "/api/v1/admin/packs",
        json={
            "name": "Week-end Romantique",
            "pack_type": "couple",
            "short_description": "Two nights by the sea",
            "accommodation_ids": [str(app_context["accommodation_id"])],
            "featured": True,
        },
        headers=headers,
    )
    assert create_resp.status_code == 201
    pack = create_resp.json()
    assert pack["slug"] == "week-end-romantique"
    assert [acc["id"] for acc in pack["accommodations"]] == [
        str(app_context["accommodation_id"])
    ]

    public = await client.get("/api/v1/packs")
    assert [item["id"] for item in public.json()] == [pack["id"]]

    by_slug = await client.get("/api/v1/packs/week-end-romantique")
    assert by_slug.status_code == 200

    request_resp = await client.post(
        f"/api/v1/packs/{pack['id']}/requests",
        json={
            "first_name": "Marie",
            "last_name": "Essomba",
            "email": "marie@example.com",
            "phone": "+237699000000",
            "event_date": "2030-02-14",
            "guests": 2,
            "promo_code": "love",
        },
    )
    assert request_resp.status_code == 201
    pack_request = request_resp.json()
    assert pack_request["status"] == "new"
    assert pack_request["promo_code"] == "LOVE"

    requests = await client.get(
        "/api/v1/admin/pack-requests", params={"status": "new"}, headers=headers
    )
    assert [item["id"] for item in requests.json()] == [pack_request["id"]]

    processed = await client.patch(
        f"/api/v1/admin/pack-requests/{pack_request['id']}",
        json={"status": "processed"},
        headers=headers,
    )
    assert processed.status_code == 200
    assert processed.json()["status"] == "processed"

    stats = await client.get("/api/v1/admin/stats", headers=headers)
    assert stats.status_code == 200
    assert stats.json()["new_pack_requests"] == 0

    deleted = await client.delete(f"/api/v1/admin/packs/{pack['id']}", headers=headers)
    assert deleted.json()["status"] == "inactive"
    assert (await client.get("/api/v1/packs")).json() == []
    assert (await client.get("/api/v1/packs/week-end-romantique")).status_code == 404
