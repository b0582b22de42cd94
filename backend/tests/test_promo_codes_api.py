"""Promo code API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_promo_code_admin_and_preview(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]

    create_resp = await client.post(
        "/api/v1/admin/promo-codes",
        json={"code": "summer10", "discount_type": "percent", "discount_value": "10"},
        headers=headers,
    )
    assert create_resp.status_code == 201
    promo = create_resp.json()
    assert promo["code"] == "SUMMER10"
    assert promo["used_count"] == 0

    duplicate = await client.post(
        "/api/v1/admin/promo-codes",
        json={"code": "SUMMER10", "discount_type": "fixed", "discount_value": "1000"},
        headers=headers,
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["code"] == "duplicate_code"

    for _ in range(2):
        preview = await client.post(
            "/api/v1/promo-codes/validate",
            json={"code": " Summer10 ", "total_price": 100_000},
        )
        assert preview.status_code == 200
        assert preview.json()["discount_amount"] == 10_000

    listed = await client.get("/api/v1/admin/promo-codes", headers=headers)
    assert listed.json()[0]["used_count"] == 0

    toggled = await client.patch(
        f"/api/v1/admin/promo-codes/{promo['id']}",
        json={"active": False},
        headers=headers,
    )
    assert toggled.status_code == 200
    assert toggled.json()["active"] is False

    rejected = await client.post(
        "/api/v1/promo-codes/validate",
        json={"code": "SUMMER10", "total_price": 100_000},
    )
    assert rejected.status_code == 400
    assert rejected.json()["detail"]["reason"] == "inactive"

    deleted = await client.delete(
        f"/api/v1/admin/promo-codes/{promo['id']}", headers=headers
    )
    assert deleted.status_code == 204


async def test_unknown_code_preview_is_a_hard_error(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    response = await client.post(
        "/api/v1/promo-codes/validate", json={"code": "NOPE", "total_price": 5_000}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "invalid code"


async def test_booking_redeems_promo_once(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]

    await client.post(
        "/api/v1/admin/promo-codes",
        json={
            "code": "ONCE",
            "discount_type": "fixed",
            "discount_value": "20000",
            "max_uses": 1,
        },
        headers=headers,
    )
    url = f"/api/v1/accommodations/{app_context['accommodation_id']}/reservations"
    booking = {
        "guest_first_name": "Awa",
        "guest_last_name": "Ngo",
        "guest_email": "awa@example.com",
        "guest_phone": "+237600000000",
        "check_in": "2030-08-01",
        "check_out": "2030-08-03",
        "guests": 2,
        "payment_method": "cash",
        "promo_code": "once",
    }

    first = await client.post(url, json=booking)
    assert first.status_code == 201
    assert first.json()["discount_amount"] == 20_000
    assert first.json()["total_price"] == 80_000

    second = await client.post(url, json=booking)
    assert second.status_code == 201
    assert second.json()["discount_amount"] is None
    assert second.json()["total_price"] == 100_000

    listed = await client.get("/api/v1/admin/promo-codes", headers=headers)
    assert listed.json()[0]["used_count"] == 1
