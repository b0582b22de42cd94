"""Reservation API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient
from jinja2 import TemplateError

from staybook.core.config import get_settings
from staybook.core.security import create_access_token
from staybook.services import notification_service

pytestmark = pytest.mark.asyncio


def _booking(**overrides: Any) -> dict[str, Any]:
    payload = {
        "guest_first_name": "Awa",
        "guest_last_name": "Ngo",
        "guest_email": "awa@example.com",
        "guest_phone": "+237600000000",
        "check_in": "2030-07-01",
        "check_out": "2030-07-04",
        "guests": 2,
        "payment_method": "orange_money",
    }
    payload.update(overrides)
    return payload


async def test_reservation_lifecycle(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]
    accommodation_id = str(app_context["accommodation_id"])

    create_resp = await client.post(
        f"/api/v1/accommodations/{accommodation_id}/reservations", json=_booking()
    )
    assert create_resp.status_code == 201
    created = create_resp.json()
    assert created["total_price"] == 150_000
    assert created["reservation_status"] == "pending"
    assert created["payment_status"] == "pending"
    assert len(created["reference"]) == 8
    reservation_id = created["id"]

    detail = await client.get(
        f"/api/v1/admin/reservations/{reservation_id}", headers=headers
    )
    assert detail.status_code == 200
    body = detail.json()
    assert body["subtotal"] == 150_000
    assert body["commission_amount"] == 15_000
    assert body["accommodation"]["slug"] == app_context["accommodation_slug"]
    assert body["accommodation"]["partner"]["name"] == "Atlantic Stays"
    assert body["accommodation"]["partner"]["phone"] == "+237677000000"

    confirm = await client.patch(
        f"/api/v1/admin/reservations/{reservation_id}/status",
        json={"status": "confirmed", "admin_notes": "Deposit expected"},
        headers=headers,
    )
    assert confirm.status_code == 200
    assert confirm.json()["reservation_status"] == "confirmed"
    assert confirm.json()["confirmed_at"] is not None

    paid = await client.patch(
        f"/api/v1/admin/reservations/{reservation_id}/payment",
        json={"status": "paid", "payment_reference": "OM-42"},
        headers=headers,
    )
    assert paid.status_code == 200
    assert paid.json()["payment_status"] == "paid"

    cancel = await client.patch(
        f"/api/v1/admin/reservations/{reservation_id}/status",
        json={"status": "cancelled"},
        headers=headers,
    )
    assert cancel.status_code == 409
    assert cancel.json()["detail"]["code"] == "invalid_transition"

    unavailable = await client.get(
        f"/api/v1/accommodations/{accommodation_id}/unavailable-dates"
    )
    assert unavailable.status_code == 200
    assert unavailable.json()["dates"] == ["2030-07-01", "2030-07-02", "2030-07-03"]

    overlapping = await client.post(
        f"/api/v1/accommodations/{accommodation_id}/reservations",
        json=_booking(check_in="2030-07-03", check_out="2030-07-05"),
    )
    assert overlapping.status_code == 409
    assert overlapping.json()["detail"]["code"] == "dates_unavailable"

    listed = await client.get(
        "/api/v1/admin/reservations", params={"status": "confirmed"}, headers=headers
    )
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()] == [reservation_id]


async def test_create_reservation_validation_errors(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    accommodation_id = str(app_context["accommodation_id"])
    url = f"/api/v1/accommodations/{accommodation_id}/reservations"

    backwards = await client.post(
        url, json=_booking(check_in="2030-07-04", check_out="2030-07-01")
    )
    assert backwards.status_code == 400
    assert backwards.json()["detail"]["code"] == "invalid_dates"

    crowded = await client.post(url, json=_booking(guests=10))
    assert crowded.status_code == 400
    assert crowded.json()["detail"]["code"] == "invalid_guests"

    missing_email = _booking()
    missing_email.pop("guest_email")
    assert (await client.post(url, json=missing_email)).status_code == 422

    unknown = await client.post(
        "/api/v1/accommodations/00000000-0000-0000-0000-000000000000/reservations",
        json=_booking(),
    )
    assert unknown.status_code == 404


async def test_conflict_report_lists_pending_overlaps(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]
    url = f"/api/v1/accommodations/{app_context['accommodation_id']}/reservations"

    first = (await client.post(url, json=_booking())).json()
    second = (
        await client.post(
            url, json=_booking(check_in="2030-07-02", check_out="2030-07-06")
        )
    ).json()

    await client.patch(
        f"/api/v1/admin/reservations/{first['id']}/status",
        json={"status": "confirmed"},
        headers=headers,
    )

    conflicts = await client.get("/api/v1/admin/reservations/conflicts", headers=headers)
    assert conflicts.status_code == 200
    pairs = [(c["pending"]["id"], c["confirmed"]["id"]) for c in conflicts.json()]
    assert pairs == [(second["id"], first["id"])]

    rejected = await client.patch(
        f"/api/v1/admin/reservations/{second['id']}/status",
        json={"status": "confirmed"},
        headers=headers,
    )
    assert rejected.status_code == 409
    assert rejected.json()["detail"]["code"] == "dates_unavailable"


async def test_admin_endpoints_require_admin_token(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    anonymous = await client.get("/api/v1/admin/reservations")
    assert anonymous.status_code == 401

    guest_token = create_access_token("guest@example.com", role="guest")
    forbidden = await client.get(
        "/api/v1/admin/reservations",
        headers={"Authorization": f"Bearer {guest_token}"},
    )
    assert forbidden.status_code == 403

    garbage = await client.get(
        "/api/v1/admin/reservations", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert garbage.status_code == 401


async def test_booking_survives_email_rendering_failure(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["admin_headers"]
    accommodation_id = str(app_context["accommodation_id"])

    def _broken_template(name: str, **context: Any) -> str:
        raise TemplateError(f"cannot render {name}")

    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "2525")
    get_settings.cache_clear()
    monkeypatch.setattr(notification_service, "render_template", _broken_template)
    try:
        created = await client.post(
            f"/api/v1/accommodations/{accommodation_id}/reservations",
            json=_booking(),
        )
        assert created.status_code == 201

        cancelled = await client.patch(
            f"/api/v1/admin/reservations/{created.json()['id']}/status",
            json={"status": "cancelled", "cancellation_reason": "Guest request"},
            headers=headers,
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["reservation_status"] == "cancelled"
    finally:
        monkeypatch.delenv("SMTP_HOST")
        monkeypatch.delenv("SMTP_PORT")
        get_settings.cache_clear()
