"""Transactional e-mails for reservations and pack requests."""

from __future__ import annotations

import logging
import smtplib
from datetime import date
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Iterable

from fastapi import BackgroundTasks
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
from sqlalchemy.exc import SQLAlchemyError

from staybook.core.config import get_settings
from staybook.models.pack import PackRequest
from staybook.models.reservation import PaymentMethod, Reservation
from staybook.security.redact import mask_email

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)

_PAYMENT_LABELS = {
    PaymentMethod.ORANGE_MONEY: "Orange Money",
    PaymentMethod.BANK_TRANSFER: "Bank transfer",
    PaymentMethod.CASH: "Cash",
}


def format_amount(amount: int | None) -> str:
    settings = get_settings()
    return f"{amount or 0:,}".replace(",", " ") + f" {settings.currency_label}"


def format_day(value: date | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d %B %Y")


def payment_label(method: PaymentMethod | str) -> str:
    try:
        return _PAYMENT_LABELS[PaymentMethod(method)]
    except ValueError:
        return str(method)


_ENV.filters["amount"] = format_amount
_ENV.filters["day"] = format_day
_ENV.filters["payment_label"] = payment_label


def render_template(name: str, **context: Any) -> str:
    settings = get_settings()
    template = _ENV.get_template(name)
    return template.render(
        site_url=settings.site_url.rstrip("/"),
        admin_email=settings.admin_email,
        **context,
    )


def schedule_email(
    background_tasks: BackgroundTasks,
    *,
    recipients: Iterable[str],
    subject: str,
    template: str,
    context: dict[str, Any],
) -> bool:
    """Render ``template`` and queue the e-mail for after the response is sent.

    Returns False when nothing was queued. A template that fails to render is
    logged and skipped; the caller's request has already succeeded.
    """
    recipients_list = [addr for addr in recipients if addr]
    if not recipients_list:
        logger.debug("No recipients provided for email; skipping")
        return False
    settings = get_settings()
    if not settings.smtp_host or not settings.smtp_port:
        logger.debug("SMTP disabled; skipping email %r", subject)
        return False
    try:
        html_body = render_template(template, **context)
    except (TemplateError, SQLAlchemyError):
        logger.exception("Could not render %s; email %r not sent", template, subject)
        return False
    background_tasks.add_task(_send_email, recipients_list, subject, html_body)
    return True


def _send_email(recipients: list[str], subject: str, html_body: str) -> None:
    settings = get_settings()
    if not settings.smtp_host or not settings.smtp_port:
        logger.info("SMTP settings missing; skipping email delivery")
        return

    message = EmailMessage()
    message["Subject"] = subject
    message["To"] = ", ".join(recipients)
    message["From"] = (
        settings.smtp_from or settings.smtp_username or "no-reply@staybook.local"
    )
    message.set_content("This message contains HTML content.")
    message.add_alternative(html_body, subtype="html")

    masked = [mask_email(addr) for addr in recipients]
    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as smtp:
            if settings.smtp_username and settings.smtp_password:
                smtp.starttls()
                smtp.login(settings.smtp_username, settings.smtp_password)
            smtp.send_message(message)
        logger.info("Email sent to %s", masked)
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send email to %s", masked)


def notify_reservation_created(
    reservation: Reservation, background_tasks: BackgroundTasks
) -> None:
    """Alert the administrator and acknowledge the guest's request."""
    settings = get_settings()
    accommodation = reservation.accommodation
    context = {"reservation": reservation, "accommodation": accommodation}
    schedule_email(
        background_tasks,
        recipients=[settings.admin_email],
        subject=(
            f"New reservation - {accommodation.name} (#{reservation.reference})"
        ),
        template="reservation_admin.html",
        context=context,
    )
    schedule_email(
        background_tasks,
        recipients=[reservation.guest_email],
        subject=f"Your reservation request - {accommodation.name}",
        template="reservation_guest.html",
        context=context,
    )


def notify_reservation_confirmed(
    reservation: Reservation, background_tasks: BackgroundTasks
) -> None:
    schedule_email(
        background_tasks,
        recipients=[reservation.guest_email],
        subject=f"Reservation confirmed - {reservation.accommodation.name}",
        template="reservation_confirmed.html",
        context={
            "reservation": reservation,
            "accommodation": reservation.accommodation,
        },
    )


def notify_reservation_cancelled(
    reservation: Reservation, background_tasks: BackgroundTasks
) -> None:
    schedule_email(
        background_tasks,
        recipients=[reservation.guest_email],
        subject=f"Reservation cancelled - {reservation.accommodation.name}",
        template="reservation_cancelled.html",
        context={
            "reservation": reservation,
            "accommodation": reservation.accommodation,
        },
    )


def notify_pack_request(
    pack_request: PackRequest, background_tasks: BackgroundTasks
) -> None:
    settings = get_settings()
    schedule_email(
        background_tasks,
        recipients=[settings.admin_email],
        subject=f"New pack request - {pack_request.pack_name}",
        template="pack_request_admin.html",
        context={"request": pack_request},
    )


__all__ = [
    "format_amount",
    "notify_pack_request",
    "notify_reservation_cancelled",
    "notify_reservation_confirmed",
    "notify_reservation_created",
    "render_template",
    "schedule_email",
]
