"""Helpers for masking guest contact details."""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")


def mask_email(value: str | None) -> str | None:
    if not value or "@" not in value:
        return value
    local, _, domain = value.partition("@")
    if not local:
        return "***@" + domain
    return f"{local[0]}***@{domain}"


def mask_phone(value: str | None) -> str | None:
    if not value:
        return value
    digits = [ch for ch in value if ch.isdigit()]
    if len(digits) < 4:
        return "***"
    return f"***{''.join(digits[-4:])}"


def mask_emails_in(text: str) -> str:
    """Mask every e-mail address found in free text."""
    return EMAIL_PATTERN.sub(r"\1***@\2", text)


__all__ = ["mask_email", "mask_emails_in", "mask_phone"]
