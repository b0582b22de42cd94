"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

from staybook.security.redact import mask_emails_in

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|access_token\"\s*:\s*\"[^\"]+\"|password\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)


def scrub(text: str) -> str:
    return mask_emails_in(_SENSITIVE_PATTERN.sub("**REDACTED**", text))


class SensitiveFilter(logging.Filter):
    """Redact tokens and passwords and mask guest e-mail addresses."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            message = record.getMessage() if record.args else record.msg
            record.msg = scrub(message)
            record.args = ()
        return True


__all__ = ["SensitiveFilter", "scrub"]
