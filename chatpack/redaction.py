"""Credential masking for log output."""

from __future__ import annotations

import re
from typing import Mapping

MASK = "[REDACTED]"

_SENSITIVE_HEADER_TOKENS = ("auth", "token", "secret", "key")
_ALLOWED_HEADER_KEYS = {
    "accept",
    "content-type",
    "user-agent",
    "x-request-id",
}

SECRET_VALUE_PATTERNS = (
    re.compile(r"\bsk-[A-Za-z0-9_-]{8,}\b"),
    re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._-]{8,}"),
)


def mask_api_key(api_key: str) -> str | None:
    """Return `first4...last4`, or None when the key is too short to mask safely."""
    if len(api_key) <= 8:
        return None
    return f"{api_key[:4]}...{api_key[-4:]}"


def redact_headers(headers: Mapping[str, str], *, mask: str = MASK) -> dict[str, str]:
    redacted: dict[str, str] = {}
    for raw_key, raw_value in headers.items():
        key = str(raw_key)
        if _header_is_sensitive(key.strip().lower()):
            redacted[key] = mask
            continue
        redacted[key] = redact_text(str(raw_value), mask=mask)
    return redacted


def redact_text(text: str, *, mask: str = MASK) -> str:
    redacted = text
    for pattern in SECRET_VALUE_PATTERNS:
        redacted = pattern.sub(mask, redacted)
    return redacted


def _header_is_sensitive(key: str) -> bool:
    if key in _ALLOWED_HEADER_KEYS:
        return False
    return any(token in key for token in _SENSITIVE_HEADER_TOKENS)
