"""Keep secrets out of reprs and log lines."""

from __future__ import annotations

# Key substrings (case-insensitive) whose values are never logged.
SENSITIVE_KEY_MARKERS = ("secret", "token", "password", "credential")


def mask_value(value: str, visible: int = 4, mask: str = "***") -> str:
    """Keep the first ``visible`` characters of *value* and mask the rest."""
    if len(value) <= visible:
        return mask
    return value[:visible] + mask


def _is_sensitive(key: object) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


def redact_sensitive_fields(value: object, mask: str = "***") -> object:
    """Copy a decoded AWS CLI response with sensitive values replaced by *mask*."""
    if isinstance(value, dict):
        return {
            key: mask if _is_sensitive(key) else redact_sensitive_fields(val, mask)
            for key, val in value.items()
        }
    if isinstance(value, list):
        return [redact_sensitive_fields(item, mask) for item in value]
    return value
