"""Time helpers and the on-disk timestamp adapter."""

from __future__ import annotations

import re
from datetime import datetime, timezone

# Layout used by the AWS CLI for credential expirations, e.g.
# 2026-10-19T12:00:00+00:00. Seconds resolution, explicit UTC offset.
AWS_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_AWS_TIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:[+-]\d{2}:\d{2}|Z)$"
)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_aws_time(value: datetime) -> str:
    """Encode an aware datetime as ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    Sub-second precision is truncated. Offsets that are not whole minutes
    cannot be written in this layout and are converted to UTC. Naive values
    are rejected.
    """
    offset = value.utcoffset() if value.tzinfo is not None else None
    if offset is None:
        raise ValueError("timestamp must be timezone-aware")
    if offset.seconds % 60 or offset.microseconds:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0).isoformat(timespec="seconds")


def parse_aws_time(text: str) -> datetime:
    """Decode a timestamp written by :func:`format_aws_time` or the AWS CLI."""
    if not isinstance(text, str) or not _AWS_TIME_RE.match(text):
        raise ValueError(f"invalid timestamp layout: {str(text)[:64]!r}")
    return datetime.strptime(text, AWS_TIME_FORMAT)
