"""Date and timestamp parsing shared by matching, ordering and payload coercion."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

OPEN_END_SORT_DATE = "9999-12-31"

_ISO_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_day(raw: Any) -> datetime | None:
    """Parse an ISO calendar date into a UTC-midnight instant.

    Returns None for anything that is not a real ``YYYY-MM-DD`` date, so
    callers can treat the value as unmatchable instead of handling errors.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not _ISO_DAY_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=UTC)
    except ValueError:
        return None


def is_iso_day(raw: Any) -> bool:
    return parse_calendar_day(raw) is not None



def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO timestamp into an aware UTC datetime.

    Accepts a trailing ``Z``, explicit offsets and any fractional precision.
    Naive values are read as UTC. Returns None when unparsable.
    """
    if isinstance(raw, datetime):
        return _as_utc(raw)
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc(parsed)
