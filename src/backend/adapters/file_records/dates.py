from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any

from common.period_engine.temporal import reporting_zone, to_local_naive

_TEXT_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")

# Epoch values at or above this magnitude are read as milliseconds.
_MILLIS_THRESHOLD = 1e12


def normalize_date(value: Any, tz: tzinfo | None = None) -> datetime | None:
    """
    Coerce a stored date into a naive local datetime, or None when it cannot be read.

    Accepted inputs:
    - datetime / date objects
    - timestamp objects or mappings with `seconds` (and optional `nanoseconds`)
    - epoch numbers in seconds or milliseconds
    - ISO-8601 strings (a trailing `Z` is read as UTC), `YYYY-MM-DD`, `DD/MM/YYYY`

    Instants (timestamps, epochs, timezone-aware values) are expressed as wall-clock
    time in `tz`, the reporting zone by default. Naive values are taken as local already.
    """
    if value is None or isinstance(value, (bool, timedelta)):
        return None
    zone = tz or reporting_zone()
    if isinstance(value, datetime):
        return to_local_naive(value, zone)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, dict):
        return _from_timestamp_fields(value.get("seconds"), value.get("nanoseconds"), zone)
    if hasattr(value, "seconds") and not isinstance(value, (str, bytes)):
        return _from_timestamp_fields(getattr(value, "seconds"), getattr(value, "nanoseconds", 0), zone)
    if isinstance(value, (int, float)):
        return _from_epoch(value, zone)
    if isinstance(value, str):
        return _from_text(value, zone)
    return None


def _from_timestamp_fields(seconds: Any, nanoseconds: Any, zone: tzinfo) -> datetime | None:
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return None
    if isinstance(nanoseconds, bool) or not isinstance(nanoseconds, (int, float)):
        nanoseconds = 0
    return _from_epoch(seconds + nanoseconds / 1e9, zone)


def _from_epoch(value: float, zone: tzinfo) -> datetime | None:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    seconds = value / 1000 if abs(value) >= _MILLIS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=zone).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return None


def _from_text(value: str, zone: tzinfo) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return to_local_naive(datetime.fromisoformat(iso), zone)
    except ValueError:
        pass
    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
