from __future__ import annotations
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from .models import DAYS

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo  # type: ignore


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_local(dt_utc: datetime) -> datetime:
    if dt_utc.tzinfo is None:
        dt_utc = dt_utc.replace(tzinfo=timezone.utc)
    return dt_utc.astimezone(local_tz())


def timestamp_ms(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // timedelta(milliseconds=1)


def weekday_name(dt_local: datetime) -> str:
    """Day label for dt_local. DAYS starts on Sunday, datetime.weekday() on Monday."""
    return DAYS[(dt_local.weekday() + 1) % 7]


def parse_hhmm(s: str) -> Optional[time]:
    try:
        hh, mm = s.strip().split(":")
        return time(int(hh), int(mm))
    except (ValueError, AttributeError):
        return None


def normalize_hhmm(s: Optional[str], default: str) -> str:
    # Zero padding keeps string order equal to chronological order.
    t = parse_hhmm(s) if s else None
    if t is None:
        return default
    return f"{t.hour:02d}:{t.minute:02d}"
