from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..core.constants import IST_OFFSET_MINUTES

IST = timezone(timedelta(minutes=IST_OFFSET_MINUTES), name="IST")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def ist_day_bounds(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return [start, end) of the current calendar day in UTC+5:30."""
    current = (now or now_utc()).astimezone(IST)
    start = current.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)
