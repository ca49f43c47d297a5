from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def local_today(tz_name: Optional[str] = None) -> date:
    """Current calendar day in ``tz_name``, or in the server's local zone when unset."""
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
