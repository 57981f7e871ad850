from __future__ import annotations

from datetime import datetime, timezone
from .config import DT_FORMAT


def parse_dt(s: str) -> datetime:
    """
    Parse datetime in format 'dd/mm/yyyy - HH:MM', or ISO-8601 when it does not match.
    Results are naive UTC: an ISO offset is applied and then dropped.
    """
    s = s.strip()
    try:
        return datetime.strptime(s, DT_FORMAT)
    except ValueError:
        dt = datetime.fromisoformat(s)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt
