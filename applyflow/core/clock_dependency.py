"""
Request clock.

Relative views (overdue, today, upcoming) are computed against "now" in the
caller's timezone. Clients pass an IANA zone name as ``?tz=``; without it
UTC is used.
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import HTTPException, Query, status

logger = logging.getLogger(__name__)


def get_request_now(
    tz: Optional[str] = Query(None, description="IANA timezone, e.g. Europe/Berlin"),
) -> datetime:
    """Current time as an aware datetime in the requested zone."""
    if not tz:
        return datetime.now(timezone.utc)

    try:
        zone = ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone requested: tz={tz}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone: {tz}"
        )

    return datetime.now(zone)
