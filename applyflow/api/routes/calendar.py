"""
Calendar endpoints.

Events are interviews with a scheduled date and referrals with a
follow-up date. Relative buckets use the caller's "now" (see ``?tz=``).
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.core.auth_dependency import get_current_user
from applyflow.core.clock_dependency import get_request_now
from applyflow.services import calendar_service, record_queries
from applyflow.schemas.calendar import CalendarEvent, GroupedEvents, TodayActionItems, MonthGrid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


def load_events(
    db: Session,
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[CalendarEvent]:
    """The user's calendar events in an optional inclusive date range."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must not be after end_date"
        )

    try:
        interviews = record_queries.list_scheduled_interviews(db, user_id, start_date, end_date)
        referrals = record_queries.list_follow_up_referrals(db, user_id, start_date, end_date)
        return calendar_service.build_calendar_events(interviews, referrals)
    except Exception as e:
        logger.error(f"Failed to load calendar events: user_id={user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load calendar events"
        )


@router.get("/events", response_model=List[CalendarEvent])
def get_events(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All events, sorted by date."""
    return load_events(db, user_id, start_date, end_date)


@router.get("/grouped", response_model=GroupedEvents)
def get_grouped_events(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    now: datetime = Depends(get_request_now),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Events bucketed into overdue, today, tomorrow, this week and later."""
    events = load_events(db, user_id, start_date, end_date)
    return calendar_service.group_events_by_period(events, now)


@router.get("/today", response_model=TodayActionItems)
def get_today(
    now: datetime = Depends(get_request_now),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Today's interviews and referral follow-ups."""
    events = load_events(db, user_id)
    return calendar_service.today_action_items(events, now)


@router.get("/month/{year}/{month}", response_model=MonthGrid)
def get_month(
    year: int = Path(..., ge=1970, le=9999),
    month: int = Path(..., ge=1, le=12),
    now: datetime = Depends(get_request_now),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Month grid with each day's events, Sunday-first."""
    first, last = calendar_service.month_bounds(year, month)
    # One spare day each side: the grid places events by local day in the caller's zone
    events = load_events(db, user_id, first.date() - timedelta(days=1), last.date() + timedelta(days=1))
    return calendar_service.build_month_grid(year, month, events, tz=now.tzinfo)
