"""
Record queries: the read side every aggregator consumes.

Each function takes the caller's user id explicitly and returns only that
user's rows. Optional ``start_date`` / ``end_date`` bounds are inclusive
and apply to the date column that drives the view (applied date for
applications, scheduled date for interviews, follow-up date for referrals).
"""
import logging
from datetime import date, datetime, time, timezone
from typing import List, Optional, Union

from sqlalchemy.orm import Session, joinedload

from applyflow.core.statuses import ApplicationStatus, InterviewStatus
from applyflow.db.models import Application, Referral, Resume, Interview, Activity

logger = logging.getLogger(__name__)

DateBound = Optional[Union[date, datetime]]


def _as_date(value: DateBound) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _start_of_day(value: DateBound) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _end_of_day(value: DateBound) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


def list_applications(
    db: Session,
    user_id: str,
    start_date: DateBound = None,
    end_date: DateBound = None,
    status: Optional[ApplicationStatus] = None,
) -> List[Application]:
    """A user's applications, newest applied date first."""
    query = (
        db.query(Application)
        .options(joinedload(Application.resume))
        .filter(Application.user_id == user_id)
    )

    if start_date:
        query = query.filter(Application.applied_date >= _as_date(start_date))
    if end_date:
        query = query.filter(Application.applied_date <= _as_date(end_date))
    if status:
        query = query.filter(Application.status == status)

    applications = query.order_by(Application.applied_date.desc(), Application.id.desc()).all()
    logger.debug(f"Applications fetched: user_id={user_id}, count={len(applications)}")
    return applications


def list_referrals(db: Session, user_id: str) -> List[Referral]:
    """A user's referrals, newest first."""
    return (
        db.query(Referral)
        .filter(Referral.user_id == user_id)
        .order_by(Referral.created_at.desc(), Referral.id.desc())
        .all()
    )


def list_follow_up_referrals(
    db: Session,
    user_id: str,
    start_date: DateBound = None,
    end_date: DateBound = None,
) -> List[Referral]:
    """Referrals with a follow-up date, soonest first."""
    query = db.query(Referral).filter(
        Referral.user_id == user_id,
        Referral.follow_up_date.isnot(None),
    )

    if start_date:
        query = query.filter(Referral.follow_up_date >= _as_date(start_date))
    if end_date:
        query = query.filter(Referral.follow_up_date <= _as_date(end_date))

    return query.order_by(Referral.follow_up_date.asc()).all()


def list_resumes(db: Session, user_id: str) -> List[Resume]:
    """A user's resumes, newest first."""
    return (
        db.query(Resume)
        .filter(Resume.user_id == user_id)
        .order_by(Resume.created_at.desc(), Resume.id.desc())
        .all()
    )


def list_interviews(db: Session, user_id: str) -> List[Interview]:
    """A user's interviews by scheduled date; unscheduled rounds last."""
    return (
        db.query(Interview)
        .options(joinedload(Interview.application))
        .filter(Interview.user_id == user_id)
        .order_by(Interview.scheduled_date.is_(None), Interview.scheduled_date.asc())
        .all()
    )


def list_scheduled_interviews(
    db: Session,
    user_id: str,
    start_date: DateBound = None,
    end_date: DateBound = None,
) -> List[Interview]:
    """Interviews that have a scheduled date, soonest first."""
    query = (
        db.query(Interview)
        .options(joinedload(Interview.application))
        .filter(
            Interview.user_id == user_id,
            Interview.scheduled_date.isnot(None),
        )
    )

    if start_date:
        query = query.filter(Interview.scheduled_date >= _start_of_day(start_date))
    if end_date:
        query = query.filter(Interview.scheduled_date <= _end_of_day(end_date))

    return query.order_by(Interview.scheduled_date.asc()).all()


def list_upcoming_interviews(
    db: Session,
    user_id: str,
    now: Optional[datetime] = None,
) -> List[Interview]:
    """Scheduled interviews from ``now`` onward."""
    now = now or datetime.now(timezone.utc)
    return (
        db.query(Interview)
        .options(joinedload(Interview.application))
        .filter(
            Interview.user_id == user_id,
            Interview.status == InterviewStatus.SCHEDULED,
            Interview.scheduled_date >= now,
        )
        .order_by(Interview.scheduled_date.asc())
        .all()
    )


def list_recent_activities(db: Session, user_id: str, limit: int = 20) -> List[Activity]:
    """Most recent activity log entries."""
    return (
        db.query(Activity)
        .filter(Activity.user_id == user_id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
        .all()
    )
