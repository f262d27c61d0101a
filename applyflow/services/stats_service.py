"""
Stats aggregator for the dashboard.

Pure functions over already-fetched records: counts per status plus the
derived response and success rates. No I/O happens here.
"""
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional

from applyflow.core.statuses import (
    ApplicationStatus,
    ReferralStatus,
    InterviewStatus,
    INACTIVE_STATUSES,
    coerce_status,
)
from applyflow.schemas.resume import ResumeResponse
from applyflow.schemas.stats import (
    ApplicationStats,
    ReferralStats,
    ResumeStats,
    InterviewStats,
    DashboardStats,
)

logger = logging.getLogger(__name__)


def percentage(part: float, total: float) -> float:
    """part / total * 100, or 0 when total is 0."""
    if not total:
        return 0.0
    return (part / total) * 100


def count_by_status(records: Iterable, enum_cls) -> dict:
    """Count records per member of ``enum_cls``; every member is present."""
    counts = Counter(coerce_status(getattr(r, "status", None), enum_cls) for r in records)
    return {member.value: counts.get(member, 0) for member in enum_cls}


def application_stats(applications) -> ApplicationStats:
    applications = list(applications or [])
    total = len(applications)
    by_status = count_by_status(applications, ApplicationStatus)

    interviews = by_status[ApplicationStatus.INTERVIEW.value]
    offers = by_status[ApplicationStatus.OFFER.value]
    inactive = sum(by_status[s.value] for s in INACTIVE_STATUSES)

    return ApplicationStats(
        total=total,
        by_status=by_status,
        active=total - inactive,
        response_rate=percentage(interviews + offers, total),
        success_rate=percentage(offers, total),
    )


def referral_stats(referrals) -> ReferralStats:
    referrals = list(referrals or [])
    return ReferralStats(
        total=len(referrals),
        by_status=count_by_status(referrals, ReferralStatus),
    )


def resume_stats(resumes) -> ResumeStats:
    resumes = list(resumes or [])
    if not resumes:
        return ResumeStats()

    # max() keeps the first resume on ties
    top = max(resumes, key=lambda r: r.success_rate or 0)

    return ResumeStats(
        total=len(resumes),
        total_used=sum(r.times_used or 0 for r in resumes),
        average_success_rate=sum(r.success_rate or 0 for r in resumes) / len(resumes),
        top_resume=ResumeResponse.model_validate(top),
    )


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; treat them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def interview_stats(interviews, now: Optional[datetime] = None) -> InterviewStats:
    interviews = list(interviews or [])
    now = _as_aware(now or datetime.now(timezone.utc))

    upcoming = sum(
        1
        for i in interviews
        if coerce_status(i.status, InterviewStatus) == InterviewStatus.SCHEDULED
        and i.scheduled_date is not None
        and _as_aware(i.scheduled_date) > now
    )

    return InterviewStats(
        total=len(interviews),
        by_status=count_by_status(interviews, InterviewStatus),
        upcoming=upcoming,
    )


def dashboard_stats(
    applications,
    referrals,
    resumes,
    interviews,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """Every dashboard counter over one request-scoped snapshot."""
    stats = DashboardStats(
        application_stats=application_stats(applications),
        referral_stats=referral_stats(referrals),
        resume_stats=resume_stats(resumes),
        interview_stats=interview_stats(interviews, now),
    )
    logger.debug(
        f"Dashboard stats computed: applications={stats.application_stats.total}, "
        f"interviews={stats.interview_stats.total}"
    )
    return stats
