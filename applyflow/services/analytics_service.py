"""
Trend aggregator for the analytics page.

Groups applications by resume, company tier, referral, weekday, company
and month, then reduces each group to counts and rates. All functions are
pure: the caller fetches the applications (see record_queries) and passes
the snapshot in.

A "response" is any status other than Applied, Ghosted or Withdrawn.
"""
import logging
from collections import OrderedDict
from datetime import date
from typing import Callable, List, Optional

from applyflow.core.statuses import (
    ApplicationStatus,
    FUNNEL_STAGES,
    TIER_ORDER,
    UNKNOWN_TIER,
    coerce_status,
    is_response,
)
from applyflow.services.stats_service import percentage
from applyflow.schemas.analytics import (
    ResumeAnalytics,
    CompanyTierAnalytics,
    ReferralAnalytics,
    TimeMetrics,
    FunnelStage,
    DayAnalytics,
    CompanyMetrics,
    MonthlyTrend,
    AnalyticsOverview,
)

logger = logging.getLogger(__name__)

NO_RESUME_ID = "no-resume"
NO_RESUME_NAME = "No Resume"
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MIN_APPLICATIONS_FOR_SUCCESS_RATE = 2


def _is_offer(application) -> bool:
    return coerce_status(application.status, ApplicationStatus) == ApplicationStatus.OFFER


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


def days_between(start: Optional[date], end: Optional[date]) -> Optional[int]:
    """Whole days from ``start`` to ``end``; None if either is missing."""
    if start is None or end is None:
        return None
    return (end - start).days


def group_by(applications, key: Callable) -> "OrderedDict[str, list]":
    """Bucket applications by ``key`` keeping first-seen order."""
    groups: "OrderedDict[str, list]" = OrderedDict()
    for application in applications or []:
        groups.setdefault(key(application), []).append(application)
    return groups


def _mean(values: List[int]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def resume_analytics(applications) -> List[ResumeAnalytics]:
    """Response rate per resume version, best first."""
    results = []
    groups = group_by(
        applications,
        lambda a: str(a.resume_id) if a.resume_id is not None else NO_RESUME_ID,
    )
    for resume_id, group in groups.items():
        resume = getattr(group[0], "resume", None)
        name = resume.version_name if resume is not None else NO_RESUME_NAME
        responses = sum(1 for a in group if is_response(a.status))
        results.append(ResumeAnalytics(
            resume_id=resume_id,
            resume_name=name,
            total_applications=len(group),
            responses=responses,
            response_rate=percentage(responses, len(group)),
        ))

    return sorted(results, key=lambda r: r.response_rate, reverse=True)


def company_tier_analytics(applications) -> List[CompanyTierAnalytics]:
    """Offer rate per company tier; tiers with no applications are omitted."""
    groups = group_by(applications, lambda a: _enum_value(a.company_tier) or UNKNOWN_TIER)

    results = []
    for tier in TIER_ORDER:
        group = groups.get(tier, [])
        if not group:
            continue
        offers = sum(1 for a in group if _is_offer(a))
        results.append(CompanyTierAnalytics(
            tier=tier,
            total_applications=len(group),
            offers=offers,
            success_rate=percentage(offers, len(group)),
        ))

    return sorted(results, key=lambda r: r.success_rate, reverse=True)


def referral_analytics(applications) -> List[ReferralAnalytics]:
    """Referred vs direct applications, always in that order."""
    groups = group_by(applications, lambda a: "Referral" if a.referral_id is not None else "Direct")

    results = []
    for kind in ("Referral", "Direct"):
        group = groups.get(kind, [])
        responses = sum(1 for a in group if is_response(a.status))
        results.append(ReferralAnalytics(
            type=kind,
            total_applications=len(group),
            responses=responses,
            response_rate=percentage(responses, len(group)),
        ))
    return results


def time_metrics(applications) -> TimeMetrics:
    """
    Mean days to response and to offer.

    Applications missing the relevant date are left out of both the sum
    and the count rather than counted as zero days.
    """
    applications = list(applications or [])
    response_days = [
        d for d in (days_between(a.applied_date, a.response_date) for a in applications)
        if d is not None
    ]
    offer_days = [
        d for d in (days_between(a.applied_date, a.offer_date) for a in applications)
        if d is not None
    ]
    return TimeMetrics(
        avg_time_to_response=_mean(response_days) or 0.0,
        avg_time_to_offer=_mean(offer_days) or 0.0,
    )


def application_funnel(applications) -> List[FunnelStage]:
    """
    Cumulative funnel Applied >= OA >= Interview >= Offer.

    Each stage counts applications that reached it or any later stage.
    Rejected, Ghosted and Withdrawn only count toward Applied.
    """
    applications = list(applications or [])
    total = len(applications)

    stage_rank = {stage: rank for rank, stage in enumerate(FUNNEL_STAGES)}
    reached = [stage_rank.get(coerce_status(a.status, ApplicationStatus), 0) for a in applications]

    results = []
    for rank, stage in enumerate(FUNNEL_STAGES):
        count = total if rank == 0 else sum(1 for r in reached if r >= rank)
        results.append(FunnelStage(
            stage=stage.value,
            count=count,
            percentage=percentage(count, total),
        ))
    return results


def day_analytics(applications) -> List[DayAnalytics]:
    """Response rate by the weekday the application was sent, Sunday first."""
    groups = group_by(applications, lambda a: WEEKDAY_NAMES[(a.applied_date.weekday() + 1) % 7])

    results = []
    for day in WEEKDAY_NAMES:
        group = groups.get(day, [])
        responses = sum(1 for a in group if is_response(a.status))
        results.append(DayAnalytics(
            day=day,
            applications=len(group),
            responses=responses,
            response_rate=percentage(responses, len(group)),
        ))
    return results


def _company_metrics(company: str, group: list) -> CompanyMetrics:
    offers = sum(1 for a in group if _is_offer(a))
    response_days = [
        d for d in (days_between(a.applied_date, a.response_date) for a in group)
        if d is not None
    ]
    return CompanyMetrics(
        company_name=company,
        total_applications=len(group),
        avg_response_time=_mean(response_days),
        offers=offers,
        success_rate=percentage(offers, len(group)),
    )


def fastest_companies(applications, limit: int = 10) -> List[CompanyMetrics]:
    """Companies ordered by mean days to respond; silent companies are skipped."""
    metrics = [
        _company_metrics(company, group)
        for company, group in group_by(applications, lambda a: a.company_name).items()
    ]
    responded = [m for m in metrics if m.avg_response_time is not None]
    return sorted(responded, key=lambda m: m.avg_response_time)[:limit]


def company_success_rates(applications, limit: int = 10) -> List[CompanyMetrics]:
    """Offer rate per company with at least two applications, best first."""
    metrics = [
        _company_metrics(company, group)
        for company, group in group_by(applications, lambda a: a.company_name).items()
        if len(group) >= MIN_APPLICATIONS_FOR_SUCCESS_RATE
    ]
    return sorted(metrics, key=lambda m: m.success_rate, reverse=True)[:limit]


def monthly_trend(applications) -> List[MonthlyTrend]:
    """Applications and offers per calendar month of the applied date, oldest first."""
    ordered = sorted(applications or [], key=lambda a: a.applied_date)
    groups = group_by(ordered, lambda a: a.applied_date.strftime("%Y-%m"))

    return [
        MonthlyTrend(
            month_key=month_key,
            month=group[0].applied_date.strftime("%b %Y"),
            applications=len(group),
            offers=sum(1 for a in group if _is_offer(a)),
        )
        for month_key, group in groups.items()
    ]


def analytics_overview(applications, limit: int = 10) -> AnalyticsOverview:
    """Every analytics view computed over one snapshot."""
    applications = list(applications or [])
    overview = AnalyticsOverview(
        resumes=resume_analytics(applications),
        company_tiers=company_tier_analytics(applications),
        referrals=referral_analytics(applications),
        time_metrics=time_metrics(applications),
        funnel=application_funnel(applications),
        days=day_analytics(applications),
        fastest_companies=fastest_companies(applications, limit),
        company_success=company_success_rates(applications, limit),
        monthly_trend=monthly_trend(applications),
    )
    logger.debug(f"Analytics overview computed over {len(applications)} applications")
    return overview
