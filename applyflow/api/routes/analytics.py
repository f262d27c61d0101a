"""
Analytics endpoints.

Every view accepts an optional inclusive ``start_date`` / ``end_date``
range on the applied date. Each request reads one snapshot of the user's
applications and hands it to the pure aggregators in analytics_service.
"""
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.core.auth_dependency import get_current_user
from applyflow.services import analytics_service, record_queries
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

router = APIRouter(prefix="/analytics", tags=["Analytics"])


class DateRange:
    """Query parameters shared by every analytics view."""

    def __init__(
        self,
        start_date: Optional[date] = Query(None, description="Inclusive lower bound on applied date"),
        end_date: Optional[date] = Query(None, description="Inclusive upper bound on applied date"),
    ):
        if start_date and end_date and start_date > end_date:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="start_date must not be after end_date"
            )
        self.start_date = start_date
        self.end_date = end_date


def load_applications(
    date_range: DateRange = Depends(),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return record_queries.list_applications(
            db, user_id, start_date=date_range.start_date, end_date=date_range.end_date
        )
    except Exception as e:
        logger.error(f"Failed to load applications for analytics: user_id={user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load analytics"
        )


@router.get("/resumes", response_model=List[ResumeAnalytics])
def get_resume_analytics(applications=Depends(load_applications)):
    """Response rate per resume version."""
    return analytics_service.resume_analytics(applications)


@router.get("/company-tiers", response_model=List[CompanyTierAnalytics])
def get_company_tier_analytics(applications=Depends(load_applications)):
    """Offer rate per company tier."""
    return analytics_service.company_tier_analytics(applications)


@router.get("/referrals", response_model=List[ReferralAnalytics])
def get_referral_analytics(applications=Depends(load_applications)):
    """Referral vs direct response rates."""
    return analytics_service.referral_analytics(applications)


@router.get("/time-metrics", response_model=TimeMetrics)
def get_time_metrics(applications=Depends(load_applications)):
    return analytics_service.time_metrics(applications)


@router.get("/funnel", response_model=List[FunnelStage])
def get_funnel(applications=Depends(load_applications)):
    """Applied > OA > Interview > Offer, as cumulative counts."""
    return analytics_service.application_funnel(applications)


@router.get("/days", response_model=List[DayAnalytics])
def get_day_analytics(applications=Depends(load_applications)):
    """Response rate by weekday of application, Sunday first."""
    return analytics_service.day_analytics(applications)


@router.get("/fastest-companies", response_model=List[CompanyMetrics])
def get_fastest_companies(
    limit: int = Query(10, ge=1, le=50),
    applications=Depends(load_applications)
):
    return analytics_service.fastest_companies(applications, limit)


@router.get("/company-success", response_model=List[CompanyMetrics])
def get_company_success(
    limit: int = Query(10, ge=1, le=50),
    applications=Depends(load_applications)
):
    """Offer rate per company, for companies with at least two applications."""
    return analytics_service.company_success_rates(applications, limit)


@router.get("/monthly-trend", response_model=List[MonthlyTrend])
def get_monthly_trend(applications=Depends(load_applications)):
    return analytics_service.monthly_trend(applications)


@router.get("/overview", response_model=AnalyticsOverview)
def get_overview(
    limit: int = Query(10, ge=1, le=50),
    applications=Depends(load_applications)
):
    """All analytics views in one response."""
    return analytics_service.analytics_overview(applications, limit)
