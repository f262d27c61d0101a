"""
Pydantic schemas for analytics endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class ResumeAnalytics(BaseModel):
    resume_id: str
    resume_name: str
    total_applications: int = 0
    responses: int = 0
    response_rate: float = 0.0


class CompanyTierAnalytics(BaseModel):
    tier: str
    total_applications: int = 0
    offers: int = 0
    success_rate: float = 0.0


class ReferralAnalytics(BaseModel):
    type: str = Field(..., description="'Referral' or 'Direct'")
    total_applications: int = 0
    responses: int = 0
    response_rate: float = 0.0


class TimeMetrics(BaseModel):
    avg_time_to_response: float = Field(0.0, description="Mean days from applied to response")
    avg_time_to_offer: float = Field(0.0, description="Mean days from applied to offer")


class FunnelStage(BaseModel):
    stage: str
    count: int
    percentage: float


class DayAnalytics(BaseModel):
    day: str
    applications: int = 0
    responses: int = 0
    response_rate: float = 0.0


class CompanyMetrics(BaseModel):
    company_name: str
    total_applications: int = 0
    avg_response_time: Optional[float] = Field(None, description="Mean days to respond, over responded applications")
    offers: int = 0
    success_rate: float = 0.0


class MonthlyTrend(BaseModel):
    month_key: str = Field(..., description="YYYY-MM")
    month: str = Field(..., description="Display label, e.g. 'Jan 2026'")
    applications: int = 0
    offers: int = 0


class AnalyticsOverview(BaseModel):
    """Every analytics view over the same snapshot."""
    resumes: List[ResumeAnalytics]
    company_tiers: List[CompanyTierAnalytics]
    referrals: List[ReferralAnalytics]
    time_metrics: TimeMetrics
    funnel: List[FunnelStage]
    days: List[DayAnalytics]
    fastest_companies: List[CompanyMetrics]
    company_success: List[CompanyMetrics]
    monthly_trend: List[MonthlyTrend]
