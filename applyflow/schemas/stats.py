"""
Pydantic schemas for dashboard statistics.
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field

from applyflow.schemas.resume import ResumeResponse


class ApplicationStats(BaseModel):
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict, description="Count per application status")
    active: int = Field(0, description="Applications not Rejected, Ghosted or Withdrawn")
    response_rate: float = Field(0.0, description="(Interview + Offer) / total * 100")
    success_rate: float = Field(0.0, description="Offer / total * 100")


class ReferralStats(BaseModel):
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)


class ResumeStats(BaseModel):
    total: int = 0
    total_used: int = 0
    average_success_rate: float = 0.0
    top_resume: Optional[ResumeResponse] = None


class InterviewStats(BaseModel):
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    upcoming: int = Field(0, description="Scheduled interviews later than now")


class DashboardStats(BaseModel):
    application_stats: ApplicationStats
    referral_stats: ReferralStats
    resume_stats: ResumeStats
    interview_stats: InterviewStats

    class Config:
        json_schema_extra = {
            "example": {
                "application_stats": {
                    "total": 4,
                    "by_status": {"Applied": 1, "OA": 0, "Interview": 1, "Offer": 1,
                                  "Rejected": 1, "Ghosted": 0, "Withdrawn": 0},
                    "active": 3,
                    "response_rate": 50.0,
                    "success_rate": 25.0
                },
                "referral_stats": {"total": 0, "by_status": {}},
                "resume_stats": {"total": 0, "total_used": 0, "average_success_rate": 0.0, "top_resume": None},
                "interview_stats": {"total": 0, "by_status": {}, "upcoming": 0}
            }
        }
