"""
Pydantic schemas for application endpoints.
"""
from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field

from applyflow.core.statuses import ApplicationStatus, ApplicationSource, CompanyTier, Priority
from applyflow.schemas.interview import InterviewResponse
from applyflow.schemas.referral import ReferralResponse
from applyflow.schemas.resume import ResumeResponse


class ApplicationBase(BaseModel):
    """Base application schema with common fields."""
    company_name: str = Field(..., description="Company name", min_length=1, max_length=255)
    role: str = Field(..., description="Role applied for", min_length=1, max_length=255)
    job_link: Optional[str] = Field(None, description="Job posting URL")
    job_id: Optional[str] = Field(None, description="Requisition id on the company portal")
    application_source: Optional[ApplicationSource] = Field(None, description="Where the job was found")
    status: ApplicationStatus = Field(default=ApplicationStatus.APPLIED, description="Application status")
    applied_date: date = Field(..., description="Date applied")
    response_date: Optional[date] = Field(None, description="Date the company first responded")
    offer_date: Optional[date] = Field(None, description="Date the offer was received")
    company_tier: Optional[CompanyTier] = Field(None, description="Coarse company classification")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority")
    salary_range: Optional[str] = Field(None, description="Free-form salary text")
    tech_stack: List[str] = Field(default_factory=list, description="Technologies listed on the posting")
    notes: Optional[str] = Field(None, description="Notes about this application")
    resume_id: Optional[int] = Field(None, description="Resume version used")
    referral_id: Optional[int] = Field(None, description="Referral backing this application")


class ApplicationCreate(ApplicationBase):
    """Schema for creating a new application."""
    pass


class ApplicationUpdate(BaseModel):
    """Schema for updating an existing application. Only sent fields change."""
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    job_link: Optional[str] = None
    job_id: Optional[str] = None
    application_source: Optional[ApplicationSource] = None
    status: Optional[ApplicationStatus] = None
    applied_date: Optional[date] = None
    response_date: Optional[date] = None
    offer_date: Optional[date] = None
    company_tier: Optional[CompanyTier] = None
    priority: Optional[Priority] = None
    salary_range: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    notes: Optional[str] = None
    resume_id: Optional[int] = None
    referral_id: Optional[int] = None


class ApplicationResponse(ApplicationBase):
    """Schema for application response."""
    id: int = Field(..., description="Application ID")
    user_id: str = Field(..., description="Owner id")
    tech_stack: Optional[List[str]] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": "6f1c2d3e-0000-4000-8000-000000000001",
                "company_name": "Tech Corp",
                "role": "Backend Engineer",
                "status": "Interview",
                "applied_date": "2026-01-15",
                "response_date": "2026-01-22",
                "offer_date": None,
                "company_tier": "Unicorn",
                "priority": "High",
                "tech_stack": ["Python", "Postgres"],
                "created_at": "2026-01-15T09:00:00Z",
                "updated_at": "2026-01-22T10:00:00Z"
            }
        }


class ApplicationDetailResponse(ApplicationResponse):
    """Application with its resume, referral and interviews."""
    resume: Optional[ResumeResponse] = None
    referral: Optional[ReferralResponse] = None
    interviews: List[InterviewResponse] = Field(default_factory=list)


class ApplicationListResponse(BaseModel):
    """Schema for list of applications response."""
    applications: List[ApplicationResponse]
    total: int = Field(..., description="Total number of matching applications")
    page: int = Field(1, description="Current page number")
    page_size: int = Field(20, description="Number of items per page")
