"""
Pydantic schemas for referral endpoints.
"""
from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field

from applyflow.core.statuses import ReferralStatus


class ReferralBase(BaseModel):
    person_name: str = Field(..., min_length=1, max_length=255, description="Contact person")
    company: str = Field(..., min_length=1, max_length=255, description="Contact's company")
    linkedin_url: Optional[str] = None
    relationship_type: Optional[str] = Field(None, description="How you know them (colleague, alumni, ...)")
    date_asked: Optional[date] = None
    status: ReferralStatus = ReferralStatus.PENDING
    follow_up_date: Optional[date] = Field(None, description="Scheduled follow-up check-in")
    notes: Optional[str] = None


class ReferralCreate(ReferralBase):
    pass


class ReferralUpdate(BaseModel):
    person_name: Optional[str] = Field(None, min_length=1, max_length=255)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    linkedin_url: Optional[str] = None
    relationship_type: Optional[str] = None
    date_asked: Optional[date] = None
    status: Optional[ReferralStatus] = None
    follow_up_date: Optional[date] = None
    notes: Optional[str] = None


class ReferralResponse(ReferralBase):
    id: int
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class ReferralListResponse(BaseModel):
    referrals: List[ReferralResponse]
    total: int
