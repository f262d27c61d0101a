"""
Pydantic schemas for interview endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from applyflow.core.statuses import InterviewStatus


class InterviewBase(BaseModel):
    application_id: int = Field(..., description="Application this round belongs to")
    round_name: str = Field(..., min_length=1, max_length=255, description="e.g. Phone Screen, Onsite")
    scheduled_date: Optional[datetime] = None
    status: InterviewStatus = InterviewStatus.SCHEDULED
    prep_notes: Optional[str] = None
    feedback: Optional[str] = None


class InterviewCreate(InterviewBase):
    pass


class InterviewUpdate(BaseModel):
    round_name: Optional[str] = Field(None, min_length=1, max_length=255)
    scheduled_date: Optional[datetime] = None
    status: Optional[InterviewStatus] = None
    prep_notes: Optional[str] = None
    feedback: Optional[str] = None


class InterviewResponse(InterviewBase):
    id: int
    user_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class InterviewListResponse(BaseModel):
    interviews: List[InterviewResponse]
    total: int
