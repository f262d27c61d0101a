"""
Pydantic schemas for resume endpoints.
"""
from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field


class ResumeUpdate(BaseModel):
    """Only the display name is editable; metrics are refreshed from applications."""
    version_name: Optional[str] = Field(None, min_length=1, max_length=255)


class ResumeResponse(BaseModel):
    id: int
    user_id: str
    version_name: str
    file_url: str
    upload_date: Optional[date] = None
    times_used: int = 0
    success_rate: float = 0.0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ResumeListResponse(BaseModel):
    resumes: List[ResumeResponse]
    total: int
