"""
Pydantic schemas for the recent-activity feed.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from applyflow.core.statuses import ActivityType, ActivityAction


class ActivityItem(BaseModel):
    """Schema for a single feed entry."""
    id: int
    type: ActivityType
    action: ActivityAction
    title: str = Field(..., description="Generated headline, e.g. 'Application to Acme'")
    description: Optional[str] = ""
    timestamp: datetime


class ActivityFeedResponse(BaseModel):
    activities: List[ActivityItem]
    total: int
