"""
Pydantic schemas for calendar endpoints.
"""
from typing import List, Optional, Literal, Union
from datetime import date as Date, datetime
from pydantic import BaseModel, Field

EventType = Literal["interview", "referral-followup"]


class CalendarEventMetadata(BaseModel):
    company: Optional[str] = None
    person: Optional[str] = None
    round: Optional[str] = None
    interview_id: Optional[int] = None
    referral_id: Optional[int] = None


class CalendarEvent(BaseModel):
    id: str = Field(..., description="'interview-<id>' or 'referral-<id>'")
    title: str
    description: str
    date: Union[datetime, Date]
    type: EventType
    status: Optional[str] = None
    metadata: CalendarEventMetadata = Field(default_factory=CalendarEventMetadata)


class GroupedEvents(BaseModel):
    """Relative buckets. Every event lands in exactly one of them."""
    overdue: List[CalendarEvent] = Field(default_factory=list)
    today: List[CalendarEvent] = Field(default_factory=list)
    tomorrow: List[CalendarEvent] = Field(default_factory=list)
    this_week: List[CalendarEvent] = Field(default_factory=list)
    later: List[CalendarEvent] = Field(default_factory=list)


class TodayActionItems(BaseModel):
    interviews: List[CalendarEvent] = Field(default_factory=list)
    follow_ups: List[CalendarEvent] = Field(default_factory=list)


class CalendarDay(BaseModel):
    date: Date
    events: List[CalendarEvent] = Field(default_factory=list)


class MonthGrid(BaseModel):
    year: int
    month: int
    label: str = Field(..., description="e.g. 'October 2026'")
    weekday_names: List[str]
    leading_padding: int = Field(..., description="Empty cells before day 1 (Sunday = 0)")
    days: List[CalendarDay]
