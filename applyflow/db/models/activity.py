"""
Activity model - append-only log behind the recent-activity feed.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func

from applyflow.db.base import Base
from applyflow.db.types import status_column_type
from applyflow.core.statuses import ActivityType, ActivityAction


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    activity_type = Column(status_column_type(ActivityType, "activity_type"), nullable=False)
    action = Column(status_column_type(ActivityAction, "activity_action"), nullable=False)
    entity_id = Column(String, nullable=False)
    entity_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    old_value = Column(String, nullable=True)
    new_value = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("idx_activities_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<Activity(id={self.id}, type='{self.activity_type}', action='{self.action}')>"
