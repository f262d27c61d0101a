from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from applyflow.db.base import Base
from applyflow.db.types import status_column_type
from applyflow.core.statuses import InterviewStatus


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    application_id = Column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    round_name = Column(String, nullable=False)
    scheduled_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(
        status_column_type(InterviewStatus, "interview_status"),
        nullable=False,
        default=InterviewStatus.SCHEDULED,
    )
    prep_notes = Column(Text, nullable=True)
    feedback = Column(Text, nullable=True)  # only meaningful once Completed
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("Application", back_populates="interviews")

    __table_args__ = (
        Index("idx_interviews_user_scheduled", "user_id", "scheduled_date"),
    )

    def __repr__(self):
        return f"<Interview(id={self.id}, round='{self.round_name}', status='{self.status}')>"
