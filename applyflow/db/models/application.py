"""
Application model - one job application tracked by a user.
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from applyflow.db.base import Base
from applyflow.db.types import status_column_type
from applyflow.core.statuses import ApplicationStatus, ApplicationSource, CompanyTier, Priority


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)  # opaque id from the auth provider

    company_name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    job_link = Column(String, nullable=True)
    job_id = Column(String, nullable=True)
    application_source = Column(status_column_type(ApplicationSource, "application_source"), nullable=True)
    status = Column(
        status_column_type(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.APPLIED,
        index=True,
    )

    applied_date = Column(Date, nullable=False, index=True)
    response_date = Column(Date, nullable=True)  # when the company responded
    offer_date = Column(Date, nullable=True)  # when the offer was received

    company_tier = Column(status_column_type(CompanyTier, "company_tier"), nullable=True)
    priority = Column(status_column_type(Priority, "priority"), nullable=False, default=Priority.MEDIUM)
    salary_range = Column(String, nullable=True)
    tech_stack = Column(JSON, nullable=True, default=list)
    notes = Column(Text, nullable=True)

    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="SET NULL"), nullable=True, index=True)
    referral_id = Column(Integer, ForeignKey("referrals.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    resume = relationship("Resume", back_populates="applications")
    referral = relationship("Referral", back_populates="applications")
    interviews = relationship(
        "Interview",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="Interview.scheduled_date",
    )

    __table_args__ = (
        Index("idx_applications_user_applied", "user_id", "applied_date"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, company='{self.company_name}', status='{self.status}')>"
