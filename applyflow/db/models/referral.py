from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from applyflow.db.base import Base
from applyflow.db.types import status_column_type
from applyflow.core.statuses import ReferralStatus


class Referral(Base):
    __tablename__ = "referrals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    person_name = Column(String, nullable=False)
    company = Column(String, nullable=False)
    linkedin_url = Column(String, nullable=True)
    relationship_type = Column("relationship", String, nullable=True)  # colleague, alumni, friend...
    date_asked = Column(Date, nullable=True)
    status = Column(
        status_column_type(ReferralStatus, "referral_status"),
        nullable=False,
        default=ReferralStatus.PENDING,
    )
    follow_up_date = Column(Date, nullable=True, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a referral leaves its applications in place with referral_id cleared
    applications = relationship("Application", back_populates="referral")

    def __repr__(self):
        return f"<Referral(id={self.id}, person='{self.person_name}', company='{self.company}')>"
