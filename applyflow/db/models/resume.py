from datetime import date
from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from applyflow.db.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    version_name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)  # path relative to STORAGE_DIR
    upload_date = Column(Date, nullable=False, default=date.today)
    times_used = Column(Integer, nullable=False, default=0)
    success_rate = Column(Float, nullable=False, default=0.0)  # refreshed by resume_service.refresh_resume_metrics
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Deleting a resume leaves its applications in place with resume_id cleared
    applications = relationship("Application", back_populates="resume")

    def __repr__(self):
        return f"<Resume(id={self.id}, version_name='{self.version_name}')>"
