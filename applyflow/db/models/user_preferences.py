from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from applyflow.db.base import Base


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    user_id = Column(String, primary_key=True)  # one row per user
    email_notifications = Column(Boolean, nullable=False, default=True)
    telegram_notifications = Column(Boolean, nullable=False, default=False)
    telegram_chat_id = Column(String, nullable=True)
    user_email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
