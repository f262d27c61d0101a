from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class PreferencesUpdate(BaseModel):
    email_notifications: Optional[bool] = None
    telegram_notifications: Optional[bool] = None
    telegram_chat_id: Optional[str] = Field(None, max_length=64)
    user_email: Optional[str] = Field(None, max_length=255)


class PreferencesResponse(BaseModel):
    user_id: str
    email_notifications: bool
    telegram_notifications: bool
    telegram_chat_id: Optional[str] = None
    user_email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
