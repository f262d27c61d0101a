"""
Database models module.

Imports every model so they are registered with SQLAlchemy's Base.metadata
before table creation and migrations.
"""
from applyflow.db.models.application import Application
from applyflow.db.models.referral import Referral
from applyflow.db.models.resume import Resume
from applyflow.db.models.interview import Interview
from applyflow.db.models.user_preferences import UserPreferences
from applyflow.db.models.activity import Activity

__all__ = [
    "Application",
    "Referral",
    "Resume",
    "Interview",
    "UserPreferences",
    "Activity",
]
