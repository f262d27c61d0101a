"""
Notification preference endpoints.

One row per user. Reading before the first save returns the defaults
without creating a row.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.db.models import UserPreferences
from applyflow.core.auth_dependency import get_current_user
from applyflow.schemas.preferences import PreferencesUpdate, PreferencesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("", response_model=PreferencesResponse)
def get_preferences(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    preferences = db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()
    if not preferences:
        return PreferencesResponse(
            user_id=user_id,
            email_notifications=True,
            telegram_notifications=False,
        )
    return PreferencesResponse.model_validate(preferences)


@router.put("", response_model=PreferencesResponse)
def update_preferences(
    preferences_data: PreferencesUpdate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create or update the user's preferences."""
    try:
        preferences = db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()
        if not preferences:
            preferences = UserPreferences(user_id=user_id)
            db.add(preferences)

        updates = preferences_data.model_dump(exclude_unset=True)
        for field in ("email_notifications", "telegram_notifications"):
            if field in updates and updates[field] is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} cannot be empty")

        for field, value in updates.items():
            setattr(preferences, field, value)

        db.commit()
        db.refresh(preferences)

        logger.info(f"Preferences saved: user_id={user_id}")
        return PreferencesResponse.model_validate(preferences)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to save preferences: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save preferences"
        )
