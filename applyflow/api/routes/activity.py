"""
Recent activity feed.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.core.auth_dependency import get_current_user
from applyflow.services import activity_service
from applyflow.schemas.activity import ActivityFeedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activity", tags=["Activity"])


@router.get("/recent", response_model=ActivityFeedResponse)
def get_recent_activity(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Latest actions across applications, referrals, resumes and interviews."""
    try:
        items = activity_service.recent_activity(db, user_id)
        return ActivityFeedResponse(activities=items, total=len(items))
    except Exception as e:
        logger.error(f"Failed to load activity feed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load activity feed"
        )
