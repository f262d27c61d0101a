"""
Dashboard summary endpoint.
"""
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.core.auth_dependency import get_current_user
from applyflow.core.clock_dependency import get_request_now
from applyflow.services import record_queries, stats_service
from applyflow.schemas.stats import DashboardStats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    now: datetime = Depends(get_request_now),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Counters for the dashboard cards.

    All four groups are computed from the same snapshot of the user's
    records.
    """
    try:
        return stats_service.dashboard_stats(
            applications=record_queries.list_applications(db, user_id),
            referrals=record_queries.list_referrals(db, user_id),
            resumes=record_queries.list_resumes(db, user_id),
            interviews=record_queries.list_interviews(db, user_id),
            now=now,
        )
    except Exception as e:
        logger.error(f"Failed to compute dashboard stats: user_id={user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute dashboard stats"
        )
