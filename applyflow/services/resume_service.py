"""
Resume usage metrics.

``times_used`` and ``success_rate`` are not kept in step with every
application change. They are recomputed on demand from the applications
table with one aggregate query.
"""
import logging
from typing import Dict

from sqlalchemy import func, case
from sqlalchemy.orm import Session

from applyflow.core.statuses import NON_RESPONSE_STATUSES
from applyflow.db.models import Application, Resume
from applyflow.services.stats_service import percentage

logger = logging.getLogger(__name__)


def get_resume_usage(db: Session, user_id: str) -> Dict[int, Dict[str, int]]:
    """
    Applications and responses per resume for one user.

    Returns:
        {resume_id: {"used": int, "responses": int}}
    """
    responded = case(
        (Application.status.in_(list(NON_RESPONSE_STATUSES)), 0),
        else_=1,
    )
    rows = db.query(
        Application.resume_id,
        func.count(Application.id).label("used"),
        func.sum(responded).label("responses"),
    ).filter(
        Application.user_id == user_id,
        Application.resume_id.isnot(None),
    ).group_by(Application.resume_id).all()

    return {
        resume_id: {"used": int(used or 0), "responses": int(responses or 0)}
        for resume_id, used, responses in rows
    }


def refresh_resume_metrics(db: Session, user_id: str) -> int:
    """
    Recompute times_used and success_rate for all of a user's resumes.

    Success rate is the share of applications sent with the resume that
    got a response.

    Returns:
        Number of resumes updated
    """
    usage = get_resume_usage(db, user_id)
    resumes = db.query(Resume).filter(Resume.user_id == user_id).all()

    for resume in resumes:
        stats = usage.get(resume.id, {"used": 0, "responses": 0})
        resume.times_used = stats["used"]
        resume.success_rate = percentage(stats["responses"], stats["used"])

    db.commit()
    logger.info(f"Resume metrics refreshed: user_id={user_id}, resumes={len(resumes)}")
    return len(resumes)
