"""
Interview endpoints.

Each interview round belongs to exactly one of the user's applications.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from applyflow.db.session import get_db
from applyflow.db.models import Application, Interview
from applyflow.core.auth_dependency import get_current_user
from applyflow.services import activity_service, record_queries
from applyflow.schemas.interview import (
    InterviewCreate,
    InterviewUpdate,
    InterviewResponse,
    InterviewListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interviews", tags=["Interviews"])


def get_owned_interview(db: Session, user_id: str, interview_id: int) -> Interview:
    interview = db.query(Interview).options(joinedload(Interview.application)).filter(
        Interview.id == interview_id,
        Interview.user_id == user_id
    ).first()
    if not interview:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
    return interview


def _company_of(interview: Interview) -> str:
    return interview.application.company_name if interview.application else "Unknown Company"


def _interview_list(interviews) -> InterviewListResponse:
    return InterviewListResponse(
        interviews=[InterviewResponse.model_validate(i) for i in interviews],
        total=len(interviews)
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InterviewResponse)
def create_interview(
    interview_data: InterviewCreate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Schedule an interview round for one of the user's applications."""
    application = db.query(Application).filter(
        Application.id == interview_data.application_id,
        Application.user_id == user_id
    ).first()
    if not application:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Application not found")

    try:
        interview = Interview(user_id=user_id, **interview_data.model_dump())
        db.add(interview)
        db.commit()
        db.refresh(interview)

        logger.info(f"Interview created: interview_id={interview.id}, application_id={application.id}, user_id={user_id}")
        activity_service.log_interview_created(db, user_id, interview, application.company_name)

        return InterviewResponse.model_validate(interview)

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create interview: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create interview"
        )


@router.get("", response_model=InterviewListResponse)
def list_interviews(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All interviews, soonest first; unscheduled rounds last."""
    return _interview_list(record_queries.list_interviews(db, user_id))


@router.get("/upcoming", response_model=InterviewListResponse)
def list_upcoming_interviews(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Scheduled interviews from now onward."""
    return _interview_list(record_queries.list_upcoming_interviews(db, user_id))


@router.get("/by-application/{application_id}", response_model=InterviewListResponse)
def list_interviews_for_application(
    application_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    interviews = db.query(Interview).filter(
        Interview.user_id == user_id,
        Interview.application_id == application_id
    ).order_by(Interview.scheduled_date.asc()).all()
    return _interview_list(interviews)


@router.put("/{interview_id}", response_model=InterviewResponse)
def update_interview(
    interview_id: int,
    interview_data: InterviewUpdate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an interview round.

    Feedback is accepted in any status; it is only shown once the round
    is Completed.
    """
    try:
        interview = get_owned_interview(db, user_id, interview_id)
        updates = interview_data.model_dump(exclude_unset=True)

        for field in ("round_name", "status"):
            if field in updates and updates[field] is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} cannot be empty")

        for field, value in updates.items():
            setattr(interview, field, value)

        db.commit()
        db.refresh(interview)

        logger.info(f"Interview updated: interview_id={interview.id}, user_id={user_id}")
        activity_service.log_interview_updated(
            db, user_id, interview, _company_of(interview), activity_service.describe_changes(updates)
        )

        return InterviewResponse.model_validate(interview)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update interview: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update interview"
        )


@router.delete("/{interview_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_interview(
    interview_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        interview = get_owned_interview(db, user_id, interview_id)
        company_name, round_name = _company_of(interview), interview.round_name

        db.delete(interview)
        db.commit()

        logger.info(f"Interview deleted: interview_id={interview_id}, user_id={user_id}")
        activity_service.log_interview_deleted(db, user_id, interview_id, company_name, round_name)

        return None

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete interview: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete interview"
        )
