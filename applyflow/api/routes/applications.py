"""
Application endpoints.

CRUD for tracked job applications. Every change is recorded in the
activity log.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_

from applyflow.db.session import get_db
from applyflow.db.models import Application, Resume, Referral
from applyflow.core.auth_dependency import get_current_user
from applyflow.core.statuses import ApplicationStatus
from applyflow.services import activity_service
from applyflow.schemas.application import (
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationResponse,
    ApplicationDetailResponse,
    ApplicationListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


def get_owned_application(db: Session, user_id: str, application_id: int) -> Application:
    """Fetch an application that belongs to the user or raise 404."""
    application = db.query(Application).filter(
        Application.id == application_id,
        Application.user_id == user_id
    ).first()
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )
    return application


def check_links(db: Session, user_id: str, resume_id: Optional[int], referral_id: Optional[int]) -> None:
    """Reject resume/referral ids the user does not own."""
    if resume_id is not None:
        exists = db.query(Resume.id).filter(Resume.id == resume_id, Resume.user_id == user_id).first()
        if not exists:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Resume not found")
    if referral_id is not None:
        exists = db.query(Referral.id).filter(Referral.id == referral_id, Referral.user_id == user_id).first()
        if not exists:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Referral not found")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def create_application(
    application_data: ApplicationCreate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new application.

    The application is owned by the authenticated user.
    """
    try:
        check_links(db, user_id, application_data.resume_id, application_data.referral_id)

        application = Application(user_id=user_id, **application_data.model_dump())
        db.add(application)
        db.commit()
        db.refresh(application)

        logger.info(f"Application created: application_id={application.id}, user_id={user_id}, company={application.company_name}")
        activity_service.log_application_created(db, user_id, application)

        return ApplicationResponse.model_validate(application)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create application"
        )


@router.get("", status_code=status.HTTP_200_OK, response_model=ApplicationListResponse)
def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status", description="Filter by status"),
    company: Optional[str] = Query(None, description="Filter by company name (partial match)"),
    search: Optional[str] = Query(None, description="Search in company, role, and notes"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the user's applications, newest applied date first.

    Supports filtering by status, company, and search query.
    """
    try:
        query = db.query(Application).filter(Application.user_id == user_id)

        if status_filter:
            query = query.filter(Application.status == status_filter)

        if company:
            query = query.filter(Application.company_name.ilike(f"%{company}%"))

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    Application.company_name.ilike(search_term),
                    Application.role.ilike(search_term),
                    Application.notes.ilike(search_term)
                )
            )

        total = query.count()

        offset = (page - 1) * page_size
        applications = query.order_by(
            Application.applied_date.desc(), Application.id.desc()
        ).offset(offset).limit(page_size).all()

        logger.debug(f"Applications listed: user_id={user_id}, total={total}, page={page}")

        return ApplicationListResponse(
            applications=[ApplicationResponse.model_validate(a) for a in applications],
            total=total,
            page=page,
            page_size=page_size
        )

    except Exception as e:
        logger.error(f"Failed to list applications: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list applications"
        )


@router.get("/by-referral/{referral_id}", response_model=ApplicationListResponse)
def list_applications_by_referral(
    referral_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Applications backed by one referral."""
    applications = db.query(Application).filter(
        Application.user_id == user_id,
        Application.referral_id == referral_id
    ).order_by(Application.applied_date.desc()).all()

    return ApplicationListResponse(
        applications=[ApplicationResponse.model_validate(a) for a in applications],
        total=len(applications),
        page=1,
        page_size=max(len(applications), 1)
    )


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
def get_application(
    application_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one application with its resume, referral and interviews."""
    application = db.query(Application).options(
        joinedload(Application.resume),
        joinedload(Application.referral),
        joinedload(Application.interviews),
    ).filter(
        Application.id == application_id,
        Application.user_id == user_id
    ).first()

    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    return ApplicationDetailResponse.model_validate(application)


@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application(
    application_id: int,
    application_data: ApplicationUpdate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an application.

    Only fields present in the request body change. Any status may follow
    any other status.
    """
    try:
        application = get_owned_application(db, user_id, application_id)
        updates = application_data.model_dump(exclude_unset=True)

        for field in ("company_name", "role", "applied_date", "priority", "status"):
            if field in updates and updates[field] is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} cannot be empty")

        check_links(db, user_id, updates.get("resume_id"), updates.get("referral_id"))

        old_status = application.status
        for field, value in updates.items():
            setattr(application, field, value)

        db.commit()
        db.refresh(application)

        logger.info(f"Application updated: application_id={application.id}, user_id={user_id}")

        status_changed = "status" in updates and updates["status"] != old_status
        if status_changed:
            activity_service.log_application_status_changed(
                db, user_id, application, old_status, application.status
            )
        other_changes = {k: v for k, v in updates.items() if k != "status"}
        if other_changes or not status_changed:
            activity_service.log_application_updated(
                db, user_id, application, activity_service.describe_changes(other_changes)
            )

        return ApplicationResponse.model_validate(application)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update application"
        )


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an application and its interviews."""
    try:
        application = get_owned_application(db, user_id, application_id)
        company_name, role = application.company_name, application.role

        db.delete(application)
        db.commit()

        logger.info(f"Application deleted: application_id={application_id}, user_id={user_id}")
        activity_service.log_application_deleted(db, user_id, application_id, company_name, role)

        return None

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete application"
        )
