"""
Resume endpoints.

Uploads PDF versions, serves them back, and refreshes per-resume usage
metrics from the applications that reference them.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.db.models import Application, Resume
from applyflow.core import config
from applyflow.core.auth_dependency import get_current_user
from applyflow.services import activity_service, record_queries, resume_service, storage_service
from applyflow.schemas.resume import ResumeUpdate, ResumeResponse, ResumeListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["Resumes"])


def get_owned_resume(db: Session, user_id: str, resume_id: int) -> Resume:
    resume = db.query(Resume).filter(
        Resume.id == resume_id,
        Resume.user_id == user_id
    ).first()
    if not resume:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    return resume


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResumeResponse)
async def upload_resume(
    version_name: str = Form(..., min_length=1, max_length=255),
    file: UploadFile = File(...),
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload a new resume version (PDF, 5MB max)."""
    # Stop reading one byte past the limit; the size check rejects anything longer
    content = await file.read(config.MAX_RESUME_SIZE + 1)

    try:
        file_url = storage_service.save_resume_file(
            user_id=user_id,
            filename=file.filename,
            content=content,
            content_type=file.content_type,
        )
    except ValueError as e:
        logger.warning(f"Rejected resume upload: user_id={user_id}, reason={e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        resume = Resume(user_id=user_id, version_name=version_name, file_url=file_url)
        db.add(resume)
        db.commit()
        db.refresh(resume)
    except Exception as e:
        db.rollback()
        storage_service.delete_resume_file(file_url)
        logger.error(f"Failed to create resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create resume"
        )

    logger.info(f"Resume created: resume_id={resume.id}, user_id={user_id}")
    activity_service.log_resume_created(db, user_id, resume)

    return ResumeResponse.model_validate(resume)


@router.get("", response_model=ResumeListResponse)
def list_resumes(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    resumes = record_queries.list_resumes(db, user_id)
    return ResumeListResponse(
        resumes=[ResumeResponse.model_validate(r) for r in resumes],
        total=len(resumes)
    )


@router.post("/refresh-metrics", response_model=ResumeListResponse)
def refresh_metrics(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Recompute times_used and success_rate for every resume of the user."""
    try:
        resume_service.refresh_resume_metrics(db, user_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to refresh resume metrics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to refresh resume metrics"
        )

    resumes = record_queries.list_resumes(db, user_id)
    return ResumeListResponse(
        resumes=[ResumeResponse.model_validate(r) for r in resumes],
        total=len(resumes)
    )


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ResumeResponse.model_validate(get_owned_resume(db, user_id, resume_id))


@router.get("/{resume_id}/download")
def download_resume(
    resume_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Stream the stored PDF."""
    resume = get_owned_resume(db, user_id, resume_id)

    try:
        path = storage_service.resolve_path(resume.file_url)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    if not path.exists():
        logger.warning(f"Resume file missing on disk: resume_id={resume_id}, path={resume.file_url}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    return FileResponse(
        path,
        media_type=storage_service.ALLOWED_CONTENT_TYPE,
        filename=f"{storage_service.sanitize_filename(resume.version_name)}.pdf",
    )


@router.put("/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: int,
    resume_data: ResumeUpdate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rename a resume version."""
    try:
        resume = get_owned_resume(db, user_id, resume_id)
        updates = resume_data.model_dump(exclude_unset=True, exclude_none=True)

        for field, value in updates.items():
            setattr(resume, field, value)

        db.commit()
        db.refresh(resume)

        logger.info(f"Resume updated: resume_id={resume.id}, user_id={user_id}")
        activity_service.log_resume_updated(db, user_id, resume, activity_service.describe_changes(updates))

        return ResumeResponse.model_validate(resume)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update resume"
        )


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume(
    resume_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a resume and its stored file.

    Linked applications are kept; their resume_id is cleared.
    """
    try:
        resume = get_owned_resume(db, user_id, resume_id)
        version_name, file_url = resume.version_name, resume.file_url

        cleared = db.query(Application).filter(
            Application.user_id == user_id,
            Application.resume_id == resume_id
        ).update({"resume_id": None}, synchronize_session="fetch")

        db.delete(resume)
        db.commit()

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete resume: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete resume"
        )

    try:
        storage_service.delete_resume_file(file_url)
    except (ValueError, OSError) as e:
        logger.error(f"Failed to delete resume file: resume_id={resume_id}: {e}", exc_info=True)

    logger.info(f"Resume deleted: resume_id={resume_id}, user_id={user_id}, applications_unlinked={cleared}")
    activity_service.log_resume_deleted(db, user_id, resume_id, version_name)

    return None
