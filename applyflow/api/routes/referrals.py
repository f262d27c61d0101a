"""
Referral endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from applyflow.db.session import get_db
from applyflow.db.models import Application, Referral
from applyflow.core.auth_dependency import get_current_user
from applyflow.services import activity_service, record_queries
from applyflow.schemas.referral import (
    ReferralCreate,
    ReferralUpdate,
    ReferralResponse,
    ReferralListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/referrals", tags=["Referrals"])


def get_owned_referral(db: Session, user_id: str, referral_id: int) -> Referral:
    referral = db.query(Referral).filter(
        Referral.id == referral_id,
        Referral.user_id == user_id
    ).first()
    if not referral:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Referral not found")
    return referral


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ReferralResponse)
def create_referral(
    referral_data: ReferralCreate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a referral contact."""
    try:
        referral = Referral(user_id=user_id, **referral_data.model_dump())
        db.add(referral)
        db.commit()
        db.refresh(referral)

        logger.info(f"Referral created: referral_id={referral.id}, user_id={user_id}")
        activity_service.log_referral_created(db, user_id, referral)

        return ReferralResponse.model_validate(referral)

    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create referral: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create referral"
        )


@router.get("", response_model=ReferralListResponse)
def list_referrals(
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the user's referrals, newest first."""
    referrals = record_queries.list_referrals(db, user_id)
    return ReferralListResponse(
        referrals=[ReferralResponse.model_validate(r) for r in referrals],
        total=len(referrals)
    )


@router.get("/{referral_id}", response_model=ReferralResponse)
def get_referral(
    referral_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ReferralResponse.model_validate(get_owned_referral(db, user_id, referral_id))


@router.put("/{referral_id}", response_model=ReferralResponse)
def update_referral(
    referral_id: int,
    referral_data: ReferralUpdate,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a referral. Only fields present in the body change."""
    try:
        referral = get_owned_referral(db, user_id, referral_id)
        updates = referral_data.model_dump(exclude_unset=True)

        for field in ("person_name", "company", "status"):
            if field in updates and updates[field] is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{field} cannot be empty")

        for field, value in updates.items():
            setattr(referral, field, value)

        db.commit()
        db.refresh(referral)

        logger.info(f"Referral updated: referral_id={referral.id}, user_id={user_id}")
        activity_service.log_referral_updated(db, user_id, referral, activity_service.describe_changes(updates))

        return ReferralResponse.model_validate(referral)

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update referral: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update referral"
        )


@router.delete("/{referral_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_referral(
    referral_id: int,
    user_id: str = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a referral.

    Linked applications are kept; their referral_id is cleared.
    """
    try:
        referral = get_owned_referral(db, user_id, referral_id)
        person_name, company = referral.person_name, referral.company

        cleared = db.query(Application).filter(
            Application.user_id == user_id,
            Application.referral_id == referral_id
        ).update({"referral_id": None}, synchronize_session="fetch")

        db.delete(referral)
        db.commit()

        logger.info(f"Referral deleted: referral_id={referral_id}, user_id={user_id}, applications_unlinked={cleared}")
        activity_service.log_referral_deleted(db, user_id, referral_id, person_name, company)

        return None

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete referral: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete referral"
        )
