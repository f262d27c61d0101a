"""
Activity log service.

Appends create/update/delete/status-change entries for the dashboard's
recent-activity feed. Writing the log never fails the action that
triggered it: errors are logged and the entry is dropped.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from applyflow.core.statuses import ActivityType, ActivityAction
from applyflow.db.models import Activity
from applyflow.schemas.activity import ActivityItem
from applyflow.services import record_queries

logger = logging.getLogger(__name__)

FEED_FETCH_LIMIT = 20
FEED_SIZE = 15

# Titles that differ from the generic "Updated <type>: X" / "Deleted <type>: X"
_TITLE_TEMPLATES = {
    (ActivityType.APPLICATION, ActivityAction.CREATED): "Application to {name}",
    (ActivityType.APPLICATION, ActivityAction.STATUS_CHANGED): "Status changed: {name}",
    (ActivityType.REFERRAL, ActivityAction.CREATED): "Referral from {name}",
    (ActivityType.RESUME, ActivityAction.CREATED): "Resume uploaded: {name}",
    (ActivityType.INTERVIEW, ActivityAction.CREATED): "Interview at {name}",
}


def log_activity(
    db: Session,
    user_id: str,
    activity_type: ActivityType,
    action: ActivityAction,
    entity_id,
    entity_name: str,
    description: str,
    old_value: Optional[str] = None,
    new_value: Optional[str] = None,
) -> bool:
    """
    Append one activity entry and commit it.

    Returns:
        True if the entry was written, False if it was dropped
    """
    try:
        entry = Activity(
            user_id=user_id,
            activity_type=activity_type,
            action=action,
            entity_id=str(entity_id),
            entity_name=entity_name,
            description=description,
            old_value=old_value or None,
            new_value=new_value or None,
        )
        db.add(entry)
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        logger.error(
            f"Failed to log activity: user_id={user_id}, type={activity_type}, action={action}: {e}",
            exc_info=True,
        )
        return False


def describe_changes(updates: dict) -> str:
    """Short human summary of an update payload, e.g. 'notes, priority'."""
    return ", ".join(sorted(updates.keys())) or "no changes"


# Application events

def log_application_created(db: Session, user_id: str, application) -> bool:
    return log_activity(
        db, user_id, ActivityType.APPLICATION, ActivityAction.CREATED,
        application.id, application.company_name,
        f"Applied for {application.role} at {application.company_name}",
    )


def log_application_updated(db: Session, user_id: str, application, changes: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.APPLICATION, ActivityAction.UPDATED,
        application.id, application.company_name,
        f"Updated application: {changes}",
    )


def log_application_status_changed(db: Session, user_id: str, application, old_status, new_status) -> bool:
    old_value = getattr(old_status, "value", old_status)
    new_value = getattr(new_status, "value", new_status)
    return log_activity(
        db, user_id, ActivityType.APPLICATION, ActivityAction.STATUS_CHANGED,
        application.id, application.company_name,
        f"Status changed from {old_value} to {new_value}",
        old_value=old_value,
        new_value=new_value,
    )


def log_application_deleted(db: Session, user_id: str, application_id, company_name: str, role: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.APPLICATION, ActivityAction.DELETED,
        application_id, company_name,
        f"Deleted application for {role} at {company_name}",
    )


# Referral events

def log_referral_created(db: Session, user_id: str, referral) -> bool:
    return log_activity(
        db, user_id, ActivityType.REFERRAL, ActivityAction.CREATED,
        referral.id, referral.person_name,
        f"Added referral from {referral.person_name} at {referral.company}",
    )


def log_referral_updated(db: Session, user_id: str, referral, changes: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.REFERRAL, ActivityAction.UPDATED,
        referral.id, referral.person_name,
        f"Updated referral: {changes}",
    )


def log_referral_deleted(db: Session, user_id: str, referral_id, person_name: str, company: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.REFERRAL, ActivityAction.DELETED,
        referral_id, person_name,
        f"Deleted referral from {person_name} at {company}",
    )


# Resume events

def log_resume_created(db: Session, user_id: str, resume) -> bool:
    return log_activity(
        db, user_id, ActivityType.RESUME, ActivityAction.CREATED,
        resume.id, resume.version_name,
        f"Uploaded resume: {resume.version_name}",
    )


def log_resume_updated(db: Session, user_id: str, resume, changes: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.RESUME, ActivityAction.UPDATED,
        resume.id, resume.version_name,
        f"Updated resume: {changes}",
    )


def log_resume_deleted(db: Session, user_id: str, resume_id, version_name: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.RESUME, ActivityAction.DELETED,
        resume_id, version_name,
        f"Deleted resume: {version_name}",
    )


# Interview events

def log_interview_created(db: Session, user_id: str, interview, company_name: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.INTERVIEW, ActivityAction.CREATED,
        interview.id, company_name,
        f"Scheduled {interview.round_name} interview at {company_name}",
    )


def log_interview_updated(db: Session, user_id: str, interview, company_name: str, changes: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.INTERVIEW, ActivityAction.UPDATED,
        interview.id, company_name,
        f"Updated interview: {changes}",
    )


def log_interview_deleted(db: Session, user_id: str, interview_id, company_name: str, round_name: str) -> bool:
    return log_activity(
        db, user_id, ActivityType.INTERVIEW, ActivityAction.DELETED,
        interview_id, company_name,
        f"Deleted {round_name} interview at {company_name}",
    )


# Feed

def activity_title(activity_type: ActivityType, action: ActivityAction, entity_name: str) -> str:
    """Headline shown in the feed for one entry."""
    template = _TITLE_TEMPLATES.get((activity_type, action))
    if template:
        return template.format(name=entity_name)
    if action == ActivityAction.DELETED:
        return f"Deleted {activity_type.value}: {entity_name}"
    if action == ActivityAction.UPDATED:
        return f"Updated {activity_type.value}: {entity_name}"
    return entity_name


def recent_activity(db: Session, user_id: str) -> List[ActivityItem]:
    """The user's latest entries, newest first, ready to render."""
    activities = record_queries.list_recent_activities(db, user_id, limit=FEED_FETCH_LIMIT)

    items = [
        ActivityItem(
            id=activity.id,
            type=activity.activity_type,
            action=activity.action,
            title=activity_title(activity.activity_type, activity.action, activity.entity_name),
            description=activity.description or "",
            timestamp=activity.created_at,
        )
        for activity in activities
    ]
    return items[:FEED_SIZE]
