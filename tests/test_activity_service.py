"""
Tests for the activity log and recent-activity feed.
"""
from datetime import date

from applyflow.core.statuses import ActivityType, ActivityAction, ApplicationStatus
from applyflow.db.models import Activity, Application
from applyflow.services import activity_service


def make_application(db, user_id="user-1", company="Acme"):
    application = Application(user_id=user_id, company_name=company, role="Backend Engineer", applied_date=date(2026, 3, 2))
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def test_activity_titles():
    title = activity_service.activity_title
    assert title(ActivityType.APPLICATION, ActivityAction.CREATED, "Acme") == "Application to Acme"
    assert title(ActivityType.APPLICATION, ActivityAction.STATUS_CHANGED, "Acme") == "Status changed: Acme"
    assert title(ActivityType.REFERRAL, ActivityAction.CREATED, "Dana") == "Referral from Dana"
    assert title(ActivityType.RESUME, ActivityAction.CREATED, "v2") == "Resume uploaded: v2"
    assert title(ActivityType.INTERVIEW, ActivityAction.CREATED, "Acme") == "Interview at Acme"
    assert title(ActivityType.REFERRAL, ActivityAction.UPDATED, "Dana") == "Updated referral: Dana"
    assert title(ActivityType.RESUME, ActivityAction.DELETED, "v1") == "Deleted resume: v1"


def test_describe_changes():
    assert activity_service.describe_changes({"priority": "High", "notes": "x"}) == "notes, priority"
    assert activity_service.describe_changes({}) == "no changes"


def test_status_change_records_old_and_new(db):
    application = make_application(db)
    assert activity_service.log_application_status_changed(
        db, "user-1", application, ApplicationStatus.APPLIED, ApplicationStatus.INTERVIEW
    )

    entry = db.query(Activity).one()
    assert entry.action == ActivityAction.STATUS_CHANGED
    assert entry.old_value == "Applied"
    assert entry.new_value == "Interview"
    assert entry.entity_id == str(application.id)


def test_feed_is_capped_and_scoped(db):
    application = make_application(db)
    for _ in range(25):
        activity_service.log_application_updated(db, "user-1", application, "notes")
    activity_service.log_application_created(db, "user-2", application)

    feed = activity_service.recent_activity(db, "user-1")

    assert len(feed) == activity_service.FEED_SIZE
    assert all(item.action == ActivityAction.UPDATED for item in feed)
    assert feed[0].title == "Updated application: Acme"
    # newest first
    ids = [item.id for item in feed]
    assert ids == sorted(ids, reverse=True)


def test_log_failure_does_not_raise(db, monkeypatch):
    def broken_commit():
        raise RuntimeError("database is locked")

    monkeypatch.setattr(db, "commit", broken_commit)
    ok = activity_service.log_activity(
        db, "user-1", ActivityType.RESUME, ActivityAction.CREATED, 1, "v1", "Uploaded resume: v1"
    )
    assert ok is False
