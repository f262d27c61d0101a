"""
Tests for per-user record queries and resume metrics.
"""
from datetime import date, datetime, timezone

from applyflow.core.statuses import ApplicationStatus, InterviewStatus
from applyflow.db.models import Application, Interview, Referral, Resume
from applyflow.services import record_queries, resume_service


def add(db, *objects):
    db.add_all(objects)
    db.commit()
    for obj in objects:
        db.refresh(obj)
    return objects


def make_application(user_id="user-1", applied=date(2026, 3, 2), status=ApplicationStatus.APPLIED, **kwargs):
    return Application(
        user_id=user_id,
        company_name=kwargs.pop("company_name", "Acme"),
        role="Engineer",
        applied_date=applied,
        status=status,
        **kwargs,
    )


def test_list_applications_scoped_and_ordered(db):
    add(
        db,
        make_application(applied=date(2026, 3, 1)),
        make_application(applied=date(2026, 3, 5)),
        make_application(user_id="user-2", applied=date(2026, 3, 3)),
    )

    applications = record_queries.list_applications(db, "user-1")
    assert [a.applied_date for a in applications] == [date(2026, 3, 5), date(2026, 3, 1)]


def test_list_applications_date_range_inclusive(db):
    add(
        db,
        make_application(applied=date(2026, 2, 28)),
        make_application(applied=date(2026, 3, 1)),
        make_application(applied=date(2026, 3, 31)),
        make_application(applied=date(2026, 4, 1)),
    )

    applications = record_queries.list_applications(
        db, "user-1", start_date=date(2026, 3, 1), end_date=date(2026, 3, 31)
    )
    assert sorted(a.applied_date for a in applications) == [date(2026, 3, 1), date(2026, 3, 31)]


def test_list_applications_status_filter(db):
    add(db, make_application(status=ApplicationStatus.OFFER), make_application())
    offers = record_queries.list_applications(db, "user-1", status=ApplicationStatus.OFFER)
    assert len(offers) == 1
    assert offers[0].status == ApplicationStatus.OFFER


def test_scheduled_interviews_end_date_covers_whole_day(db):
    (application,) = add(db, make_application())
    add(
        db,
        Interview(user_id="user-1", application_id=application.id, round_name="Phone",
                  scheduled_date=datetime(2026, 3, 11, 23, 30)),
        Interview(user_id="user-1", application_id=application.id, round_name="Onsite",
                  scheduled_date=datetime(2026, 3, 12, 9, 0)),
        Interview(user_id="user-1", application_id=application.id, round_name="Unscheduled"),
    )

    interviews = record_queries.list_scheduled_interviews(
        db, "user-1", start_date=date(2026, 3, 11), end_date=date(2026, 3, 11)
    )
    assert [i.round_name for i in interviews] == ["Phone"]


def test_list_interviews_unscheduled_last(db):
    (application,) = add(db, make_application())
    add(
        db,
        Interview(user_id="user-1", application_id=application.id, round_name="Later"),
        Interview(user_id="user-1", application_id=application.id, round_name="First",
                  scheduled_date=datetime(2026, 3, 1, 9, 0)),
    )
    assert [i.round_name for i in record_queries.list_interviews(db, "user-1")] == ["First", "Later"]


def test_upcoming_interviews(db):
    (application,) = add(db, make_application())
    add(
        db,
        Interview(user_id="user-1", application_id=application.id, round_name="Past",
                  scheduled_date=datetime(2026, 3, 1, 9, 0)),
        Interview(user_id="user-1", application_id=application.id, round_name="Next",
                  scheduled_date=datetime(2026, 3, 20, 9, 0)),
        Interview(user_id="user-1", application_id=application.id, round_name="Cancelled",
                  scheduled_date=datetime(2026, 3, 21, 9, 0), status=InterviewStatus.CANCELLED),
    )

    upcoming = record_queries.list_upcoming_interviews(db, "user-1", now=datetime(2026, 3, 10, 0, 0))
    assert [i.round_name for i in upcoming] == ["Next"]


def test_follow_up_referrals_skip_missing_dates(db):
    add(
        db,
        Referral(user_id="user-1", person_name="Dana", company="Globex", follow_up_date=date(2026, 3, 12)),
        Referral(user_id="user-1", person_name="Lee", company="Initech"),
    )
    referrals = record_queries.list_follow_up_referrals(db, "user-1")
    assert [r.person_name for r in referrals] == ["Dana"]


def test_deleting_application_removes_its_interviews(db):
    (application,) = add(db, make_application())
    add(db, Interview(user_id="user-1", application_id=application.id, round_name="Phone"))

    db.delete(application)
    db.commit()

    assert db.query(Interview).count() == 0


def test_refresh_resume_metrics(db):
    used, unused = add(
        db,
        Resume(user_id="user-1", version_name="v1", file_url="resumes/user-1/a.pdf"),
        Resume(user_id="user-1", version_name="v2", file_url="resumes/user-1/b.pdf"),
    )
    add(
        db,
        make_application(resume_id=used.id, status=ApplicationStatus.INTERVIEW),
        make_application(resume_id=used.id, status=ApplicationStatus.REJECTED),
        make_application(resume_id=used.id, status=ApplicationStatus.APPLIED),
        make_application(resume_id=used.id, status=ApplicationStatus.GHOSTED),
    )

    assert resume_service.refresh_resume_metrics(db, "user-1") == 2

    db.refresh(used)
    db.refresh(unused)
    assert used.times_used == 4
    assert used.success_rate == 50.0
    assert unused.times_used == 0
    assert unused.success_rate == 0.0
