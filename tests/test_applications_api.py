"""
Integration tests for application, referral and interview endpoints.
"""
from datetime import datetime, timedelta, timezone

from applyflow.core.statuses import ActivityAction
from applyflow.db.models import Activity, Application


def create_application(client, headers, **overrides):
    payload = {
        "company_name": "Acme",
        "role": "Backend Engineer",
        "applied_date": "2026-03-02",
    }
    payload.update(overrides)
    response = client.post("/applications", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_authentication(client):
    response = client.get("/applications")
    assert response.status_code == 401


def test_rejects_invalid_token(client):
    response = client.get("/applications", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_create_application_defaults(client, headers, db):
    data = create_application(client, headers)

    assert data["status"] == "Applied"
    assert data["priority"] == "Medium"
    assert data["user_id"] == "user-1"
    assert data["tech_stack"] == []

    entry = db.query(Activity).one()
    assert entry.entity_id == str(data["id"])


def test_create_rejects_unknown_status(client, headers):
    response = client.post(
        "/applications",
        json={"company_name": "Acme", "role": "Eng", "applied_date": "2026-03-02", "status": "Hired"},
        headers=headers,
    )
    assert response.status_code == 422


def test_create_rejects_foreign_resume(client, headers):
    response = client.post(
        "/applications",
        json={"company_name": "Acme", "role": "Eng", "applied_date": "2026-03-02", "resume_id": 999},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Resume not found"


def test_list_filters_and_pagination(client, headers):
    create_application(client, headers, company_name="Acme", applied_date="2026-03-01")
    create_application(client, headers, company_name="Globex", applied_date="2026-03-03", status="Offer")
    create_application(client, headers, company_name="Acme Labs", applied_date="2026-03-02", notes="python role")

    response = client.get("/applications", headers=headers)
    data = response.json()
    assert data["total"] == 3
    assert [a["company_name"] for a in data["applications"]] == ["Globex", "Acme Labs", "Acme"]

    offers = client.get("/applications", params={"status": "Offer"}, headers=headers).json()
    assert [a["company_name"] for a in offers["applications"]] == ["Globex"]

    acme = client.get("/applications", params={"company": "acme"}, headers=headers).json()
    assert acme["total"] == 2

    search = client.get("/applications", params={"search": "python"}, headers=headers).json()
    assert [a["company_name"] for a in search["applications"]] == ["Acme Labs"]

    page = client.get("/applications", params={"page": 2, "page_size": 2}, headers=headers).json()
    assert page["total"] == 3
    assert len(page["applications"]) == 1


def test_users_cannot_see_each_other(client, headers, other_headers):
    data = create_application(client, headers)

    assert client.get(f"/applications/{data['id']}", headers=other_headers).status_code == 404
    assert client.get("/applications", headers=other_headers).json()["total"] == 0
    assert client.delete(f"/applications/{data['id']}", headers=other_headers).status_code == 404


def test_update_status_logs_status_change(client, headers, db):
    data = create_application(client, headers)

    response = client.put(f"/applications/{data['id']}", json={"status": "Interview"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Interview"

    entry = db.query(Activity).filter(Activity.action == ActivityAction.STATUS_CHANGED).one()
    assert entry.old_value == "Applied"
    assert entry.new_value == "Interview"


def test_update_rejects_null_status(client, headers):
    data = create_application(client, headers)
    response = client.put(f"/applications/{data['id']}", json={"status": None}, headers=headers)
    assert response.status_code == 400


def test_update_rejects_null_required_fields(client, headers):
    data = create_application(client, headers)

    for field in ("company_name", "role", "applied_date", "priority"):
        response = client.put(f"/applications/{data['id']}", json={field: None}, headers=headers)
        assert response.status_code == 400, field
        assert response.json()["detail"] == f"{field} cannot be empty"

    detail = client.get(f"/applications/{data['id']}", headers=headers).json()
    assert detail["company_name"] == "Acme"
    assert detail["priority"] == "Medium"


def test_any_status_transition_allowed(client, headers):
    data = create_application(client, headers, status="Rejected")
    response = client.put(f"/applications/{data['id']}", json={"status": "Applied"}, headers=headers)
    assert response.status_code == 200


def test_delete_application_cascades_interviews(client, headers):
    data = create_application(client, headers)
    client.post(
        "/interviews",
        json={"application_id": data["id"], "round_name": "Phone", "scheduled_date": "2026-03-10T10:00:00Z"},
        headers=headers,
    )

    assert client.delete(f"/applications/{data['id']}", headers=headers).status_code == 204
    assert client.get("/interviews", headers=headers).json()["total"] == 0


def test_referral_delete_keeps_applications(client, headers, db):
    referral = client.post(
        "/referrals",
        json={"person_name": "Dana", "company": "Globex", "follow_up_date": "2026-03-12"},
        headers=headers,
    ).json()
    data = create_application(client, headers, referral_id=referral["id"])

    by_referral = client.get(f"/applications/by-referral/{referral['id']}", headers=headers).json()
    assert by_referral["total"] == 1

    assert client.delete(f"/referrals/{referral['id']}", headers=headers).status_code == 204

    detail = client.get(f"/applications/{data['id']}", headers=headers).json()
    assert detail["referral_id"] is None
    assert detail["referral"] is None
    assert db.query(Application).count() == 1


def test_application_detail_includes_links(client, headers):
    referral = client.post("/referrals", json={"person_name": "Dana", "company": "Globex"}, headers=headers).json()
    data = create_application(client, headers, referral_id=referral["id"])
    client.post("/interviews", json={"application_id": data["id"], "round_name": "Onsite"}, headers=headers)

    detail = client.get(f"/applications/{data['id']}", headers=headers).json()
    assert detail["referral"]["person_name"] == "Dana"
    assert [i["round_name"] for i in detail["interviews"]] == ["Onsite"]


def test_interview_requires_owned_application(client, headers, other_headers):
    data = create_application(client, headers)
    response = client.post(
        "/interviews",
        json={"application_id": data["id"], "round_name": "Phone"},
        headers=other_headers,
    )
    assert response.status_code == 400


def test_interview_crud_and_upcoming(client, headers):
    data = create_application(client, headers)
    soon = (datetime.now(timezone.utc) + timedelta(days=2)).replace(microsecond=0).isoformat()
    past = (datetime.now(timezone.utc) - timedelta(days=2)).replace(microsecond=0).isoformat()

    upcoming = client.post(
        "/interviews", json={"application_id": data["id"], "round_name": "Onsite", "scheduled_date": soon},
        headers=headers,
    ).json()
    client.post(
        "/interviews", json={"application_id": data["id"], "round_name": "Phone", "scheduled_date": past},
        headers=headers,
    )

    assert [i["round_name"] for i in client.get("/interviews/upcoming", headers=headers).json()["interviews"]] == ["Onsite"]
    assert client.get(f"/interviews/by-application/{data['id']}", headers=headers).json()["total"] == 2

    response = client.put(
        f"/interviews/{upcoming['id']}", json={"status": "Completed", "feedback": "went well"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["feedback"] == "went well"

    assert client.delete(f"/interviews/{upcoming['id']}", headers=headers).status_code == 204
    assert client.get("/interviews", headers=headers).json()["total"] == 1
