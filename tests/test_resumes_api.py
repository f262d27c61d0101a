"""
Integration tests for resume upload, download and metrics endpoints.
"""
from applyflow.core import config


PDF_BYTES = b"%PDF-1.4\n%test\n"


def upload(client, headers, name="Backend v1", content=PDF_BYTES, content_type="application/pdf", filename="cv.pdf"):
    return client.post(
        "/resumes",
        data={"version_name": name},
        files={"file": (filename, content, content_type)},
        headers=headers,
    )


def test_upload_and_download(client, headers, storage_dir):
    response = upload(client, headers)
    assert response.status_code == 201, response.text
    resume = response.json()

    assert resume["version_name"] == "Backend v1"
    assert resume["times_used"] == 0
    assert resume["file_url"].startswith("resumes/user-1/")
    assert (storage_dir / resume["file_url"]).exists()

    download = client.get(f"/resumes/{resume['id']}/download", headers=headers)
    assert download.status_code == 200
    assert download.content == PDF_BYTES
    assert download.headers["content-type"] == "application/pdf"


def test_upload_rejects_non_pdf(client, headers):
    response = upload(client, headers, content=b"hello", content_type="text/plain", filename="cv.txt")
    assert response.status_code == 400
    assert response.json()["detail"] == "Only PDF files are allowed"


def test_upload_rejects_oversize(client, headers):
    response = upload(client, headers, content=b"0" * (5 * 1024 * 1024 + 1))
    assert response.status_code == 400


def test_upload_reads_no_more_than_limit(client, headers, monkeypatch):
    monkeypatch.setattr(config, "MAX_RESUME_SIZE", 1024)
    response = upload(client, headers, content=b"%PDF" + b"0" * 4096)
    assert response.status_code == 400

    assert upload(client, headers, content=b"%PDF" + b"0" * 1000).status_code == 201


def test_rename_resume(client, headers):
    resume = upload(client, headers).json()
    response = client.put(f"/resumes/{resume['id']}", json={"version_name": "Backend v2"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["version_name"] == "Backend v2"


def test_delete_resume_unlinks_applications_and_file(client, headers, storage_dir):
    resume = upload(client, headers).json()
    application = client.post(
        "/applications",
        json={"company_name": "Acme", "role": "Eng", "applied_date": "2026-03-02", "resume_id": resume["id"]},
        headers=headers,
    ).json()

    assert client.delete(f"/resumes/{resume['id']}", headers=headers).status_code == 204

    assert not (storage_dir / resume["file_url"]).exists()
    detail = client.get(f"/applications/{application['id']}", headers=headers).json()
    assert detail["resume_id"] is None
    assert client.get(f"/resumes/{resume['id']}", headers=headers).status_code == 404


def test_refresh_metrics(client, headers):
    resume = upload(client, headers).json()
    for status in ("Interview", "Applied"):
        client.post(
            "/applications",
            json={"company_name": "Acme", "role": "Eng", "applied_date": "2026-03-02",
                  "resume_id": resume["id"], "status": status},
            headers=headers,
        )

    response = client.post("/resumes/refresh-metrics", headers=headers)
    assert response.status_code == 200
    refreshed = response.json()["resumes"][0]
    assert refreshed["times_used"] == 2
    assert refreshed["success_rate"] == 50.0


def test_other_user_cannot_download(client, headers, other_headers):
    resume = upload(client, headers).json()
    assert client.get(f"/resumes/{resume['id']}/download", headers=other_headers).status_code == 404
