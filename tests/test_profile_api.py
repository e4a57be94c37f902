from app.core.config import settings


def test_create_requires_matching_type(client, auth_headers):
    headers = auth_headers("s-1", user_type="startup")

    response = client.post(
        "/api/v1/profile/individual",
        json={"name": "Lena", "email": "lena@example.com"},
        headers=headers,
    )

    assert response.status_code == 403


def test_create_without_type_is_forbidden(client, auth_headers):
    response = client.post("/api/v1/profile/startup", json={"name": "Acme"}, headers=auth_headers("x"))

    assert response.status_code == 403


def test_create_twice_fails(client, individual):
    response = client.post(
        "/api/v1/profile/individual",
        json={"name": "Lena again", "email": "lena@example.com"},
        headers=individual,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Profile already exists"}


def test_invalid_email_is_rejected(client, auth_headers):
    response = client.post(
        "/api/v1/profile/individual",
        json={"name": "Lena", "email": "not-an-email"},
        headers=auth_headers("p-2", user_type="individual"),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}


def test_read_own_profile_and_alias(client, individual):
    first = client.get("/api/v1/profile/individual", headers=individual)
    second = client.get("/api/v1/profile/individual/get", headers=individual)

    assert first.status_code == 200
    assert first.json() == second.json()
    assert first.json()["userId"] == "person-1"
    assert first.json()["location"] == "Munich"


def test_update_profile_replaces_fields(client, individual):
    response = client.put(
        "/api/v1/profile/individual/update",
        json={
            "name": "Lena S.",
            "email": "Lena@Example.com",
            "phone": "",
            "role": "Engineer",
            "profilePicture": "http://testserver/files/profile-pictures/person-1/me.png",
        },
        headers=individual,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Lena S."
    assert body["email"] == "lena@example.com"
    assert body["phone"] is None
    assert body["role"] == "Engineer"
    assert body["location"] is None
    assert body["profilePicture"].endswith("/me.png")


def test_update_missing_profile_is_not_found(client, auth_headers):
    response = client.put(
        "/api/v1/profile/startup/update",
        json={"name": "Ghost"},
        headers=auth_headers("s-9", user_type="startup"),
    )

    assert response.status_code == 404


def test_public_profiles(client, startup, individual):
    assert client.get("/api/v1/profile/startup/startup-1").json()["name"] == "Acme Robotics"
    assert client.get("/api/v1/profile/individual/person-1").json()["name"] == "Lena Schmidt"
    assert client.get("/api/v1/profile/startup/nobody").status_code == 404


def test_startup_public_listings(client, job, event, individual):
    client.post("/api/v1/jobs/apply", json={"jobId": job["id"]}, headers=individual)

    jobs = client.get("/api/v1/profile/startup/startup-1/jobs").json()
    events = client.get("/api/v1/profile/startup/startup-1/events").json()

    assert [j["id"] for j in jobs] == [job["id"]]
    assert len(jobs[0]["applications"]) == 1
    assert [e["id"] for e in events] == [event["id"]]


def test_delete_own_account_cascades(client, startup, job, individual, provider):
    client.post("/api/v1/jobs/apply", json={"jobId": job["id"]}, headers=individual)

    response = client.delete("/api/v1/profile/startup/startup-1", headers=startup)

    assert response.status_code == 200
    assert provider.deleted == ["startup-1"]
    assert client.get("/api/v1/profile/startup/startup-1").status_code == 404
    assert client.get(f"/api/v1/jobs/{job['id']}").status_code == 404
    assert client.get("/api/v1/applications/user", headers=individual).json() == []


def test_failed_provider_delete_keeps_account(client, job, individual, provider):
    client.post("/api/v1/jobs/apply", json={"jobId": job["id"]}, headers=individual)
    provider.fail_deletes = True

    response = client.delete("/api/v1/profile/individual/person-1", headers=individual)

    assert response.status_code == 500
    assert provider.deleted == []
    status = client.get("/api/v1/user/profile-status", headers=individual).json()
    assert status["destination"] == "enter-application"
    assert client.get("/api/v1/profile/individual/person-1").status_code == 200
    assert len(client.get("/api/v1/applications/user", headers=individual).json()) == 1


def test_cannot_delete_someone_else(client, startup, individual):
    response = client.delete("/api/v1/profile/startup/startup-1", headers=individual)

    assert response.status_code == 403


def test_upload_file_stores_under_user_folder(client, individual, storage):
    response = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "cvs", "fileName": "cv.pdf"},
        files={"file": ("cv.pdf", b"%PDF-1.4 demo", "application/pdf")},
        headers=individual,
    )

    assert response.status_code == 200
    assert response.json() == {"url": "http://testserver/files/cvs/person-1/cv.pdf"}
    with open(f"{storage.root}/cvs/person-1/cv.pdf", "rb") as f:
        assert f.read() == b"%PDF-1.4 demo"


def test_upload_strips_directories_from_name(client, individual, storage):
    response = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "profile-pictures", "fileName": "../../etc/avatar.png"},
        files={"file": ("avatar.png", b"png", "image/png")},
        headers=individual,
    )

    assert response.json()["url"].endswith("/profile-pictures/person-1/avatar.png")


def test_upload_validation(client, individual, monkeypatch):
    missing = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "cvs"},
        files={"file": ("cv.pdf", b"x", "application/pdf")},
        headers=individual,
    )
    assert missing.status_code == 400
    assert missing.json() == {"error": "Missing required fields"}

    unknown = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "secrets", "fileName": "a.txt"},
        files={"file": ("a.txt", b"x", "text/plain")},
        headers=individual,
    )
    assert unknown.status_code == 400

    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)
    too_big = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "cvs", "fileName": "cv.pdf"},
        files={"file": ("cv.pdf", b"123456", "application/pdf")},
        headers=individual,
    )
    assert too_big.status_code == 400
    assert too_big.json() == {"error": "File exceeds the maximum upload size"}

    at_limit = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "cvs", "fileName": "cv.pdf"},
        files={"file": ("cv.pdf", b"1234", "application/pdf")},
        headers=individual,
    )
    assert at_limit.status_code == 200


def test_upload_requires_session(client):
    response = client.post(
        "/api/v1/profile/upload-file",
        data={"bucket": "cvs", "fileName": "cv.pdf"},
        files={"file": ("cv.pdf", b"x", "application/pdf")},
    )

    assert response.status_code == 401
