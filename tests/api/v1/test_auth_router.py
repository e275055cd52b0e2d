import gripe_logger.api.v1.auth as auth_router_module


def test_signup_signin_me_signout(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "Rita@Example.edu", "password": "secret-pass", "name": "Rita"},
    )
    assert response.status_code == 201
    assert response.json()["email"] == "rita@example.edu"

    response = client.post("/api/v1/auth/signin", json={"email": "rita@example.edu", "password": "secret-pass"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "student"
    headers = {"Authorization": f"Bearer {body['access_token']}"}

    me = client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json() == {
        "profile": {"id": body["profile"]["id"], "name": "Rita", "email": "rita@example.edu"},
        "role": "student",
    }

    assert client.post("/api/v1/auth/signout", headers=headers).status_code == 204
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_signup_validation_check(client):
    response = client.post("/api/v1/auth/signup", json={"email": "not-an-email", "password": "123", "name": ""})

    assert response.status_code == 422
    fields = {error["loc"][-1] for error in response.json()["detail"]}
    assert fields == {"email", "password", "name"}


def test_password_spaces_are_kept_check(client):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "  gus@example.edu ", "password": "  padded pass  ", "name": "  Gus  "},
    )
    assert response.status_code == 201
    assert response.json()["name"] == "Gus"

    trimmed = client.post("/api/v1/auth/signin", json={"email": "gus@example.edu", "password": "padded pass"})
    assert trimmed.status_code == 401

    exact = client.post("/api/v1/auth/signin", json={"email": "gus@example.edu", "password": "  padded pass  "})
    assert exact.status_code == 200


def test_duplicate_signup_conflict_check(client, student):
    response = client.post(
        "/api/v1/auth/signup",
        json={"email": "sam@example.edu", "password": "secret-pass", "name": "Sam Again"},
    )

    assert response.status_code == 409
    assert response.json() == {"detail": "User already registered"}


def test_signin_failure_check(client, student):
    response = client.post("/api/v1/auth/signin", json={"email": "sam@example.edu", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_signout_without_session_is_quiet(client):
    assert client.post("/api/v1/auth/signout").status_code == 204
    assert client.post("/api/v1/auth/signout", headers={"Authorization": "Bearer stale"}).status_code == 204


def test_navigate_student_to_admin_area_check(client, student):
    response = client.get("/api/v1/navigate", params={"area": "admin"}, headers=student["headers"])

    assert response.status_code == 200
    assert response.json() == {"decision": "student_area", "location": "/student"}


def test_navigate_admin_check(client, admin):
    response = client.get("/api/v1/navigate", params={"area": "admin"}, headers=admin["headers"])

    assert response.json() == {"decision": "admin_area", "location": "/admin"}


def test_navigate_anonymous_check(client):
    response = client.get("/api/v1/navigate", params={"area": "student"})

    assert response.json() == {"decision": "login", "location": "/login"}


def test_me_uses_profile_service(client, student, monkeypatch):
    monkeypatch.setattr(auth_router_module, "get_profile", lambda _user_id: None)

    response = client.get("/api/v1/auth/me", headers=student["headers"])

    assert response.json() == {"profile": None, "role": "student"}
