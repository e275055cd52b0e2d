import gripe_logger.api.v1.complaint as complaint_router_module


def _submit(client, headers, **overrides):
    payload = {
        "title": "Broken AC in room 204",
        "description": "The AC has been broken since Monday.",
        "category": "Hostel",
        "priority": "high",
    }
    payload.update(overrides)
    return client.post("/api/v1/complaints", json=payload, headers=headers)


def test_submit_triage_resolve_flow(client, student, admin):
    created = _submit(client, student["headers"])
    assert created.status_code == 201
    complaint_id = created.json()["id"]

    own = client.get("/api/v1/complaints", headers=student["headers"]).json()["items"]
    assert [(c["id"], c["status"], c["can_edit"]) for c in own] == [(complaint_id, "pending", True)]

    pending = client.get("/api/v1/admin/complaints", params={"status": "pending"}, headers=admin["headers"])
    assert pending.status_code == 200
    [listed] = pending.json()["items"]
    assert listed["id"] == complaint_id
    assert listed["student"]["name"] == "Sam Student"

    resolved = client.patch(
        f"/api/v1/admin/complaints/{complaint_id}",
        json={"status": "resolved", "resolution_note": "Technician replaced the compressor."},
        headers=admin["headers"],
    )
    assert resolved.status_code == 200

    detail = client.get(f"/api/v1/complaints/{complaint_id}", headers=student["headers"]).json()
    assert detail["status"] == "resolved"
    assert detail["resolution_note"] == "Technician replaced the compressor."
    assert detail["can_edit"] is False

    late_edit = client.patch(
        f"/api/v1/complaints/{complaint_id}",
        json={"title": "Broken AC again", "description": "Trying to edit after resolution."},
        headers=student["headers"],
    )
    assert late_edit.status_code == 409

    stats = client.get("/api/v1/admin/complaints/stats", headers=admin["headers"]).json()
    assert stats == {"total": 1, "pending": 0, "in_progress": 0, "resolved": 1}


def test_field_level_validation_check(client, student):
    response = _submit(client, student["headers"], title="AC", description="short", category="Parking")

    assert response.status_code == 422
    fields = {error["loc"][-1] for error in response.json()["detail"]}
    assert fields == {"title", "description", "category"}
    assert client.get("/api/v1/complaints", headers=student["headers"]).json()["items"] == []


def test_whitespace_padding_counts_against_length(client, student):
    response = _submit(client, student["headers"], title="   AC     ")

    assert response.status_code == 422


def test_unknown_status_filter_check(client, student):
    response = client.get("/api/v1/complaints", params={"status": "closed"}, headers=student["headers"])

    assert response.status_code == 422


def test_admin_routes_reject_students(client, student):
    assert client.get("/api/v1/admin/complaints", headers=student["headers"]).status_code == 403
    assert client.get("/api/v1/admin/complaints/stats", headers=student["headers"]).status_code == 403


def test_requires_token(client):
    assert client.get("/api/v1/complaints").status_code == 401
    assert client.get("/api/v1/complaints", headers={"Authorization": "Token abc"}).status_code == 401


def test_backwards_transition_conflict_check(client, student, admin):
    complaint_id = _submit(client, student["headers"]).json()["id"]
    client.patch(f"/api/v1/admin/complaints/{complaint_id}", json={"status": "in_progress"}, headers=admin["headers"])

    response = client.patch(
        f"/api/v1/admin/complaints/{complaint_id}", json={"status": "pending"}, headers=admin["headers"]
    )

    assert response.status_code == 409
    assert response.json() == {"detail": "Cannot move a complaint from in_progress to pending"}


def test_delete_own_complaint(client, student, other_student):
    complaint_id = _submit(client, student["headers"]).json()["id"]

    assert client.delete(f"/api/v1/complaints/{complaint_id}", headers=other_student["headers"]).status_code == 404
    assert client.delete(f"/api/v1/complaints/{complaint_id}", headers=student["headers"]).status_code == 204
    assert client.get(f"/api/v1/complaints/{complaint_id}", headers=student["headers"]).status_code == 404


def test_list_endpoint_passes_filter(client, student, monkeypatch):
    seen = {}

    def fake_list(identity, status_filter):
        seen["user"] = identity.user_id
        seen["filter"] = status_filter.value
        return []

    monkeypatch.setattr(complaint_router_module, "list_own_complaints", fake_list)

    response = client.get("/api/v1/complaints", params={"status": "in_progress"}, headers=student["headers"])

    assert response.status_code == 200
    assert response.json() == {"items": []}
    assert seen == {"user": student["identity"].user_id, "filter": "in_progress"}


def test_patch_keeps_category_when_omitted_check(client, student):
    created = _submit(client, student["headers"], title="Cold showers in block C").json()

    response = client.patch(
        f"/api/v1/complaints/{created['id']}",
        json={"description": "No hot water since Thursday night."},
        headers=student["headers"],
    )

    assert response.status_code == 200
    assert response.json()["category"] == "Hostel"
    assert response.json()["title"] == "Cold showers in block C"
    assert response.json()["description"] == "No hot water since Thursday night."
