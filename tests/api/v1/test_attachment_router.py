MIB = 1024 * 1024


def _complaint_id(client, headers):
    response = client.post(
        "/api/v1/complaints",
        json={"title": "Broken window latch", "description": "The latch on my window is broken."},
        headers=headers,
    )
    return response.json()["id"]


def test_upload_download_delete(client, student):
    complaint_id = _complaint_id(client, student["headers"])

    response = client.post(
        f"/api/v1/complaints/{complaint_id}/attachments",
        files=[
            ("files", ("latch.jpg", b"\xff\xd8\xff" + b"0" * 100, "image/jpeg")),
            ("files", ("video.mp4", b"0" * (5 * MIB + 1), "video/mp4")),
        ],
        headers=student["headers"],
    )
    assert response.status_code == 200
    results = response.json()["results"]
    assert [(r["file_name"], r["status"]) for r in results] == [("latch.jpg", "uploaded"), ("video.mp4", "rejected")]
    attachment_id = results[0]["attachment"]["id"]

    listed = client.get(f"/api/v1/complaints/{complaint_id}/attachments", headers=student["headers"]).json()
    assert [a["file_name"] for a in listed["items"]] == ["latch.jpg"]

    download = client.get(f"/api/v1/attachments/{attachment_id}/download", headers=student["headers"])
    assert download.status_code == 200
    assert download.content.startswith(b"\xff\xd8\xff")
    assert download.headers["content-type"] == "image/jpeg"
    assert "latch.jpg" in download.headers["content-disposition"]

    assert client.delete(f"/api/v1/attachments/{attachment_id}", headers=student["headers"]).status_code == 204
    listed = client.get(f"/api/v1/complaints/{complaint_id}/attachments", headers=student["headers"]).json()
    assert listed["items"] == []


def test_admin_cannot_delete_student_upload(client, student, admin):
    complaint_id = _complaint_id(client, student["headers"])
    results = client.post(
        f"/api/v1/complaints/{complaint_id}/attachments",
        files=[("files", ("notes.txt", b"notes", "text/plain"))],
        headers=student["headers"],
    ).json()["results"]

    response = client.delete(f"/api/v1/attachments/{results[0]['attachment']['id']}", headers=admin["headers"])

    assert response.status_code == 403
    assert response.json() == {"detail": "Only the uploader can delete this file"}


def test_missing_attachment_check(client, student):
    assert client.get("/api/v1/attachments/999/download", headers=student["headers"]).status_code == 404
