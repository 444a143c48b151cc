import pytest


def share(client, headers, **overrides):
    payload = {
        "title": "Quadratic equations notes",
        "description": "Worked examples for chapter 4",
        "subject": "Mathematics",
        "url": "https://files.example.com/quadratics.pdf",
        "file_size": "2.4 MB",
        "tags": ["algebra", "chapter-4"],
    }
    payload.update(overrides)
    return client.post("/api/resources", json=payload, headers=headers)


@pytest.fixture
def resource(client, teacher_headers):
    return share(client, teacher_headers).json()["data"]


def test_teacher_shares_resource(client, teacher_headers):
    response = share(client, teacher_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == "pdf"
    assert data["category"] == "lesson_notes"
    assert data["download_count"] == 0
    assert data["tags"] == ["algebra", "chapter-4"]
    assert data["teacher_name"] == "John Doe"


@pytest.mark.parametrize("field", ["title", "description", "subject"])
def test_required_fields(client, teacher_headers, field):
    assert share(client, teacher_headers, **{field: "  "}).status_code == 400


def test_only_teachers_share(client, student_headers, admin_headers):
    assert share(client, student_headers).status_code == 403
    assert share(client, admin_headers).status_code == 403


def test_filters_and_sorting(client, teacher_headers, student_headers):
    share(client, teacher_headers)
    share(
        client,
        teacher_headers,
        title="Algebra past paper 2023",
        description="June exam",
        type="document",
        category="past_papers",
    )
    share(
        client,
        teacher_headers,
        title="Cells explained",
        description="Short video",
        subject="Biology",
        type="video",
        category="videos",
    )

    def titles(query=""):
        response = client.get(f"/api/resources{query}", headers=student_headers)
        assert response.status_code == 200
        return [r["title"] for r in response.json()["data"]]

    assert titles("?type=video") == ["Cells explained"]
    assert titles("?category=past_papers") == ["Algebra past paper 2023"]
    assert titles("?subject=Biology") == ["Cells explained"]
    assert titles("?search=worked") == ["Quadratic equations notes"]
    assert titles("?sort=name") == [
        "Algebra past paper 2023",
        "Cells explained",
        "Quadratic equations notes",
    ]


def test_unknown_sort_is_rejected(client, student_headers):
    response = client.get("/api/resources?sort=colour", headers=student_headers)
    assert response.status_code == 400


def test_mine_lists_own_resources(client, teacher_headers, admin_headers, resource):
    response = client.get("/api/resources?mine=true", headers=teacher_headers)
    assert [r["id"] for r in response.json()["data"]] == [resource["id"]]

    response = client.get("/api/resources?mine=true", headers=admin_headers)
    assert response.json()["data"] == []


def test_download_counts(client, student_headers, resource):
    for expected in (1, 2):
        response = client.post(
            f"/api/resources/{resource['id']}/download", headers=student_headers
        )
        assert response.status_code == 200
        assert response.json()["data"] == {
            "url": "https://files.example.com/quadratics.pdf",
            "download_count": expected,
        }

    response = client.get("/api/resources?sort=downloads", headers=student_headers)
    assert response.json()["data"][0]["download_count"] == 2


def test_student_bookmarks(client, student_headers, resource):
    url = f"/api/resources/{resource['id']}/bookmark"

    response = client.post(url, headers=student_headers)
    assert response.status_code == 200
    assert response.json()["data"]["is_bookmarked"] is True

    listed = client.get("/api/resources", headers=student_headers).json()["data"]
    assert listed[0]["is_bookmarked"] is True
    bookmarks = client.get("/api/resources/bookmarks", headers=student_headers).json()["data"]
    assert [b["id"] for b in bookmarks] == [resource["id"]]

    response = client.post(url, headers=student_headers)
    assert response.json()["data"]["is_bookmarked"] is False
    assert client.get("/api/resources/bookmarks", headers=student_headers).json()["data"] == []


def test_bookmarks_are_for_students(client, teacher_headers, resource):
    response = client.post(f"/api/resources/{resource['id']}/bookmark", headers=teacher_headers)
    assert response.status_code == 403


def test_owner_updates_and_deletes(client, teacher_headers, student_headers, resource):
    url = f"/api/resources/{resource['id']}"

    assert client.put(url, json={"title": "Mine now"}, headers=student_headers).status_code == 403

    response = client.put(
        url, json={"title": "Quadratics: full notes", "category": "reference"}, headers=teacher_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Quadratics: full notes"
    assert data["category"] == "reference"

    assert client.delete(url, headers=teacher_headers).status_code == 200
    assert client.get(url, headers=student_headers).status_code == 404


def test_unknown_resource(client, student_headers):
    response = client.post(
        "/api/resources/00000000-0000-0000-0000-000000000000/download",
        headers=student_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Resource not found"
