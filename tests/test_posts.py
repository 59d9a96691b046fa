"""
Blog post tests.
"""

from factories import image_file

LONG_CONTENT = "Light falls differently in the mountains. " * 10


def create(client, headers, **fields):
    data = {"title": "Morning Fog", "content": LONG_CONTENT}
    data.update(fields)
    return client.post("/api/posts", data=data, headers=headers, content_type="multipart/form-data")


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def test_create_post(client, auth_headers):
    response = create(client, auth_headers)
    assert response.status_code == 201

    post = response.get_json()
    assert post["title"] == "Morning Fog"
    assert post["slug"] == "morning-fog"
    assert post["id"].endswith("-morning-fog")
    assert post["id"].split("-")[0].isdigit()
    assert post["coverImage"] == ""
    assert "updatedAt" not in post


def test_excerpt_defaults_to_truncated_content(client, auth_headers):
    post = create(client, auth_headers).get_json()
    assert post["excerpt"] == LONG_CONTENT.strip()[:150] + "..."


def test_explicit_excerpt_is_kept(client, auth_headers):
    post = create(client, auth_headers, excerpt="A short teaser").get_json()
    assert post["excerpt"] == "A short teaser"


def test_create_accepts_json(client, auth_headers):
    response = client.post("/api/posts", json={"title": "Json Post", "content": "Body"}, headers=auth_headers)
    assert response.status_code == 201
    assert response.get_json()["excerpt"] == "Body..."


def test_create_requires_title_and_content(client, auth_headers):
    assert create(client, auth_headers, title="").status_code == 400
    assert create(client, auth_headers, content="   ").status_code == 400
    assert client.get("/api/posts").get_json() == []


def test_create_with_cover_upload(client, auth_headers):
    post = create(client, auth_headers, coverImage=image_file("cover.jpg")).get_json()
    assert post["coverImage"].startswith("/uploads/blog/")
    assert client.get(post["coverImage"]).status_code == 200


def test_create_with_cover_url(client, auth_headers):
    post = create(client, auth_headers, coverImage="https://example.com/cover.jpg").get_json()
    assert post["coverImage"] == "https://example.com/cover.jpg"


def test_duplicate_titles_get_unique_slugs(client, auth_headers):
    first = create(client, auth_headers).get_json()
    second = create(client, auth_headers).get_json()

    assert first["slug"] == "morning-fog"
    assert second["slug"] == "morning-fog-1"
    assert first["id"] != second["id"]


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

def test_posts_newest_first(client, auth_headers):
    create(client, auth_headers, title="Older")
    create(client, auth_headers, title="Newer")

    titles = [p["title"] for p in client.get("/api/posts").get_json()]
    assert titles == ["Newer", "Older"]


def test_get_post_by_slug(client, auth_headers):
    create(client, auth_headers)

    response = client.get("/api/posts/morning-fog")
    assert response.status_code == 200
    assert response.get_json()["title"] == "Morning Fog"
    assert client.get("/api/posts/nope").status_code == 404


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

def test_update_preserves_unsupplied_fields(client, auth_headers):
    """Only title, content, cover and slug change; id, date and excerpt stay."""
    original = create(client, auth_headers, excerpt="Teaser", coverImage="https://example.com/a.jpg").get_json()

    response = client.put(
        "/api/posts",
        query_string={"id": original["id"]},
        data={"title": "Evening Fog", "content": "New body"},
        headers=auth_headers,
        content_type="multipart/form-data",
    )
    assert response.status_code == 200

    updated = response.get_json()
    assert updated["id"] == original["id"]
    assert updated["date"] == original["date"]
    assert updated["excerpt"] == "Teaser"
    assert updated["coverImage"] == "https://example.com/a.jpg"
    assert updated["title"] == "Evening Fog"
    assert updated["content"] == "New body"
    assert updated["slug"] == "evening-fog"
    assert "updatedAt" in updated

    listed = client.get("/api/posts").get_json()
    assert listed == [updated]


def test_update_keeps_slug_when_title_unchanged(client, auth_headers):
    original = create(client, auth_headers).get_json()
    create(client, auth_headers)  # takes morning-fog-1

    updated = client.put(
        "/api/posts",
        query_string={"id": original["id"]},
        json={"title": "Morning Fog", "content": "Edited"},
        headers=auth_headers,
    ).get_json()
    assert updated["slug"] == "morning-fog"


def test_update_replaces_cover(client, auth_headers):
    original = create(client, auth_headers, coverImage="https://example.com/a.jpg").get_json()

    updated = client.put(
        "/api/posts",
        query_string={"id": original["id"]},
        data={"title": "Morning Fog", "content": "Body", "coverImage": image_file("new.jpg")},
        headers=auth_headers,
        content_type="multipart/form-data",
    ).get_json()
    assert updated["coverImage"].startswith("/uploads/blog/")


def test_update_missing_post(client, auth_headers):
    response = client.put(
        "/api/posts", query_string={"id": "123-nope"},
        json={"title": "T", "content": "C"}, headers=auth_headers,
    )
    assert response.status_code == 404


def test_update_validation(client, auth_headers):
    post = create(client, auth_headers).get_json()

    assert client.put("/api/posts", json={"title": "T", "content": "C"}, headers=auth_headers).status_code == 400
    response = client.put("/api/posts", query_string={"id": post["id"]}, json={"title": "T"}, headers=auth_headers)
    assert response.status_code == 400


def test_malformed_body_rejected(client, auth_headers):
    post = create(client, auth_headers).get_json()

    bodies = [{"title": 1, "content": "x"}, {"title": "T", "content": "C", "excerpt": 3}, ["T", "C"]]
    for body in bodies:
        response = client.post("/api/posts", json=body, headers=auth_headers)
        assert response.status_code == 400, body
        assert "error" in response.get_json()

        response = client.put("/api/posts", query_string={"id": post["id"]}, json=body, headers=auth_headers)
        assert response.status_code == 400, body

    assert len(client.get("/api/posts").get_json()) == 1
    assert client.get(f"/api/posts/{post['slug']}").get_json()["title"] == "Morning Fog"


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def test_delete_post(client, auth_headers):
    keep = create(client, auth_headers, title="Keep").get_json()
    gone = create(client, auth_headers, title="Gone").get_json()

    response = client.delete("/api/posts", query_string={"id": gone["id"]}, headers=auth_headers)
    assert response.status_code == 200
    assert [p["id"] for p in client.get("/api/posts").get_json()] == [keep["id"]]


def test_delete_missing_post(client, auth_headers):
    assert client.delete("/api/posts", query_string={"id": "nope"}, headers=auth_headers).status_code == 404
    assert client.delete("/api/posts", headers=auth_headers).status_code == 400
