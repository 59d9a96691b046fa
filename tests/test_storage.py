"""
Media storage tests: local Pillow backend and Cloudinary branching.
"""

import os
from unittest.mock import patch

import pytest
from PIL import UnidentifiedImageError

from aperture.core import storage

from factories import image_file, make_app, make_image_bytes

CLOUDINARY_SETTINGS = {
    "MEDIA_STORAGE": "cloudinary",
    "CLOUDINARY_CLOUD_NAME": "demo",
    "CLOUDINARY_API_KEY": "key",
    "CLOUDINARY_API_SECRET": "secret",
}

FAKE_UPLOAD_RESULT = {
    "public_id": "portfolio/abc123",
    "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/portfolio/abc123.jpg",
    "width": 1200,
    "height": 800,
}


@pytest.fixture
def cloud_app(tmp_data_dir):
    return make_app(tmp_data_dir, **CLOUDINARY_SETTINGS)


# ---------------------------------------------------------------------------
# Local backend
# ---------------------------------------------------------------------------

def test_local_upload_and_delete(app):
    with app.app_context():
        result = storage.upload_image(make_image_bytes(1600, 800), "wide.jpg", "portfolio")

        assert result["public_id"].startswith("portfolio/")
        assert (result["width"], result["height"]) == (1200, 600)

        upload_root = app.config["UPLOAD_FOLDER"]
        web_path = os.path.join(upload_root, result["url"][len("/uploads/"):])
        original_path = os.path.join(upload_root, result["original_url"][len("/uploads/"):])
        assert os.path.isfile(web_path)
        assert os.path.isfile(original_path)

        assert storage.delete_image(result["public_id"]) is True
        assert not os.path.exists(web_path)
        assert not os.path.exists(original_path)


def test_local_small_images_are_not_upscaled(app):
    with app.app_context():
        result = storage.upload_image(make_image_bytes(300, 200), "small.jpg", "portfolio")
    assert (result["width"], result["height"]) == (300, 200)


def test_local_delete_unknown_id(app):
    with app.app_context():
        assert storage.delete_image("portfolio/nothing-here") is False
        assert storage.delete_image("") is False


def test_local_delete_rejects_path_traversal(app):
    with app.app_context():
        with pytest.raises(storage.StorageError):
            storage.delete_image("../../etc/passwd")


def test_local_upload_rejects_invalid_image(app):
    with app.app_context():
        with pytest.raises(UnidentifiedImageError):
            storage.upload_image(b"not an image", "fake.jpg", "portfolio")


# ---------------------------------------------------------------------------
# Cloudinary backend
# ---------------------------------------------------------------------------

def test_cloudinary_not_configured(tmp_data_dir):
    app = make_app(tmp_data_dir, MEDIA_STORAGE="cloudinary")
    with app.app_context():
        assert storage.is_configured() is False
        with pytest.raises(storage.StorageError):
            storage.upload_image(make_image_bytes(), "a.jpg", "portfolio")


def test_upload_route_reports_missing_cloudinary_config(tmp_data_dir):
    app = make_app(tmp_data_dir, MEDIA_STORAGE="cloudinary")
    client = app.test_client()
    token = client.post("/api/login", json={"username": "admin", "password": "correct-horse-battery"}).get_json()["token"]

    response = client.post(
        "/api/upload",
        data={"photos": [image_file()], "category": "urban"},
        headers={"Authorization": f"Bearer {token}"},
        content_type="multipart/form-data",
    )
    assert response.status_code == 500
    assert "not configured" in response.get_json()["error"]


def test_cloudinary_upload(cloud_app):
    with cloud_app.app_context():
        with patch("cloudinary.uploader.upload", return_value=FAKE_UPLOAD_RESULT) as mock_upload:
            result = storage.upload_image(make_image_bytes(), "a.jpg", "portfolio")

    assert result == {
        "public_id": "portfolio/abc123",
        "url": FAKE_UPLOAD_RESULT["secure_url"],
        "original_url": FAKE_UPLOAD_RESULT["secure_url"],
        "width": 1200,
        "height": 800,
    }
    kwargs = mock_upload.call_args.kwargs
    assert kwargs["folder"] == "portfolio"
    assert {"width": 1200, "crop": "limit"} in kwargs["transformation"]
    assert {"quality": "auto"} in kwargs["transformation"]


def test_cloudinary_delete(cloud_app):
    with cloud_app.app_context():
        with patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as mock_destroy:
            assert storage.delete_image("portfolio/abc123") is True
    mock_destroy.assert_called_once_with("portfolio/abc123")


def test_cloudinary_photo_round_trip_through_api(cloud_app):
    """Photo ids come from the Cloudinary public id, slashes included."""
    client = cloud_app.test_client()
    token = client.post("/api/login", json={"username": "admin", "password": "correct-horse-battery"}).get_json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    with patch("cloudinary.uploader.upload", return_value=FAKE_UPLOAD_RESULT):
        photos = client.post(
            "/api/upload",
            data={"photos": [image_file()], "category": "urban"},
            headers=headers,
            content_type="multipart/form-data",
        ).get_json()
    assert photos[0]["id"] == "portfolio/abc123"

    with patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as mock_destroy:
        response = client.delete("/api/photos", query_string={"id": "portfolio/abc123"}, headers=headers)

    assert response.status_code == 200
    mock_destroy.assert_called_once_with("portfolio/abc123")
    assert client.get("/api/photos").get_json() == []
