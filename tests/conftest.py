"""
Shared fixtures for the Aperture test suite.
Run with: pytest tests -v

Install test dependencies with: pip install -e ".[dev]"
"""

import shutil
import tempfile

import pytest

from factories import ADMIN_PASSWORD, ADMIN_USERNAME, make_app


@pytest.fixture
def tmp_data_dir():
    """Create a temporary data directory, cleaned up after."""
    d = tempfile.mkdtemp(prefix="aperture-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_data_dir):
    """Fully initialised Flask app with every Aperture module registered."""
    return make_app(tmp_data_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token(client):
    response = client.post("/api/login", json={
        "username": ADMIN_USERNAME,
        "password": ADMIN_PASSWORD,
    })
    assert response.status_code == 200, response.get_json()
    return response.get_json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
