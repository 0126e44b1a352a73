# tests/services/test_uploads_api.py
from __future__ import annotations

from starlette.testclient import TestClient

from dubstudio.domain.errors import ImageUploadError
from dubstudio.services.api.app import create_app

URL = "/api/admin/projects/cover-image"


def _form(**overrides):
    data = {"uploadContext": "projectCover", "identifier": "hollow-knight", "folder": "project_covers"}
    data.update(overrides)
    return data


def test_upload_returns_public_id_and_stores_file(api_client, admin_headers, png_bytes, image_store):
    r = api_client.post(
        URL,
        data=_form(),
        files={"imageFile": ("cover.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"publicId": "project_covers/hollow-knight"}

    stored = image_store.path_for("project_covers/hollow-knight")
    assert stored is not None and stored.suffix == ".png"
    assert stored.read_bytes() == png_bytes


def test_banner_context_defaults_its_folder(api_client, admin_headers, png_bytes):
    r = api_client.post(
        URL,
        data={"uploadContext": "projectBanner", "identifier": "Hollow Knight!"},
        files={"imageFile": ("b.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["publicId"] == "project_banners/hollow-knight"


def test_upload_requires_admin(api_client, png_bytes):
    r = api_client.post(URL, data=_form(), files={"imageFile": ("c.png", png_bytes, "image/png")})
    assert r.status_code == 403


def test_non_image_rejected(api_client, admin_headers):
    r = api_client.post(
        URL, data=_form(), files={"imageFile": ("c.png", b"not an image", "image/png")}, headers=admin_headers,
    )
    assert r.status_code == 400
    assert "imageFile" in r.json()["errors"]


def test_missing_file_and_bad_context_rejected(api_client, admin_headers, png_bytes):
    r = api_client.post(URL, data=_form(), headers=admin_headers)
    assert r.status_code == 400
    assert "imageFile" in r.json()["errors"]

    r = api_client.post(
        URL,
        data=_form(uploadContext="avatar"),
        files={"imageFile": ("c.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert "uploadContext" in r.json()["errors"]


def test_folder_traversal_rejected(api_client, admin_headers, png_bytes):
    r = api_client.post(
        URL,
        data=_form(folder="../../etc"),
        files={"imageFile": ("c.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 400


class _BrokenStore:
    def upload(self, data, *, public_id, filename, content_type=None):
        raise ImageUploadError("Image host is unreachable.")


def test_image_host_failure_is_bad_gateway(database, admin_headers, png_bytes):
    app = create_app(database=database, image_store=_BrokenStore())
    with TestClient(app) as client:
        r = client.post(
            URL, data=_form(), files={"imageFile": ("c.png", png_bytes, "image/png")}, headers=admin_headers,
        )
    assert r.status_code == 502
    assert r.json() == {"message": "Image host is unreachable."}
