# tests/services/test_image_stores.py
from __future__ import annotations

import hashlib

import httpx
import pytest

from dubstudio.domain.errors import FieldValidationError, ImageUploadError
from dubstudio.services.images.cloudinary_store import CloudinaryImageStore, sign_params
from dubstudio.services.images.inspect import inspect_image
from dubstudio.services.images.local_store import LocalImageStore


def test_sign_params_sorted_and_secret_appended():
    expected = hashlib.sha1(b"overwrite=true&public_id=a/b&timestamp=100" + b"s3cret").hexdigest()
    assert sign_params({"timestamp": "100", "public_id": "a/b", "overwrite": "true"}, "s3cret") == expected


def _cloudinary(handler) -> CloudinaryImageStore:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return CloudinaryImageStore(cloud_name="studio", api_key="key", api_secret="secret", client=client)


def test_cloudinary_upload_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"public_id": "project_covers/hk", "bytes": 4})

    assert _cloudinary(handler).upload(b"\x89PNG", public_id="project_covers/hk", filename="hk.png") == "project_covers/hk"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/studio/image/upload"
    assert b'name="signature"' in seen["body"]
    assert b'name="api_key"' in seen["body"]


def test_cloudinary_rejection_and_transport_errors():
    rejected = _cloudinary(lambda r: httpx.Response(400, json={"error": {"message": "Invalid image file"}}))
    with pytest.raises(ImageUploadError, match="Invalid image file"):
        rejected.upload(b"x", public_id="p", filename="p.png")

    def boom(request):
        raise httpx.ConnectTimeout("slow", request=request)

    with pytest.raises(ImageUploadError):
        _cloudinary(boom).upload(b"x", public_id="p", filename="p.png")


def test_cloudinary_requires_credentials():
    with pytest.raises(ImageUploadError):
        CloudinaryImageStore(cloud_name="", api_key="", api_secret="")


def test_local_store_overwrites_same_public_id(tmp_path):
    store = LocalImageStore(tmp_path)
    store.upload(b"one", public_id="project_covers/hk", filename="hk.png")
    store.upload(b"two", public_id="project_covers/hk", filename="hk.png")
    assert store.path_for("project_covers/hk").read_bytes() == b"two"


def test_local_store_rejects_escaping_ids(tmp_path):
    with pytest.raises(ImageUploadError):
        LocalImageStore(tmp_path / "root").upload(b"x", public_id="../../evil", filename="e.png")


def test_inspect_image(png_bytes):
    info = inspect_image(png_bytes, ["PNG"])
    assert (info.format, info.width, info.height, info.extension) == ("PNG", 8, 12, "png")

    with pytest.raises(FieldValidationError) as exc:
        inspect_image(png_bytes, ["JPEG"])
    assert "imageFile" in exc.value.errors

    with pytest.raises(FieldValidationError):
        inspect_image(b"", ["PNG"])
