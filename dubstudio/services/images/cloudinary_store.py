# dubstudio/services/images/cloudinary_store.py
from __future__ import annotations

import hashlib
import time
from typing import Dict, Optional

import httpx

from dubstudio.common.logging import get_logger
from dubstudio.domain.errors import ImageUploadError
from dubstudio.domain.ports.images import ImageStorePort

logger = get_logger(__name__)


def sign_params(params: Dict[str, str], api_secret: str) -> str:
    """
    Cloudinary request signature: parameters sorted by name, joined as
    k=v with '&', secret appended, SHA-1 hex digest.
    """
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


class CloudinaryImageStore(ImageStorePort):
    """
    Signed upload to Cloudinary's REST API over httpx. The public id we send
    already contains the folder, and re-uploading the same id overwrites.
    """

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        upload_url: str = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload",
        timeout_sec: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not (cloud_name and api_key and api_secret):
            raise ImageUploadError("Image host credentials are not configured.")
        self.api_key = api_key
        self.api_secret = api_secret
        self.url = upload_url.format(cloud_name=cloud_name)
        self._client = client or httpx.Client(timeout=timeout_sec)

    def upload(self, data: bytes, *, public_id: str, filename: str, content_type: str | None = None) -> str:
        params = {
            "public_id": public_id,
            "overwrite": "true",
            "timestamp": str(int(time.time())),
        }
        form = {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}
        files = {"file": (filename, data, content_type or "application/octet-stream")}

        try:
            resp = self._client.post(self.url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.warning("Image upload transport error for %s: %s", public_id, e)
            raise ImageUploadError("Image host is unreachable.") from e

        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error", {}).get("message", "")
            except ValueError:
                detail = ""
            logger.warning("Image host rejected %s: %s %s", public_id, resp.status_code, detail)
            raise ImageUploadError(f"Image host rejected the upload{': ' + detail if detail else '.'}")

        body = resp.json()
        stored = body.get("public_id") or public_id
        logger.info("Uploaded image %s (%s bytes)", stored, body.get("bytes", len(data)))
        return stored
