# dubstudio/services/forms/assets.py
from __future__ import annotations

from typing import Optional

import httpx

from dubstudio.common.logging import get_logger
from dubstudio.common.naming.slugger import upload_identifier
from dubstudio.common.settings import get_settings
from dubstudio.domain.enums import UploadContext
from dubstudio.services.forms.state import SelectedImage, response_json

logger = get_logger(__name__)


class AssetUploadError(Exception):
    """Upload failed; `field` is the payload field the image was meant for."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class AssetResolver:
    """
    Exchanges a selected image file for a public id by posting it to the
    upload endpoint. One call per image; nothing is retried.
    """

    def __init__(self, client: httpx.Client, *, endpoint: Optional[str] = None) -> None:
        self.client = client
        self.endpoint = endpoint or f"{get_settings().api.prefix}/admin/projects/cover-image"

    def resolve(
        self,
        image: SelectedImage,
        context: UploadContext,
        seed: Optional[str],
        project_id: Optional[int] = None,
    ) -> str:
        identifier = upload_identifier(seed, context.value, fallback_id=project_id)
        form = {
            "uploadContext": context.value,
            "identifier": identifier,
            "folder": context.default_folder,
        }
        files = {"imageFile": (image.filename, image.content, image.content_type)}
        failed = f"{context.label} image could not be uploaded."

        try:
            resp = self.client.post(self.endpoint, data=form, files=files)
        except httpx.HTTPError as e:
            logger.warning("%s upload failed in transit: %s", context.label, e)
            raise AssetUploadError(context.payload_field, failed) from e

        body = response_json(resp)
        if resp.is_error:
            message = body.get("message")
            if not message and isinstance(body.get("errors"), dict):
                message = next((m[0] for m in body["errors"].values() if m), None)
            raise AssetUploadError(context.payload_field, message or failed)

        public_id = body.get("publicId")
        if not public_id:
            raise AssetUploadError(context.payload_field, failed)
        logger.info("%s image uploaded as %s", context.label, public_id)
        return public_id
