# dubstudio/services/images/factory.py
from __future__ import annotations

from typing import Optional

from dubstudio.common.settings import Settings, get_settings
from dubstudio.domain.ports.images import ImageStorePort
from dubstudio.services.images.cloudinary_store import CloudinaryImageStore
from dubstudio.services.images.local_store import LocalImageStore


def build_image_store(cfg: Optional[Settings] = None) -> ImageStorePort:
    cfg = cfg or get_settings()
    img = cfg.images
    if img.backend.lower() == "cloudinary":
        return CloudinaryImageStore(
            cloud_name=img.cloud_name,
            api_key=img.api_key,
            api_secret=img.api_secret,
            upload_url=img.upload_url,
            timeout_sec=img.timeout_sec,
        )
    return LocalImageStore(cfg.upload_root)
