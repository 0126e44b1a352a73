# dubstudio/services/images/urls.py
from __future__ import annotations

from typing import Optional

from dubstudio.common.settings import Settings, get_settings
from dubstudio.domain.enums import PlaceholderKind
from dubstudio.domain.policies.image_urls import ImageTransforms, image_url


def delivery_url(
    public_id: Optional[str],
    transforms: Optional[ImageTransforms] = None,
    placeholder: Optional[PlaceholderKind] = None,
    *,
    cfg: Optional[Settings] = None,
) -> str:
    """image_url() bound to the configured image host and placeholders."""
    cfg = cfg or get_settings()
    img = cfg.images
    return image_url(
        public_id,
        transforms,
        placeholder,
        cloud_name=img.cloud_name,
        host=img.delivery_host,
        placeholders={
            PlaceholderKind.banner: img.placeholder_banner,
            PlaceholderKind.cover: img.placeholder_cover,
            PlaceholderKind.avatar: img.placeholder_avatar,
        },
    )
