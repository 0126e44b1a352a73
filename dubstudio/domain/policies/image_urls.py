# dubstudio/domain/policies/image_urls.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from dubstudio.common.logging import get_logger
from dubstudio.domain.enums.placeholder_kind import PlaceholderKind

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageTransforms:
    width: Optional[int] = None
    height: Optional[int] = None
    crop: Optional[str] = None      # fill|fit|thumb|scale
    gravity: Optional[str] = None
    quality: str | int = "auto"
    format: str = "auto"            # auto|webp|png|jpg
    radius: Optional[str | int] = None

    def as_segment(self) -> str:
        parts: List[str] = []
        if self.width:
            parts.append(f"w_{self.width}")
        if self.height:
            parts.append(f"h_{self.height}")
        if self.crop:
            parts.append(f"c_{self.crop}")
        if self.gravity:
            parts.append(f"g_{self.gravity}")
        # quality and format are always present
        parts.append(f"q_{self.quality or 'auto'}")
        parts.append(f"f_{self.format or 'auto'}")
        if self.radius:
            parts.append(f"r_{self.radius}")
        return ",".join(parts)


def _placeholder(kind: Optional[PlaceholderKind], placeholders: Mapping[PlaceholderKind, str]) -> str:
    if kind is not None and kind in placeholders:
        return placeholders[kind]
    return placeholders[PlaceholderKind.banner]


def image_url(
    public_id: Optional[str],
    transforms: Optional[ImageTransforms] = None,
    placeholder: Optional[PlaceholderKind] = None,
    *,
    cloud_name: str,
    host: str,
    placeholders: Mapping[PlaceholderKind, str],
) -> str:
    """
    Delivery URL for an image reference:

        <host>/<cloud>/image/upload/<transforms>/<public_id>

    Empty references resolve to the placeholder for `placeholder` (banner by
    default). Absolute URLs and site-relative paths are returned untouched.
    """
    if not public_id:
        return _placeholder(placeholder, placeholders)

    if public_id.startswith(("http://", "https://", "/")):
        return public_id

    if not cloud_name:
        logger.warning("Image cloud name is not configured; falling back to placeholder")
        return _placeholder(placeholder, placeholders)

    segment = (transforms or ImageTransforms()).as_segment()
    base = f"{host.rstrip('/')}/{cloud_name}/image/upload"
    return f"{base}/{segment}/{public_id}" if segment else f"{base}/{public_id}"
