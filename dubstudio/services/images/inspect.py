# dubstudio/services/images/inspect.py
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Iterable

from PIL import Image, UnidentifiedImageError

from dubstudio.domain.errors import FieldValidationError

_EXT_BY_FORMAT = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp", "GIF": "gif"}


@dataclass(frozen=True)
class ImageInfo:
    format: str
    width: int
    height: int

    @property
    def extension(self) -> str:
        return _EXT_BY_FORMAT.get(self.format, self.format.lower())


def inspect_image(data: bytes, allowed_formats: Iterable[str], *, field: str = "imageFile") -> ImageInfo:
    """
    Confirm `data` is a decodable image in one of `allowed_formats`.
    Raises FieldValidationError keyed on `field` otherwise.
    """
    if not data:
        raise FieldValidationError.single(field, "The uploaded file is empty.")
    try:
        with Image.open(BytesIO(data)) as im:
            fmt = (im.format or "").upper()
            width, height = im.size
            im.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise FieldValidationError.single(field, "The uploaded file is not a valid image.") from e

    allowed = {f.upper() for f in allowed_formats}
    if fmt not in allowed:
        raise FieldValidationError.single(
            field, f"Unsupported image format {fmt or '?'}; allowed: {', '.join(sorted(allowed))}."
        )
    return ImageInfo(format=fmt, width=width, height=height)
