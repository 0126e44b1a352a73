from __future__ import annotations
from typing import Protocol


class ImageStorePort(Protocol):
    def upload(self, data: bytes, *, public_id: str, filename: str, content_type: str | None = None) -> str:
        """Store the image and return the durable public id the host assigned."""
        ...
