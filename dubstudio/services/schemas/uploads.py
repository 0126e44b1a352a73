from __future__ import annotations

from dubstudio.services.schemas.common import CamelModel


class UploadResult(CamelModel):
    public_id: str
