from __future__ import annotations

from typing import Optional

from pydantic import Field

from dubstudio.services.schemas.common import CamelModel


class CharacterCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_public_id: Optional[str] = Field(default=None, max_length=255)


class CharacterRead(CharacterCreate):
    id: int
    project_id: int
