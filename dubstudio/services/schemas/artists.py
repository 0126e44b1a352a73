from __future__ import annotations

from typing import Optional

from pydantic import Field

from dubstudio.services.schemas.common import CamelModel


class ArtistBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = None
    image_public_id: Optional[str] = Field(default=None, max_length=255)


class ArtistCreate(ArtistBase):
    pass


class ArtistUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bio: Optional[str] = None
    image_public_id: Optional[str] = Field(default=None, max_length=255)


class ArtistRead(ArtistBase):
    id: int
    full_name: str
    image_url: Optional[str] = None
