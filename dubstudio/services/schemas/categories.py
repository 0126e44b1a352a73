from __future__ import annotations

from pydantic import Field

from dubstudio.services.schemas.common import CamelModel


class CategoryWrite(CamelModel):
    name: str = Field(..., min_length=2, max_length=50)


class CategoryRead(CamelModel):
    id: int
    name: str
    slug: str
