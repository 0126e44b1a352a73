from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from dubstudio.domain.entities.assignment import AssignmentSpec
from dubstudio.domain.enums import ProjectType, RoleInProject
from dubstudio.services.schemas.common import CamelModel
from dubstudio.services.schemas.categories import CategoryRead


# ---------- Write side (ApiPayload) ----------

class AssignmentIn(CamelModel):
    artist_id: int = Field(..., gt=0)
    role: RoleInProject
    character_ids: List[int] = Field(default_factory=list)

    def to_spec(self) -> AssignmentSpec:
        return AssignmentSpec(
            artist_id=self.artist_id,
            role=self.role,
            character_ids=tuple(self.character_ids),
        )


class ProjectPayload(CamelModel):
    """
    Complete representation of a project as submitted by the editing form.
    `assignments` and `categoryIds` replace the stored collections wholesale.
    Required-ness and business rules are checked by project_rules so the
    messages match what the form shows locally.
    """
    title: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    type: ProjectType
    description: Optional[str] = None
    cover_image_public_id: Optional[str] = Field(default=None, max_length=255)
    banner_image_public_id: Optional[str] = Field(default=None, max_length=255)
    release_date: Optional[datetime] = None
    is_published: bool = True
    price: Optional[float] = Field(default=None, allow_inf_nan=False)
    currency: Optional[str] = None
    assignments: List[AssignmentIn] = Field(default_factory=list)
    category_ids: List[int] = Field(default_factory=list)
    external_watch_url: Optional[str] = None
    trailer_url: Optional[str] = None

    def assignment_specs(self) -> List[AssignmentSpec]:
        return [a.to_spec() for a in self.assignments]


# ---------- Read side ----------

class AssignmentRead(CamelModel):
    id: int
    artist_id: int
    artist_name: Optional[str] = None
    role: RoleInProject
    character_ids: List[int] = Field(default_factory=list)


class ProjectRead(CamelModel):
    """Shape consumed by the editing form as its initial data."""
    id: int
    title: str
    slug: str
    type: ProjectType
    description: Optional[str] = None
    cover_image_public_id: Optional[str] = None
    banner_image_public_id: Optional[str] = None
    cover_image_url: Optional[str] = None
    banner_image_url: Optional[str] = None
    release_date: Optional[date] = None
    is_published: bool
    price: Optional[float] = None
    currency: Optional[str] = None
    assignments: List[AssignmentRead] = Field(default_factory=list)
    category_ids: List[int] = Field(default_factory=list)
    categories: List[CategoryRead] = Field(default_factory=list)
    external_watch_url: Optional[str] = None
    trailer_url: Optional[str] = None


class ProjectSummary(CamelModel):
    id: int
    title: str
    slug: str
    type: ProjectType
    is_published: bool
    release_date: Optional[date] = None
    cover_image_url: Optional[str] = None
