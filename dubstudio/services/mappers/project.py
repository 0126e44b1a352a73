# dubstudio/services/mappers/project.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from dubstudio.common.settings import Settings
from dubstudio.database.models.artist import DubbingArtist, ProjectAssignment
from dubstudio.database.models.project import Project
from dubstudio.domain.enums import PlaceholderKind
from dubstudio.domain.policies.image_urls import ImageTransforms
from dubstudio.services.images.urls import delivery_url
from dubstudio.services.schemas.artists import ArtistRead
from dubstudio.services.schemas.categories import CategoryRead
from dubstudio.services.schemas.projects import AssignmentRead, ProjectRead, ProjectSummary

COVER_THUMB = ImageTransforms(width=400, height=600, crop="fill")
BANNER_WIDE = ImageTransforms(width=1600, height=500, crop="fill")
AVATAR_THUMB = ImageTransforms(width=200, height=200, crop="thumb", gravity="face")


def _as_date(v: Optional[datetime | date]) -> Optional[date]:
    if isinstance(v, datetime):
        return v.date()
    return v


def assignment_to_read(a: ProjectAssignment) -> AssignmentRead:
    return AssignmentRead(
        id=a.id,
        artist_id=a.artist_id,
        artist_name=a.artist.full_name if a.artist else None,
        role=a.role,
        character_ids=[c.id for c in a.characters],
    )


def project_to_read(p: Project, *, cfg: Optional[Settings] = None) -> ProjectRead:
    cats = sorted(p.categories, key=lambda c: c.name)
    return ProjectRead(
        id=p.id,
        title=p.title,
        slug=p.slug,
        type=p.type,
        description=p.description,
        cover_image_public_id=p.cover_image_public_id,
        banner_image_public_id=p.banner_image_public_id,
        cover_image_url=delivery_url(p.cover_image_public_id, COVER_THUMB, PlaceholderKind.cover, cfg=cfg),
        banner_image_url=delivery_url(p.banner_image_public_id, BANNER_WIDE, PlaceholderKind.banner, cfg=cfg),
        release_date=_as_date(p.release_date),
        is_published=p.is_published,
        price=p.price,
        currency=p.currency,
        assignments=[assignment_to_read(a) for a in p.assignments],
        category_ids=sorted(c.id for c in cats),
        categories=[CategoryRead.model_validate(c) for c in cats],
        external_watch_url=p.external_watch_url,
        trailer_url=p.trailer_url,
    )


def project_to_summary(p: Project, *, cfg: Optional[Settings] = None) -> ProjectSummary:
    return ProjectSummary(
        id=p.id,
        title=p.title,
        slug=p.slug,
        type=p.type,
        is_published=p.is_published,
        release_date=_as_date(p.release_date),
        cover_image_url=delivery_url(p.cover_image_public_id, COVER_THUMB, PlaceholderKind.cover, cfg=cfg),
    )


def artist_to_read(a: DubbingArtist, *, cfg: Optional[Settings] = None) -> ArtistRead:
    return ArtistRead(
        id=a.id,
        first_name=a.first_name,
        last_name=a.last_name,
        full_name=a.full_name,
        bio=a.bio,
        image_public_id=a.image_public_id,
        image_url=delivery_url(a.image_public_id, AVATAR_THUMB, PlaceholderKind.avatar, cfg=cfg),
    )
