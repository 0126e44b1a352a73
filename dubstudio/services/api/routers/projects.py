# dubstudio/services/api/routers/projects.py
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.database.models.project import Project
from dubstudio.database.repos.artist_repo import ArtistRepo
from dubstudio.database.repos.category_repo import CategoryRepo
from dubstudio.database.repos.character_repo import CharacterRepo
from dubstudio.database.repos.project_repo import ProjectRepo
from dubstudio.domain.errors import ConflictError, FieldErrors, FieldValidationError, NotFoundError
from dubstudio.domain.policies.project_rules import (
    normalize_category_ids, pricing_for, validate_assignments, validate_project_fields,
)
from dubstudio.services.api.deps import json_body, require_admin, transactional_session
from dubstudio.services.mappers.project import project_to_read, project_to_summary
from dubstudio.services.schemas.projects import ProjectPayload, ProjectRead, ProjectSummary

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(
    prefix=f"{cfg.api.prefix}/admin/projects",
    tags=["projects"],
    dependencies=[Depends(require_admin)],
)


# ---- helpers ----

def _clean(s: Optional[str]) -> Optional[str]:
    s = (s or "").strip()
    return s or None


def _project_or_404(db: Session, slug: str) -> Project:
    obj = ProjectRepo(db).get_by_slug(slug)
    if not obj:
        raise NotFoundError("Project", slug)
    return obj


def _validate(payload: ProjectPayload) -> None:
    errors = validate_project_fields(
        title=payload.title,
        slug=payload.slug,
        release_date=payload.release_date,
        project_type=payload.type,
        price=payload.price,
        currency=payload.currency,
        trailer_url=payload.trailer_url,
        external_watch_url=payload.external_watch_url,
    )
    problems = validate_assignments(payload.assignment_specs())
    if problems:
        errors.setdefault("assignments", []).extend(problems)
    if errors:
        raise FieldValidationError(errors)


def _check_references(db: Session, payload: ProjectPayload, project_id: Optional[int]) -> None:
    errors: FieldErrors = {}

    missing_artists = ArtistRepo(db).missing_ids(a.artist_id for a in payload.assignments)
    if missing_artists:
        errors.setdefault("assignments", []).append(
            f"Unknown artist id(s): {', '.join(map(str, missing_artists))}."
        )

    own_characters = CharacterRepo(db).ids_for_project(project_id) if project_id is not None else set()
    for n, a in enumerate(payload.assignments, start=1):
        foreign = [cid for cid in a.character_ids if cid not in own_characters]
        if foreign:
            errors.setdefault("assignments", []).append(
                f"Assignment {n}: character id(s) {', '.join(map(str, foreign))} do not belong to this project."
            )

    missing_cats = CategoryRepo(db).missing_ids(normalize_category_ids(payload.category_ids))
    if missing_cats:
        errors.setdefault("categoryIds", []).append(
            f"Unknown category id(s): {', '.join(map(str, missing_cats))}."
        )

    if errors:
        raise FieldValidationError(errors)


def _scalar_values(payload: ProjectPayload) -> Dict[str, Any]:
    price, currency = pricing_for(payload.type, payload.price, payload.currency)
    return {
        "title": payload.title.strip(),
        "slug": payload.slug.strip(),
        "type": payload.type,
        "description": _clean(payload.description),
        "cover_image_public_id": _clean(payload.cover_image_public_id),
        "banner_image_public_id": _clean(payload.banner_image_public_id),
        "release_date": payload.release_date,
        "is_published": payload.is_published,
        "price": price,
        "currency": currency,
        "external_watch_url": _clean(payload.external_watch_url),
        "trailer_url": _clean(payload.trailer_url),
    }


def _save(db: Session, payload: ProjectPayload, project: Optional[Project] = None) -> Project:
    """
    Persist the whole aggregate of an already validated payload. Runs inside
    the request transaction; any failure leaves every row as it was.
    """
    repo = ProjectRepo(db)
    slug = payload.slug.strip()
    exclude = project.id if project is not None else None
    if repo.slug_taken(slug, exclude_id=exclude):
        raise ConflictError("This slug is already in use.", constraint="uq_project_slug", field="slug")

    _check_references(db, payload, exclude)

    values = _scalar_values(payload)
    if project is None:
        project = repo.create(values)
    else:
        repo.apply_scalars(project, values)
    repo.replace_categories(project, normalize_category_ids(payload.category_ids))
    repo.replace_assignments(project, payload.assignment_specs())
    db.flush()
    logger.info(
        "Saved project %s (%s): %d assignment(s), %d category link(s)",
        project.id, project.slug, len(project.assignments), len(project.categories),
    )
    return project


# ---- endpoints ----

@router.get("", response_model=List[ProjectSummary])
def list_projects(
    q: str = Query("", description="Case-insensitive title substring"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(transactional_session),
) -> List[ProjectSummary]:
    rows = ProjectRepo(db).list(q=q, limit=limit, offset=offset)
    return [project_to_summary(p) for p in rows]


@router.post("", response_model=ProjectRead, status_code=HTTPStatus.CREATED)
def create_project(
    payload: ProjectPayload = Depends(json_body(ProjectPayload)),
    db: Session = Depends(transactional_session),
) -> ProjectRead:
    _validate(payload)
    project = _save(db, payload)
    return project_to_read(project)


@router.get("/{slug}", response_model=ProjectRead)
def get_project(
    slug: str,
    db: Session = Depends(transactional_session),
) -> ProjectRead:
    return project_to_read(_project_or_404(db, slug))


@router.put("/{slug}", response_model=ProjectRead)
def update_project(
    slug: str,
    payload: ProjectPayload = Depends(json_body(ProjectPayload)),
    db: Session = Depends(transactional_session),
) -> ProjectRead:
    # payload is judged before the slug is looked up
    _validate(payload)
    project = _project_or_404(db, slug)
    project = _save(db, payload, project)
    return project_to_read(project)
