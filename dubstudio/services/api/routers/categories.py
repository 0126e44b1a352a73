# dubstudio/services/api/routers/categories.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dubstudio.common.logging import get_logger
from dubstudio.common.naming.slugger import slugify
from dubstudio.common.settings import get_settings
from dubstudio.database.models.taxonomy import Category
from dubstudio.database.repos.category_repo import CategoryRepo
from dubstudio.domain.errors import ConflictError, FieldValidationError, NotFoundError
from dubstudio.services.api.deps import json_body, require_admin, transactional_session
from dubstudio.services.schemas.categories import CategoryRead, CategoryWrite

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(
    prefix=f"{cfg.api.prefix}/admin/categories",
    tags=["categories"],
    dependencies=[Depends(require_admin)],
)

CATEGORY_IN_USE_CONSTRAINT = "fk_project_category_category_id_category"


# ---- helpers ----

def _category_or_404(db: Session, category_id: int) -> Category:
    obj = CategoryRepo(db).get(category_id)
    if not obj:
        raise NotFoundError("Category", category_id)
    return obj


def _name_and_slug(payload: CategoryWrite) -> tuple[str, str]:
    name = payload.name.strip()
    slug = slugify(name)
    if len(name) < 2 or not slug:
        raise FieldValidationError.single("name", "Category name must contain at least 2 letters or digits.")
    return name, slug


def _ensure_unique(repo: CategoryRepo, name: str, slug: str, exclude_id: int | None = None) -> None:
    clash = repo.find_clash(name=name, slug=slug, exclude_id=exclude_id)
    if clash is None:
        return
    constraint = "uq_category_name" if clash.name == name else "uq_category_slug"
    raise ConflictError(
        f"A category with this name or slug already exists ({clash.name}).",
        constraint=constraint,
        field="name",
    )


# ---- CRUD ----

@router.get("", response_model=List[CategoryRead])
def list_categories(db: Session = Depends(transactional_session)) -> List[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in CategoryRepo(db).list()]


@router.post("", response_model=CategoryRead, status_code=HTTPStatus.CREATED)
def create_category(
    payload: CategoryWrite = Depends(json_body(CategoryWrite)),
    db: Session = Depends(transactional_session),
) -> CategoryRead:
    repo = CategoryRepo(db)
    name, slug = _name_and_slug(payload)
    _ensure_unique(repo, name, slug)
    obj = repo.create(name=name)
    db.flush()
    return CategoryRead.model_validate(obj)


@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    payload: CategoryWrite = Depends(json_body(CategoryWrite)),
    db: Session = Depends(transactional_session),
) -> CategoryRead:
    repo = CategoryRepo(db)
    name, slug = _name_and_slug(payload)
    obj = _category_or_404(db, category_id)
    _ensure_unique(repo, name, slug, exclude_id=obj.id)
    repo.rename(obj, name=name)
    db.flush()
    return CategoryRead.model_validate(obj)


@router.delete("/{category_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(transactional_session),
) -> None:
    repo = CategoryRepo(db)
    _category_or_404(db, category_id)

    in_use = repo.count_projects(category_id)
    if in_use:
        raise ConflictError(
            f"Category is still used by {in_use} project(s).",
            constraint=CATEGORY_IN_USE_CONSTRAINT,
        )
    try:
        repo.delete(category_id)
    except IntegrityError as e:
        # a project linked it after the count above
        logger.warning("Category %s delete blocked by foreign key: %s", category_id, e.orig)
        raise ConflictError(
            "Category is still used by one or more projects.",
            constraint=CATEGORY_IN_USE_CONSTRAINT,
        ) from e
    logger.info("Deleted category %s", category_id)
    return None
