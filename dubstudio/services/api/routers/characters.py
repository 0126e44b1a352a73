# dubstudio/services/api/routers/characters.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dubstudio.common.settings import get_settings
from dubstudio.database.models.project import Project
from dubstudio.database.repos.character_repo import CharacterRepo
from dubstudio.database.repos.project_repo import ProjectRepo
from dubstudio.domain.errors import ConflictError, NotFoundError
from dubstudio.services.api.deps import json_body, require_admin, transactional_session
from dubstudio.services.schemas.characters import CharacterCreate, CharacterRead

cfg = get_settings()
router = APIRouter(
    prefix=f"{cfg.api.prefix}/admin",
    tags=["characters"],
    dependencies=[Depends(require_admin)],
)


def _project_or_404(db: Session, slug: str) -> Project:
    obj = ProjectRepo(db).get_by_slug(slug)
    if not obj:
        raise NotFoundError("Project", slug)
    return obj


@router.get("/projects/{slug}/characters", response_model=List[CharacterRead])
def list_characters(slug: str, db: Session = Depends(transactional_session)) -> List[CharacterRead]:
    project = _project_or_404(db, slug)
    return [CharacterRead.model_validate(c) for c in CharacterRepo(db).list_for_project(project.id)]


@router.post("/projects/{slug}/characters", response_model=CharacterRead, status_code=HTTPStatus.CREATED)
def create_character(
    slug: str,
    payload: CharacterCreate = Depends(json_body(CharacterCreate)),
    db: Session = Depends(transactional_session),
) -> CharacterRead:
    project = _project_or_404(db, slug)
    repo = CharacterRepo(db)
    name = payload.name.strip()
    if repo.name_taken(project.id, name):
        raise ConflictError(
            "This project already has a character with that name.",
            constraint="uq_character_project_name",
            field="name",
        )
    obj = repo.create(
        project_id=project.id,
        name=name,
        description=payload.description,
        image_public_id=payload.image_public_id,
    )
    db.flush()
    return CharacterRead.model_validate(obj)


@router.delete("/characters/{character_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_character(character_id: int, db: Session = Depends(transactional_session)) -> None:
    repo = CharacterRepo(db)
    obj = repo.get(character_id)
    if not obj:
        raise NotFoundError("Character", character_id)
    # voice-actor links go with it (ON DELETE CASCADE)
    repo.delete(obj)
    return None
