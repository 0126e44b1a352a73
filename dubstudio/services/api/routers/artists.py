# dubstudio/services/api/routers/artists.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dubstudio.common.settings import get_settings
from dubstudio.database.models.artist import DubbingArtist
from dubstudio.database.repos.artist_repo import ArtistRepo
from dubstudio.domain.errors import ConflictError, NotFoundError
from dubstudio.services.api.deps import json_body, require_admin, transactional_session
from dubstudio.services.mappers.project import artist_to_read
from dubstudio.services.schemas.artists import ArtistCreate, ArtistRead, ArtistUpdate

cfg = get_settings()
router = APIRouter(
    prefix=f"{cfg.api.prefix}/admin/artists",
    tags=["artists"],
    dependencies=[Depends(require_admin)],
)


def _artist_or_404(db: Session, artist_id: int) -> DubbingArtist:
    obj = ArtistRepo(db).get(artist_id)
    if not obj:
        raise NotFoundError("Artist", artist_id)
    return obj


@router.get("", response_model=List[ArtistRead])
def search_artists(
    q: str = Query("", description="Case-insensitive first/last name substring"),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(transactional_session),
) -> List[ArtistRead]:
    return [artist_to_read(a) for a in ArtistRepo(db).search(q, limit=limit)]


@router.post("", response_model=ArtistRead, status_code=HTTPStatus.CREATED)
def create_artist(
    payload: ArtistCreate = Depends(json_body(ArtistCreate)),
    db: Session = Depends(transactional_session),
) -> ArtistRead:
    obj = ArtistRepo(db).create(
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        bio=payload.bio,
        image_public_id=payload.image_public_id,
    )
    db.flush()
    return artist_to_read(obj)


@router.get("/{artist_id}", response_model=ArtistRead)
def get_artist(artist_id: int, db: Session = Depends(transactional_session)) -> ArtistRead:
    return artist_to_read(_artist_or_404(db, artist_id))


@router.put("/{artist_id}", response_model=ArtistRead)
def update_artist(
    artist_id: int,
    payload: ArtistUpdate = Depends(json_body(ArtistUpdate)),
    db: Session = Depends(transactional_session),
) -> ArtistRead:
    obj = _artist_or_404(db, artist_id)

    if payload.first_name is not None:
        obj.first_name = payload.first_name.strip()
    if payload.last_name is not None:
        obj.last_name = payload.last_name.strip()
    if payload.bio is not None:
        obj.bio = payload.bio
    if payload.image_public_id is not None:
        obj.image_public_id = payload.image_public_id or None

    db.flush()
    return artist_to_read(obj)


@router.delete("/{artist_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_artist(artist_id: int, db: Session = Depends(transactional_session)) -> None:
    repo = ArtistRepo(db)
    _artist_or_404(db, artist_id)
    in_use = repo.count_assignments(artist_id)
    if in_use:
        raise ConflictError(
            f"Artist is still assigned to {in_use} project role(s).",
            constraint="fk_project_assignment_artist_id_dubbing_artist",
        )
    repo.delete(artist_id)
    return None
