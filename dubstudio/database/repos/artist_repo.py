from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, func, delete, or_
from sqlalchemy.orm import Session

from dubstudio.database.models.artist import DubbingArtist, ProjectAssignment


class ArtistRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, artist_id: int) -> Optional[DubbingArtist]:
        return self.db.get(DubbingArtist, artist_id)

    def search(self, q: str = "", limit: int = 100) -> List[DubbingArtist]:
        q = (q or "").strip().lower()
        stmt = select(DubbingArtist)
        if q:
            like = f"%{q}%"
            stmt = stmt.where(
                or_(func.lower(DubbingArtist.first_name).like(like), func.lower(DubbingArtist.last_name).like(like))
            )
        stmt = stmt.order_by(DubbingArtist.first_name.asc(), DubbingArtist.last_name.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def names_by_id(self, ids: Iterable[int]) -> Dict[int, str]:
        ids = list(set(ids))
        if not ids:
            return {}
        rows = self.db.execute(select(DubbingArtist).where(DubbingArtist.id.in_(ids))).scalars().all()
        return {a.id: a.full_name for a in rows}

    def missing_ids(self, ids: Iterable[int]) -> List[int]:
        wanted = sorted(set(ids))
        if not wanted:
            return []
        found = set(self.db.execute(select(DubbingArtist.id).where(DubbingArtist.id.in_(wanted))).scalars().all())
        return [i for i in wanted if i not in found]

    def create(self, *, first_name: str, last_name: str, bio: str | None = None,
               image_public_id: str | None = None) -> DubbingArtist:
        obj = DubbingArtist(first_name=first_name, last_name=last_name, bio=bio, image_public_id=image_public_id)
        self.db.add(obj)
        return obj

    def count_assignments(self, artist_id: int) -> int:
        stmt = select(func.count()).select_from(ProjectAssignment).where(ProjectAssignment.artist_id == artist_id)
        return int(self.db.execute(stmt).scalar_one())

    def delete(self, artist_id: int) -> None:
        self.db.execute(delete(DubbingArtist).where(DubbingArtist.id == artist_id))
