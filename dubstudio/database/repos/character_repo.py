from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from dubstudio.database.models.project import Character


class CharacterRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, character_id: int) -> Optional[Character]:
        return self.db.get(Character, character_id)

    def list_for_project(self, project_id: int) -> List[Character]:
        stmt = select(Character).where(Character.project_id == project_id).order_by(Character.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def ids_for_project(self, project_id: int) -> set[int]:
        stmt = select(Character.id).where(Character.project_id == project_id)
        return set(self.db.execute(stmt).scalars().all())

    def name_taken(self, project_id: int, name: str) -> bool:
        stmt = select(Character.id).where(Character.project_id == project_id, Character.name == name).limit(1)
        return self.db.execute(stmt).first() is not None

    def create(self, *, project_id: int, name: str, description: str | None = None,
               image_public_id: str | None = None) -> Character:
        obj = Character(project_id=project_id, name=name, description=description, image_public_id=image_public_id)
        self.db.add(obj)
        return obj

    def delete(self, character: Character) -> None:
        self.db.delete(character)
