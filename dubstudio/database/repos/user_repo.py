from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from dubstudio.database.models.user import User
from dubstudio.domain.enums import UserRole


class UserRepo:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        # usernames are unique case-insensitively for lookups
        stmt = select(User).where(func.lower(User.username) == username.strip().lower()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def username_taken(self, username: str, *, exclude_id: Optional[int] = None) -> bool:
        stmt = select(User.id).where(func.lower(User.username) == username.strip().lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def create(self, *, username: str, email: str | None = None, role: UserRole = UserRole.user) -> User:
        obj = User(username=username, email=email, role=role)
        self.db.add(obj)
        return obj
