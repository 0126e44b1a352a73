from __future__ import annotations

from typing import Optional

from pydantic import Field

from dubstudio.domain.enums import UserRole
from dubstudio.services.schemas.common import CamelModel

USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"


class UsernameUpdate(CamelModel):
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)


class UserBrief(CamelModel):
    id: int
    username: str


class UserRead(UserBrief):
    email: Optional[str] = None
    role: UserRole
    avatar_public_id: Optional[str] = None


class ProfileUpdated(CamelModel):
    message: str
    user: UserRead
