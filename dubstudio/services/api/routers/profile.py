# dubstudio/services/api/routers/profile.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.database.models.user import User
from dubstudio.database.repos.user_repo import UserRepo
from dubstudio.domain.errors import BadRequestError, ConflictError
from dubstudio.services.api.deps import current_user, json_body, transactional_session
from dubstudio.services.schemas.users import ProfileUpdated, UsernameUpdate, UserRead

cfg = get_settings()
logger = get_logger(__name__)
router = APIRouter(prefix=f"{cfg.api.prefix}/profile", tags=["profile"])


@router.get("", response_model=UserRead)
def get_profile(user: User = Depends(current_user)) -> UserRead:
    return UserRead.model_validate(user)


@router.patch("", response_model=ProfileUpdated)
def update_username(
    user: User = Depends(current_user),
    payload: UsernameUpdate = Depends(json_body(UsernameUpdate)),
    db: Session = Depends(transactional_session),
) -> ProfileUpdated:
    username = payload.username.strip()
    if username == user.username:
        raise BadRequestError("The new username is the same as the current one.")
    if UserRepo(db).username_taken(username, exclude_id=user.id):
        raise ConflictError("This username is already taken.", constraint="uq_users_username", field="username")

    old = user.username
    user.username = username
    db.flush()
    logger.info("User %s renamed %r -> %r", user.id, old, username)
    return ProfileUpdated(message="Username updated successfully.", user=UserRead.model_validate(user))
