# dubstudio/services/api/deps.py
from __future__ import annotations

from typing import Callable, Generator, Type, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from dubstudio.common.settings import get_settings
from dubstudio.database.core.main import Database
from dubstudio.database.models.user import User
from dubstudio.database.repos.user_repo import UserRepo
from dubstudio.domain.errors import (
    AuthenticationError, AuthorizationError, BadRequestError, FieldValidationError,
)
from dubstudio.domain.ports.images import ImageStorePort
from dubstudio.services.auth.tokens import Principal, decode_token
from dubstudio.services.schemas.common import field_errors_from

M = TypeVar("M", bound=BaseModel)

_bearer = HTTPBearer(auto_error=False)


# ---- infrastructure ----

def get_database(request: Request) -> Database:
    return request.app.state.db


def get_image_store(request: Request) -> ImageStorePort:
    return request.app.state.image_store


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Everything a request writes commits together
    on normal exit and rolls back if an exception bubbles out.
    """
    with db.begin():
        yield db


# ---- identity ----

def current_principal(creds: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> Principal:
    if creds is None:
        raise AuthenticationError()
    return decode_token(creds.credentials)


def require_admin(creds: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> Principal:
    """
    Administrator gate. Attached at router level so it runs before body
    parsing; any failure (no token, bad token, wrong role) is a 403.
    """
    if creds is None:
        raise AuthorizationError()
    try:
        principal = decode_token(creds.credentials)
    except AuthenticationError as e:
        raise AuthorizationError() from e
    if not principal.has_role(get_settings().auth.admin_role):
        raise AuthorizationError()
    return principal


def current_user(
    principal: Principal = Depends(current_principal),
    db: Session = Depends(transactional_session),
) -> User:
    user = UserRepo(db).get(principal.user_id)
    if user is None:
        raise AuthenticationError("Unknown user")
    return user


# ---- bodies ----

def json_body(model: Type[M]) -> Callable[..., M]:
    """
    Dependency parsing the JSON body into `model`. Being a dependency, it only
    runs after the router's auth dependencies; failures are rendered as the
    field-keyed error map.
    """

    async def _parse(request: Request) -> M:
        try:
            raw = await request.json()
        except ValueError as e:
            raise BadRequestError("Request body must be valid JSON") from e
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise FieldValidationError(field_errors_from(e)) from e

    return _parse
