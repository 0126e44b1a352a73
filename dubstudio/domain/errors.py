# dubstudio/domain/errors.py
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, List, Mapping, Optional

FieldErrors = Dict[str, List[str]]


class DubstudioError(Exception):
    """
    Base for errors the API layer knows how to render.
    Domain/repo code raises these; routers never build error responses by hand.
    """
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class FieldValidationError(DubstudioError):
    """Server-side validation failure, rendered as a field-keyed map."""
    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, errors: Mapping[str, List[str]], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.errors: FieldErrors = {k: list(v) for k, v in errors.items() if v}

    @classmethod
    def single(cls, field: str, message: str) -> "FieldValidationError":
        return cls({field: [message]})

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class BadRequestError(DubstudioError):
    status_code = HTTPStatus.BAD_REQUEST


class AuthenticationError(DubstudioError):
    status_code = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationError(DubstudioError):
    status_code = HTTPStatus.FORBIDDEN

    def __init__(self, message: str = "Unauthorized access") -> None:
        super().__init__(message)


class NotFoundError(DubstudioError):
    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, key: Any) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.key = key


class ConflictError(DubstudioError):
    """
    Duplicate unique value, or a referential-integrity block on delete.
    `constraint` names what blocked the operation; `field` lets forms show
    the message inline.
    """
    status_code = HTTPStatus.CONFLICT

    def __init__(self, message: str, *, constraint: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.constraint = constraint
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"message": self.message}
        if self.constraint:
            out["constraint"] = self.constraint
        if self.field:
            out["errors"] = {self.field: [self.message]}
        return out


class ImageUploadError(DubstudioError):
    status_code = HTTPStatus.BAD_GATEWAY
