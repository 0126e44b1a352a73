# dubstudio/services/api/errors.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from dubstudio.common.logging import get_logger
from dubstudio.domain.errors import DubstudioError
from dubstudio.services.schemas.common import field_errors_from

logger = get_logger(__name__)


def _constraint_name(exc: IntegrityError) -> str | None:
    # psycopg exposes the violated constraint; sqlite does not
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


async def _domain_error(request: Request, exc: DubstudioError) -> JSONResponse:
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=int(exc.status_code), content=exc.to_dict())


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"errors": field_errors_from(exc, request_locations=True)})


async def _integrity(request: Request, exc: IntegrityError) -> JSONResponse:
    constraint = _constraint_name(exc)
    logger.warning("Integrity error on %s %s (%s): %s", request.method, request.url.path, constraint, exc.orig)
    content = {"message": "The change conflicts with existing data."}
    if constraint:
        content["constraint"] = constraint
    return JSONResponse(status_code=HTTPStatus.CONFLICT, content=content)


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={"message": "An unexpected error occurred."},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DubstudioError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(IntegrityError, _integrity)
    app.add_exception_handler(Exception, _unexpected)
