"""Application error taxonomy.

Services raise these; the API layer renders them as ``{"code": int, "message": str}``
with the matching HTTP status. Storage-level constraint violations are mapped onto
the same kinds by :func:`translate_integrity_error`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = 500
    code: int = 5000
    default_message: str = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}


class NotFound(AppError):
    status_code = 404
    code = 40003
    default_message = "Not found"


class InvalidInput(AppError):
    status_code = 422
    code = 40007
    default_message = "Invalid input"


class Conflict(AppError):
    status_code = 409
    code = 40008
    default_message = "Conflict"


class ReferenceNotFound(AppError):
    """A foreign key points at a row that does not exist."""

    status_code = 409
    code = 40009
    default_message = "Referenced record does not exist"


class AuthenticateError(AppError):
    status_code = 401
    code = 40004
    default_message = "Authentication failed"


class WrongCredentials(AuthenticateError):
    code = 40004
    default_message = "Wrong authentication credentials"


class InvalidToken(AuthenticateError):
    code = 40005
    default_message = "Invalid authentication credentials"


class SessionExpired(AuthenticateError):
    code = 40010
    default_message = "Session expired"


class Locked(AuthenticateError):
    status_code = 423
    code = 40006
    default_message = "User is locked"


class Forbidden(AuthenticateError):
    status_code = 403
    code = 40011
    default_message = "Not allowed"


# PostgreSQL SQLSTATE codes for integrity violations
_PG_UNIQUE = "23505"
_PG_FOREIGN_KEY = "23503"
_PG_CHECK = "23514"
_PG_NOT_NULL = "23502"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = getattr(exc, "orig", None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def translate_integrity_error(exc: IntegrityError, message: str | None = None) -> AppError:
    """Map a storage-level constraint violation onto an application error kind."""
    state = _sqlstate(exc)
    text = str(getattr(exc, "orig", exc)).lower()

    if state == _PG_UNIQUE or "unique constraint" in text or "duplicate key" in text:
        return Conflict(message or "Record already exists")
    if state == _PG_FOREIGN_KEY or "foreign key constraint" in text:
        return ReferenceNotFound(message)
    if state in (_PG_CHECK, _PG_NOT_NULL) or "check constraint" in text or "not null constraint" in text:
        return InvalidInput(message or "Value violates a constraint")
    return AppError(message)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request %s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{where}: {first.get('msg', 'invalid')}" if where else InvalidInput.default_message
        return JSONResponse(status_code=InvalidInput.status_code, content=InvalidInput(message).to_dict())

    @app.exception_handler(IntegrityError)
    async def _integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        err = translate_integrity_error(exc)
        logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def _db_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"code": 5002, "message": "Database error"})
