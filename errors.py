"""
Application errors and their HTTP rendering.

Every error carries the status code and the client-facing ``message``.
Validation messages are shown to the client as they are. The other kinds
send a generic message.
"""

import enum
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ValidationKind(str, enum.Enum):
    CONFLICTING_ALLOCATION_MODE = "ConflictingAllocationMode"
    MISSING_ALLOCATION_MODE = "MissingAllocationMode"
    OUT_OF_RANGE = "OutOfRange"
    UNKNOWN_REFERENCE = "UnknownReference"
    DUPLICATE = "Duplicate"


class BudgetAppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(BudgetAppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, kind: ValidationKind, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.field = field

    def to_dict(self) -> dict:
        body = {"message": self.message, "kind": self.kind.value}
        if self.field:
            body["errors"] = {self.field: [self.message]}
        return body


class AuthorizationError(BudgetAppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "This action is unauthorized."


class NotFoundError(BudgetAppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found."


class PersistenceError(BudgetAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server Error"


# ----------------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------------
async def budget_app_error_handler(request: Request, exc: BudgetAppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Storage failures outside commit(): reads, flushes
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    error = PersistenceError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value."))
    first = next(iter(errors.values()), ["The given data was invalid."])[0]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": first, "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BudgetAppError, budget_app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
