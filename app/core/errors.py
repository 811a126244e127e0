"""
Application exceptions and their HTTP mapping.

Services raise these instead of ``HTTPException`` so the trip rules stay
usable outside a request. ``register_exception_handlers`` turns them into
JSON responses of the form ``{"message": ...}``.

Usage:
    from app.core.errors import NotFoundError

    raise NotFoundError("Trip not found.")
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logger import logger


class PlannerError(Exception):
    """Base exception for all planner errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ClientError(PlannerError):
    """The request can be fixed by the caller (bad dates, unknown trip...)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ClientError):
    """The referenced trip does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(PlannerError):
    """The database rejected or failed a write."""

    pass


class NotificationError(PlannerError):
    """The mail transport could not deliver a message."""

    pass


async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid input", "errors": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlannerError, planner_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
