"""Translate service exceptions into JSON error responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from radio_ratings.core.exceptions import MetadataError, StoreError, ValidationError
from radio_ratings.services.rating_store import TRACK_ID_REQUIRED

INVALID_REQUEST_BODY = "Invalid request body"
DATABASE_ERROR = "Database error"


def _first_error_message(exc: RequestValidationError) -> str:
    """Return the message of the first domain error raised by a validator.

    A missing body, or one that is not a JSON object, carries no track id.
    Malformed JSON keeps the generic message.
    """
    errors = exc.errors()
    for error in errors:
        ctx_error = (error.get("ctx") or {}).get("error")
        if isinstance(ctx_error, ValidationError):
            return str(ctx_error)
    if any(tuple(error.get("loc", ())) == ("body",) for error in errors):
        return TRACK_ID_REQUIRED
    return INVALID_REQUEST_BODY


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers mapping the error taxonomy onto HTTP statuses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _first_error_message(exc))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
        # Details were logged where the failure happened.
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, DATABASE_ERROR)

    @app.exception_handler(MetadataError)
    async def handle_metadata_error(request: Request, exc: MetadataError) -> JSONResponse:
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))
