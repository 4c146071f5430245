"""
mandihub.errors

Catalog error taxonomy and its HTTP mapping.

Responsibilities:
- Define the errors raised by services and the synchronizer.
- Translate them into status-coded JSON responses in one place.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from mandihub.observability.logging import get_logger

log = get_logger(__name__)


class CatalogError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailed(CatalogError):
    # Missing or blank required field.
    status_code = HTTP_400_BAD_REQUEST


class NotFound(CatalogError):
    status_code = HTTP_404_NOT_FOUND


class ReferentialError(CatalogError):
    # A write references a seller or category that does not exist.
    status_code = HTTP_400_BAD_REQUEST


class WriteConflict(CatalogError):
    # An update that must match exactly one record matched some other count.
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def _catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        level = "error" if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR else "info"
        getattr(log, level)(
            "catalog_error",
            error_type=type(exc).__name__,
            message=exc.message,
            status_code=exc.status_code,
            **exc.details,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "message": exc.message,
                    "type": type(exc).__name__,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed or missing fields are validation errors like any other: 400, same body.
        errors = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": str(error.get("msg", "")),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        log.info("request_validation_failed", errors=errors)
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "message": "Request validation failed",
                    "type": ValidationFailed.__name__,
                    "details": {"errors": errors},
                }
            },
        )


# --- Module Notes -----------------------------------------------------------
# Store-unreachable failures are not part of this hierarchy; they surface as
# plain 500s from the framework.
