"""Maps domain exceptions to HTTP responses with a ``message`` body."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wms.domain.exceptions import (
    AlreadyCompletedError,
    DomainException,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (AlreadyCompletedError, 409),
    (StorageError, 503),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return 400


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        code = status_code_for(exc)
        if code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected (%d): %s", request.method, request.url.path, code, exc)
        return JSONResponse(content={"message": str(exc)}, status_code=code)
