"""Error Handlers: map fieldguard errors to JSON responses on a host FastAPI app.

Invariants:
    - FieldValidationError -> 422 with the field -> messages mapping under "fields"
    - InvalidValidationError -> 500 with the fixed generic message, reason logged only
    - DatabaseError -> 503, never leaks driver details beyond the mapped message

Design Decisions:
    - One handler for the FieldGuardError base: status and body come from the error
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fieldguard.core.errors import FieldGuardError, InvalidValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register fieldguard error handlers on the host FastAPI app."""

    @app.exception_handler(FieldGuardError)
    async def fieldguard_error_handler(request: Request, exc: FieldGuardError):
        if isinstance(exc, InvalidValidationError):
            logger.error(
                f"Validation misuse on {request.url.path}: {exc.reason}",
                extra={"error_code": exc.code},
            )
        else:
            logger.warning(
                f"{exc.code} on {request.url.path}",
                extra={"error_code": exc.code},
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )
