"""Error Handlers - map exceptions raised while serving a request onto the error envelope.

Invariants:
    - PokedexError -> its own http_status and to_response() body
    - 4xx domain errors log at WARNING, upstream (5xx) errors at ERROR
    - RequestValidationError -> 400 with one entry per offending query field
    - Anything else -> 500 with a fixed body; the exception is logged, never echoed

Design Decisions:
    - Handlers are plain module functions registered from one table, so tests and
      alternative apps reuse them without a decorator closure per handler
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokedex.core.errors import ErrorCategory, ErrorSeverity, PokedexError

logger = logging.getLogger(__name__)

_INTERNAL_ERROR_BODY = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": ErrorCategory.INTERNAL.value,
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


async def handle_pokedex_error(request: Request, exc: PokedexError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected query on {request.url.path}: {len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid query parameters",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc, extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_INTERNAL_ERROR_BODY,
    )


_HANDLERS = (
    (PokedexError, handle_pokedex_error),
    (RequestValidationError, handle_request_validation),
    (Exception, handle_unexpected_error),
)


def register_error_handlers(app: FastAPI) -> None:
    """Attach every handler in _HANDLERS to the app."""
    for exc_class, handler in _HANDLERS:
        app.add_exception_handler(exc_class, handler)
