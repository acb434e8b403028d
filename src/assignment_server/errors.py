"""Global exception handlers — map library exceptions to HTTP status codes.

The resolver and service raise ``ValueError`` for unusable input; routes
raise it for missing documents.  Handlers pick the status code from the
message so route bodies stay on the happy path.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Checked in order; first match wins.  Anything else is a 400.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("already exists", 409),
    ("not found", 404),
]

# Raw messages may carry account names or document ids; they stay in the log.
_SAFE_MESSAGES: dict[int, str] = {
    400: "Invalid request",
    404: "Resource not found",
    409: "Resource already exists",
}


def status_for_value_error(exc: ValueError) -> int:
    msg = str(exc).lower()
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg:
            return code
    return 400


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map ``ValueError`` (pydantic ``ValidationError`` included) to 400/404/409."""
    status = status_for_value_error(exc)
    logger.warning("ValueError [%d] at %s: %s", status, request.url, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": _SAFE_MESSAGES.get(status, "Invalid request")},
    )


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all — log the traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
