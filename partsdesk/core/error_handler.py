"""
Error handling and sanitization

- Domain errors (PartsDeskError) -> structured JSON with their status code
- Database errors -> generic message
- Stack traces -> logged only, not returned to client
"""
import logging
import traceback
from typing import Union

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from partsdesk.core.config import settings
from partsdesk.core.exceptions import PartsDeskError

logger = logging.getLogger(__name__)

# Patterns that indicate internal/sensitive error information
SENSITIVE_PATTERNS = [
    "password",
    "secret",
    "token",
    "credential",
    "sqlalchemy",
    "asyncpg",
    "postgresql",
    "traceback",
    "file \"",
    "line ",
]


def is_sensitive_error(message: str) -> bool:
    """Check if error message contains sensitive information."""
    message_lower = message.lower()
    return any(pattern in message_lower for pattern in SENSITIVE_PATTERNS)


def sanitize_error_message(error: Union[str, Exception]) -> str:
    """Sanitize an error message for safe client exposure."""
    message = error if isinstance(error, str) else str(error)

    if settings.DEBUG:
        return message

    if is_sensitive_error(message):
        return "An internal error occurred. Please try again later."

    if len(message) > 200:
        return message[:200] + "..."

    return message


async def partsdesk_error_handler(request: Request, exc: PartsDeskError) -> JSONResponse:
    """Render a domain error as structured JSON."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": sanitize_error_message(exc.message),
            "details": exc.details,
        },
    )


class ErrorSanitizationMiddleware(BaseHTTPMiddleware):
    """
    Catch unhandled exceptions and sanitize error responses.

    - In production: Returns generic error, logs full details
    - In development: Returns full error for debugging
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except HTTPException:
            raise
        except Exception as e:
            error_id = f"{request.client.host if request.client else 'unknown'}-{id(e)}"
            logger.error(
                f"Unhandled exception [{error_id}]: {type(e).__name__}: {str(e)}\n"
                f"Path: {request.url.path}\n"
                f"Method: {request.method}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )

            if settings.DEBUG:
                return JSONResponse(
                    status_code=500,
                    content={
                        "error": "internal_error",
                        "message": str(e),
                        "type": type(e).__name__,
                        "error_id": error_id,
                    }
                )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_error",
                    "message": "An unexpected error occurred. Please try again later.",
                    "error_id": error_id,
                }
            )
