"""
Rate Limiting Configuration

Uses SlowAPI for in-memory rate limiting (single instance).
Configurable via environment variables.
"""
import logging
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.requests import Request
from starlette.responses import JSONResponse

from partsdesk.core.config import settings
from partsdesk.core.request_utils import extract_client_ip

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    return extract_client_ip(request) or "unknown"


limiter = Limiter(
    key_func=get_client_ip,
    enabled=settings.RATE_LIMIT_ENABLED,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded errors.
    Returns structured JSON response with retry-after header.
    """
    logger.warning(
        f"Rate limit exceeded: {get_client_ip(request)} on {request.url.path}"
    )

    retry_after = exc.detail.split("per")[0].strip() if exc.detail else "1 minute"

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Too many requests. Please try again in {retry_after}.",
            "retry_after": retry_after,
        },
        headers={"Retry-After": "60"},
    )
