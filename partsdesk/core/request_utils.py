"""
Request utility functions
"""
import hashlib
from typing import Optional
from fastapi import Request


def extract_client_ip(request: Request) -> Optional[str]:
    """
    Extract client IP from request, handling proxy headers.

    Checks X-Forwarded-For header first (for requests behind load balancers),
    then falls back to the direct client IP.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs; first is the original client
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def hash_email(email: str) -> str:
    """
    Hash email for logging.
    Uses SHA-256 truncated to 8 chars for log correlation.
    """
    return hashlib.sha256(email.lower().encode()).hexdigest()[:8]
