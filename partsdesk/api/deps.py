"""
API dependencies

Sign-in is handled by the identity proxy in front of the API. It forwards
the signed-in user's email in a header; admin routes only check that email
against the ADMIN_EMAILS allowlist.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, status

from partsdesk.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class AdminIdentity:
    email: str


def get_identity_email(request: Request) -> Optional[str]:
    email = request.headers.get(settings.ADMIN_EMAIL_HEADER)
    if email and email.strip():
        return email.strip().lower()
    return None


async def get_current_admin(request: Request) -> AdminIdentity:
    """Require a signed-in user whose email is on the admin allowlist."""
    email = get_identity_email(request)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    if email not in settings.ADMIN_EMAILS:
        logger.warning(f"Admin access denied for {request.method} {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )

    return AdminIdentity(email=email)
