"""
Contact Form API Route

Public endpoint for contact form submissions with:
- Rate limiting per IP
- Pydantic validation
- PII redaction in logs
"""
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.core.database import get_db
from partsdesk.core.rate_limit import limiter
from partsdesk.schemas.contact import ContactFormRequest, ContactFormResponse
from partsdesk.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ContactFormResponse,
    status_code=201,
    summary="Submit contact form",
    description="""
Submit a contact form message.

**Response Codes**:
- `201`: Message stored
- `422`: Validation error (check field requirements)
- `429`: Rate limit exceeded (try again later)
    """,
    tags=["Contact"]
)
@limiter.limit(settings.RATE_LIMIT_CONTACT)
async def submit_contact_form(
    request: Request,
    form: ContactFormRequest,
    db: AsyncSession = Depends(get_db),
) -> ContactFormResponse:
    contact = await ContactService(db).create(form)
    return ContactFormResponse(id=contact.id)
