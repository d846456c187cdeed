"""
Contact Message Service
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.exceptions import NotFoundError
from partsdesk.core.request_utils import hash_email
from partsdesk.core.utils import utcnow
from partsdesk.models.contact import ContactMessage, ContactStatus
from partsdesk.schemas.contact import ContactFormRequest

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, form: ContactFormRequest) -> ContactMessage:
        contact = ContactMessage(
            name=form.name,
            email=str(form.email),
            phone=form.phone or None,
            subject=form.subject,
            message=form.message,
            status=ContactStatus.NEW.value,
            created_at=utcnow(),
        )
        self.db.add(contact)
        await self.db.commit()
        await self.db.refresh(contact)

        # Log with redacted PII
        logger.info(
            f"Contact message stored: id={contact.id}, "
            f"email_hash={hash_email(contact.email)}, msg_len={len(contact.message)}"
        )
        return contact

    async def list(self) -> List[ContactMessage]:
        result = await self.db.execute(select(ContactMessage).order_by(ContactMessage.id.desc()))
        return list(result.scalars().all())

    async def list_by_status(self, status: ContactStatus) -> List[ContactMessage]:
        result = await self.db.execute(
            select(ContactMessage)
            .where(ContactMessage.status == ContactStatus(status).value)
            .order_by(ContactMessage.id.desc())
        )
        return list(result.scalars().all())

    async def get(self, contact_id: int) -> Optional[ContactMessage]:
        result = await self.db.execute(select(ContactMessage).where(ContactMessage.id == contact_id))
        return result.scalar_one_or_none()

    async def update_status(self, contact_id: int, status: ContactStatus) -> ContactMessage:
        contact = await self.get(contact_id)
        if contact is None:
            raise NotFoundError("Contact message not found", resource_type="contact", resource_id=contact_id)

        contact.status = ContactStatus(status).value
        await self.db.commit()
        await self.db.refresh(contact)
        return contact

    async def delete(self, contact_id: int) -> None:
        contact = await self.get(contact_id)
        if contact is None:
            raise NotFoundError("Contact message not found", resource_type="contact", resource_id=contact_id)

        await self.db.delete(contact)
        await self.db.commit()
