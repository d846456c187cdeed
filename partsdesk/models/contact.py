"""
Contact message model
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, Text

from partsdesk.core.database import Base
from partsdesk.core.utils import utcnow


class ContactStatus(str, enum.Enum):
    """new -> read -> responded. Forward-only by convention, not enforced."""
    NEW = "new"
    READ = "read"
    RESPONDED = "responded"


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)
    phone = Column(String(50))
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ContactStatus.NEW.value, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
