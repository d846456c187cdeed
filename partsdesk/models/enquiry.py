"""
Enquiry model

Immutable once created. Items are a snapshot of
{product_id, quantity, price}; price is captured at submission time.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON

from partsdesk.core.database import Base
from partsdesk.core.utils import utcnow


class Enquiry(Base):
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, index=True)
    items = Column(JSON, nullable=False, default=list)

    # Customer fields stay NULL when not supplied
    name = Column(String(200))
    phone = Column(String(50))
    location = Column(String(200))

    whatsapp_message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
