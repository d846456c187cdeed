"""
Enquiry schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from partsdesk.schemas.product import ProductResponse


class EnquiryItem(BaseModel):
    """Snapshot of one cart line at submission time."""
    product_id: int
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class EnquiryCreate(BaseModel):
    items: List[EnquiryItem] = Field(..., min_length=1)
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    whatsapp_message: str = Field(..., min_length=1)

    @field_validator('name', 'phone', 'location')
    @classmethod
    def blank_to_none(cls, v):
        """Customer fields are stored empty, never as the placeholder text."""
        return v or None


class EnquiryResponse(BaseModel):
    id: int
    items: List[EnquiryItem]
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    whatsapp_message: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EnquiryItemWithProduct(EnquiryItem):
    # None when the product was deleted after the enquiry was made
    product: Optional[ProductResponse] = None


class EnquiryWithProducts(EnquiryResponse):
    items: List[EnquiryItemWithProduct]


class EnquiryCreated(BaseModel):
    id: int
