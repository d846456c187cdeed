"""
Contact message schemas

Validation rules:
- name: 1-100 characters
- email: valid email format
- subject: 1-200 characters
- message: 10-2000 characters
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr, field_validator

from partsdesk.models.contact import ContactStatus


class ContactFormRequest(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Sender's name",
        examples=["Jane Wanjiku"]
    )
    email: EmailStr = Field(
        ...,
        description="Sender's email address",
        examples=["jane@example.com"]
    )
    phone: Optional[str] = Field(None, max_length=50)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(
        ...,
        min_length=10,
        max_length=2000,
        description="Contact message content",
        examples=["Do you have brake pads for a 2012 Toyota Axio?"]
    )

    @field_validator('name', 'subject')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator('message')
    @classmethod
    def sanitize_message(cls, v: str) -> str:
        """Strip whitespace from message."""
        return v.strip()


class ContactFormResponse(BaseModel):
    """Response for successful contact form submission."""
    message: str = "Contact form submitted successfully"
    id: int


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class ContactMessageResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
