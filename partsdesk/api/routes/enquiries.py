"""
Enquiry routes (public)

The storefront posts the enquiry here before opening WhatsApp.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.database import get_db
from partsdesk.schemas.enquiry import EnquiryCreate, EnquiryCreated
from partsdesk.services.enquiry_service import EnquiryService

router = APIRouter()


@router.post("", response_model=EnquiryCreated, status_code=status.HTTP_201_CREATED)
async def create_enquiry(payload: EnquiryCreate, db: AsyncSession = Depends(get_db)):
    """Store an enquiry snapshot"""
    enquiry = await EnquiryService(db).create(payload)
    return EnquiryCreated(id=enquiry.id)
