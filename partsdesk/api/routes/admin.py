"""
Admin back-office routes: dashboard, enquiries, contact inbox

Enquiries are read-only here; they are never edited after checkout.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.api.deps import AdminIdentity, get_current_admin
from partsdesk.core.database import get_db
from partsdesk.models.contact import ContactStatus
from partsdesk.schemas.admin import DashboardStats
from partsdesk.schemas.contact import ContactMessageResponse, ContactStatusUpdate
from partsdesk.schemas.enquiry import EnquiryResponse, EnquiryWithProducts
from partsdesk.services.contact_service import ContactService
from partsdesk.services.dashboard_service import DashboardService
from partsdesk.services.enquiry_service import EnquiryService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    threshold: Optional[int] = Query(None, ge=0, description="Low-stock threshold"),
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """Aggregate counts for the dashboard"""
    return await DashboardService(db).get_stats(threshold)


# ============== ENQUIRIES ==============

@router.get("/enquiries", response_model=List[EnquiryWithProducts])
async def list_enquiries(
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """All enquiries, newest first, with the live product for each item"""
    return await EnquiryService(db).list_with_products()


@router.get("/enquiries/recent", response_model=List[EnquiryResponse])
async def list_recent_enquiries(
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await EnquiryService(db).list_recent(limit)


@router.get("/enquiries/{enquiry_id}", response_model=EnquiryResponse)
async def get_enquiry(
    enquiry_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    enquiry = await EnquiryService(db).get(enquiry_id)
    if enquiry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Enquiry not found"
        )
    return enquiry


# ============== CONTACT INBOX ==============

@router.get("/contacts", response_model=List[ContactMessageResponse])
async def list_contacts(
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    service = ContactService(db)
    if status_filter is not None:
        return await service.list_by_status(status_filter)
    return await service.list()


@router.patch("/contacts/{contact_id}/status", response_model=ContactMessageResponse)
async def update_contact_status(
    contact_id: int,
    update_data: ContactStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    contact = await ContactService(db).update_status(contact_id, update_data.status)
    logger.info(f"Admin {admin.email} set contact {contact_id} status={contact.status}")
    return contact


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    await ContactService(db).delete(contact_id)
    logger.info(f"Admin {admin.email} deleted contact {contact_id}")
