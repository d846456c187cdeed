"""
Enquiry Checkout

Turns the current cart into a stored enquiry plus a WhatsApp handoff.

Order of side effects:
1. persist the enquiry (items snapshot, customer fields, rendered message)
2. build the wa.me deep link
3. clear the cart
4. open the link (fire-and-forget)

If step 1 fails nothing else happens: the cart is kept and the user is told
to try again. Nothing is retried automatically. A crash between 1 and 3
leaves a stored enquiry with the cart still full; that window is accepted.
"""
import logging
import webbrowser
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.core.exceptions import EnquirySubmissionError
from partsdesk.schemas.cart import CustomerInfo
from partsdesk.schemas.enquiry import EnquiryCreate
from partsdesk.services.enquiry_cart import EnquiryCart
from partsdesk.services.enquiry_message import build_whatsapp_url, render_enquiry_message
from partsdesk.services.enquiry_service import EnquiryService

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Error creating enquiry. Please try again."


@dataclass
class CheckoutResult:
    enquiry_id: Any
    message: str
    whatsapp_url: str


# =============================================================================
# Enquiry gateways
# =============================================================================

class EnquiryGateway(ABC):
    """Where checkout persists the enquiry."""

    @abstractmethod
    async def create_enquiry(self, payload: EnquiryCreate) -> Any:
        """Store the enquiry and return its id."""


class DatabaseEnquiryGateway(EnquiryGateway):
    """Writes directly through EnquiryService on an open session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_enquiry(self, payload: EnquiryCreate) -> Any:
        enquiry = await EnquiryService(self.db).create(payload)
        return enquiry.id


class HttpEnquiryGateway(EnquiryGateway):
    """POSTs to the public /api/enquiries endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self._client = client

    async def create_enquiry(self, payload: EnquiryCreate) -> Any:
        body = payload.model_dump()
        if self._client is not None:
            response = await self._client.post(f"{self.base_url}/api/enquiries", json=body)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(f"{self.base_url}/api/enquiries", json=body)
        response.raise_for_status()
        return response.json()["id"]


# =============================================================================
# Checkout
# =============================================================================

def open_in_browser(url: str) -> None:
    webbrowser.open(url, new=2)


class CheckoutService:
    def __init__(
        self,
        cart: EnquiryCart,
        gateway: EnquiryGateway,
        opener: Optional[Callable[[str], Any]] = None,
        whatsapp_number: Optional[str] = None,
        whatsapp_base_url: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        self.cart = cart
        self.gateway = gateway
        self.opener = opener or open_in_browser
        self.whatsapp_number = whatsapp_number if whatsapp_number is not None else settings.WHATSAPP_NUMBER
        self.whatsapp_base_url = whatsapp_base_url or settings.WHATSAPP_BASE_URL
        self.currency = currency or settings.CURRENCY

    def build_payload(self, customer: CustomerInfo) -> EnquiryCreate:
        items = self.cart.items
        message = render_enquiry_message(items, customer, currency=self.currency)
        return EnquiryCreate(
            items=[
                {"product_id": item.product_id, "quantity": item.quantity, "price": item.price}
                for item in items
            ],
            name=customer.name,
            phone=customer.phone,
            location=customer.location,
            whatsapp_message=message,
        )

    async def submit(self, customer: Optional[CustomerInfo] = None) -> Optional[CheckoutResult]:
        """
        Submit the cart as an enquiry.

        Returns None without touching anything when the cart is empty.
        Raises EnquirySubmissionError if the enquiry could not be stored.
        """
        if self.cart.is_empty():
            return None

        customer = customer or CustomerInfo()
        payload = self.build_payload(customer)

        try:
            enquiry_id = await self.gateway.create_enquiry(payload)
        except Exception as e:
            logger.error(f"Error creating enquiry: {type(e).__name__}: {e}")
            raise EnquirySubmissionError(
                GENERIC_FAILURE_MESSAGE,
                details={"item_count": len(payload.items)},
            ) from e

        url = build_whatsapp_url(self.whatsapp_number, payload.whatsapp_message, self.whatsapp_base_url)
        self.cart.clear()

        try:
            self.opener(url)
        except Exception as e:
            # The external app cannot report back; a failed launch is not recoverable here
            logger.warning(f"Could not open WhatsApp link for enquiry {enquiry_id}: {e}")

        logger.info(f"Enquiry {enquiry_id} submitted with {len(payload.items)} items")
        return CheckoutResult(
            enquiry_id=enquiry_id,
            message=payload.whatsapp_message,
            whatsapp_url=url,
        )
