"""
Tests for enquiry checkout: persistence, WhatsApp handoff and failure handling.
"""
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from partsdesk.core.exceptions import EnquirySubmissionError
from partsdesk.schemas.cart import CustomerInfo, ProductSnapshot
from partsdesk.services.cart_storage import InMemoryCartStorage
from partsdesk.services.checkout import (
    CheckoutService,
    DatabaseEnquiryGateway,
    EnquiryGateway,
    HttpEnquiryGateway,
)
from partsdesk.services.enquiry_cart import EnquiryCart


class RecordingGateway(EnquiryGateway):
    def __init__(self, enquiry_id=42, error=None):
        self.enquiry_id = enquiry_id
        self.error = error
        self.payloads = []

    async def create_enquiry(self, payload):
        self.payloads.append(payload)
        if self.error:
            raise self.error
        return self.enquiry_id


@pytest.fixture
def cart():
    cart = EnquiryCart(InMemoryCartStorage())
    cart.add_item(ProductSnapshot(product_id=1, title="Brake Pad Toyota", price=1000))
    cart.add_item(ProductSnapshot(product_id=1, title="Brake Pad Toyota", price=1000))
    cart.add_item(ProductSnapshot(product_id=2, title="Oil Filter", price=500))
    return cart


def make_service(cart, gateway, opener=None):
    return CheckoutService(
        cart,
        gateway,
        opener=opener or MagicMock(),
        whatsapp_number="254700000000",
        whatsapp_base_url="https://wa.me",
        currency="KES",
    )


class TestSubmit:
    @pytest.mark.asyncio
    async def test_empty_cart_is_noop(self):
        cart = EnquiryCart(InMemoryCartStorage())
        gateway = RecordingGateway()
        opener = MagicMock()

        result = await make_service(cart, gateway, opener).submit(CustomerInfo(name="Jane"))

        assert result is None
        assert gateway.payloads == []
        opener.assert_not_called()
        assert cart.is_empty()

    @pytest.mark.asyncio
    async def test_success_persists_clears_and_opens(self, cart):
        gateway = RecordingGateway(enquiry_id=7)
        opener = MagicMock()

        result = await make_service(cart, gateway, opener).submit(
            CustomerInfo(name="Jane", location="Mombasa")
        )

        assert result.enquiry_id == 7
        assert cart.is_empty()
        opener.assert_called_once_with(result.whatsapp_url)

        parsed = urlparse(result.whatsapp_url)
        assert parsed.path == "/254700000000"
        assert parse_qs(parsed.query)["text"] == [result.message]
        assert result.message.endswith("*Total: KES 2,500*")

    @pytest.mark.asyncio
    async def test_payload_stores_blank_fields_not_placeholder(self, cart):
        gateway = RecordingGateway()

        await make_service(cart, gateway).submit()

        payload = gateway.payloads[0]
        assert payload.name is None
        assert payload.phone is None
        assert payload.location is None
        assert "Name: Not provided" in payload.whatsapp_message
        assert [(i.product_id, i.quantity, i.price) for i in payload.items] == [
            (1, 2, 1000.0),
            (2, 1, 500.0),
        ]

    @pytest.mark.asyncio
    async def test_gateway_failure_keeps_cart_and_opens_nothing(self, cart):
        gateway = RecordingGateway(error=httpx.ConnectError("connection refused"))
        opener = MagicMock()

        with pytest.raises(EnquirySubmissionError) as exc_info:
            await make_service(cart, gateway, opener).submit()

        assert exc_info.value.retryable is True
        assert exc_info.value.message == "Error creating enquiry. Please try again."
        assert cart.total_items == 3
        opener.assert_not_called()

    @pytest.mark.asyncio
    async def test_opener_failure_does_not_fail_checkout(self, cart):
        opener = MagicMock(side_effect=RuntimeError("no browser"))

        result = await make_service(cart, RecordingGateway(), opener).submit()

        assert result is not None
        assert cart.is_empty()


class TestGateways:
    @pytest.mark.asyncio
    async def test_database_gateway_returns_new_id(self, mock_db, cart):
        async def assign_id(enquiry):
            enquiry.id = 11

        mock_db.refresh.side_effect = assign_id
        service = make_service(cart, DatabaseEnquiryGateway(mock_db))

        result = await service.submit(CustomerInfo(phone="0700000000"))

        assert result.enquiry_id == 11
        mock_db.add.assert_called_once()
        mock_db.commit.assert_awaited_once()
        stored = mock_db.add.call_args[0][0]
        assert stored.phone == "0700000000"
        assert stored.items[0] == {"product_id": 1, "quantity": 2, "price": 1000.0}

    @pytest.mark.asyncio
    async def test_http_gateway_posts_to_enquiries(self, cart):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            return httpx.Response(201, json={"id": 99})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            gateway = HttpEnquiryGateway("http://api.test/", client=client)
            result = await make_service(cart, gateway).submit()

        assert captured["url"] == "http://api.test/api/enquiries"
        assert result.enquiry_id == 99

    @pytest.mark.asyncio
    async def test_http_gateway_error_status_is_submission_error(self, cart):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "internal_error"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = make_service(cart, HttpEnquiryGateway("http://api.test", client=client))
            with pytest.raises(EnquirySubmissionError):
                await service.submit()

        assert not cart.is_empty()
