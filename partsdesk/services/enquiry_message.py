"""
Enquiry Message Rendering

Builds the WhatsApp text for an enquiry and the wa.me deep link that
carries it. Customers see this text verbatim in their chat app, so the
layout must stay byte-for-byte stable:

    *New Enquiry Request*

    *Customer Details:*
    Name: Jane
    Phone: Not provided
    Location: Nairobi

    *Items:*
    1. Brake Pad Toyota
       Quantity: 2
       Price: KES 1,000
       Subtotal: KES 2,000

    *Total: KES 2,000*
"""
from typing import Iterable, Optional
from urllib.parse import quote

from partsdesk.core.utils import format_amount
from partsdesk.schemas.cart import CartItem, CustomerInfo

MESSAGE_HEADER = "*New Enquiry Request*"
NOT_PROVIDED = "Not provided"
DEFAULT_CURRENCY = "KES"

# Characters encodeURIComponent leaves alone besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _field(value: Optional[str]) -> str:
    return value if value else NOT_PROVIDED


def render_item_line(index: int, item: CartItem, currency: str = DEFAULT_CURRENCY) -> str:
    return (
        f"{index}. {item.title}\n"
        f"   Quantity: {item.quantity}\n"
        f"   Price: {currency} {format_amount(item.price)}\n"
        f"   Subtotal: {currency} {format_amount(item.quantity * item.price)}"
    )


def render_enquiry_message(
    items: Iterable[CartItem],
    customer: Optional[CustomerInfo] = None,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """Render the enquiry text. Missing customer fields read "Not provided"."""
    customer = customer or CustomerInfo()
    items = list(items)
    total = sum(item.price * item.quantity for item in items)

    item_lines = "\n\n".join(
        render_item_line(idx, item, currency) for idx, item in enumerate(items, start=1)
    )

    return (
        f"{MESSAGE_HEADER}\n\n"
        f"*Customer Details:*\n"
        f"Name: {_field(customer.name)}\n"
        f"Phone: {_field(customer.phone)}\n"
        f"Location: {_field(customer.location)}\n\n"
        f"*Items:*\n"
        f"{item_lines}\n\n"
        f"*Total: {currency} {format_amount(total)}*"
    )


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_whatsapp_url(phone_number: str, message: str, base_url: str = "https://wa.me") -> str:
    """https://wa.me/<number>?text=<encoded message>"""
    return f"{base_url.rstrip('/')}/{phone_number}?text={encode_uri_component(message)}"
