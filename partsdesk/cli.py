"""
PartsDesk Cart CLI

Terminal storefront for the enquiry cart. The cart lives in a JSON file
under CART_STORAGE_DIR, so it survives between invocations.

Usage:
    # Add one unit of a product (repeat to increase quantity)
    partsdesk-cart add brake-pad-toyota

    # Show the cart
    partsdesk-cart list

    # Set quantity (0 removes)
    partsdesk-cart update 12 3

    # Search the catalogue
    partsdesk-cart search "corolla" --in-stock

    # Submit the enquiry and open WhatsApp
    partsdesk-cart checkout --name "Jane" --location "Nairobi"

Environment:
    PARTSDESK_API_URL - Backend API URL (default: settings.API_URL)
"""

import argparse
import asyncio
import os
import sys
from typing import Optional

import httpx
from dotenv import load_dotenv

from partsdesk.core.config import settings
from partsdesk.core.exceptions import EnquirySubmissionError
from partsdesk.core.utils import format_amount
from partsdesk.schemas.cart import CustomerInfo, ProductSnapshot
from partsdesk.services.cart_storage import FileCartStorage
from partsdesk.services.checkout import CheckoutService, HttpEnquiryGateway
from partsdesk.services.enquiry_cart import EnquiryCart

# =============================================================================
# CONFIGURATION
# =============================================================================


def get_base_url() -> str:
    """API URL from the environment, falling back to settings."""
    url = os.environ.get("PARTSDESK_API_URL")
    if url:
        return url.rstrip("/")
    return settings.API_URL.rstrip("/")


def api_request(method: str, path: str, **kwargs) -> dict:
    timeout = kwargs.pop("timeout", 30.0)

    response = httpx.request(
        method,
        f"{get_base_url()}{path}",
        timeout=timeout,
        **kwargs
    )
    response.raise_for_status()
    return response.json()


def open_cart(args) -> EnquiryCart:
    storage = FileCartStorage(args.storage_dir or settings.CART_STORAGE_DIR)
    return EnquiryCart(storage, settings.CART_STORAGE_KEY)


def print_cart(cart: EnquiryCart) -> None:
    if cart.is_empty():
        print("Your enquiry cart is empty")
        return

    currency = settings.CURRENCY
    print("\n" + "=" * 60)
    print("ENQUIRY CART")
    print("=" * 60)
    for item in cart.items:
        subtotal = item.price * item.quantity
        print(f"[{item.product_id}] {item.title}")
        print(f"  {item.quantity} x {currency} {format_amount(item.price)} = {currency} {format_amount(subtotal)}")
    print("-" * 60)
    print(f"Items: {cart.total_items}")
    print(f"Total: {currency} {format_amount(cart.total_price)}")


# =============================================================================
# CART COMMANDS
# =============================================================================


def cmd_add(args):
    """Fetch a product by slug and add one unit to the cart."""
    try:
        product = api_request("GET", f"/api/products/{args.slug}")
    except httpx.HTTPStatusError as e:
        print(f"Failed: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.RequestError as e:
        print(f"Could not reach API at {get_base_url()}: {e}")
        sys.exit(1)

    if product.get("stock", 0) <= 0:
        print(f"{product['title']} is out of stock")
        sys.exit(1)

    images = product.get("images") or []
    cart = open_cart(args)
    item = cart.add_item(ProductSnapshot(
        product_id=product["id"],
        title=product["title"],
        price=product["price"],
        image=images[0] if images else None,
    ))
    print(f"Added {item.title} (quantity {item.quantity})")


def cmd_list(args):
    """Show cart contents and totals."""
    print_cart(open_cart(args))


def cmd_update(args):
    """Set the quantity of a cart line."""
    cart = open_cart(args)
    if cart.get(args.product_id) is None:
        print(f"Product {args.product_id} is not in the cart")
        sys.exit(1)

    cart.update_quantity(args.product_id, args.quantity)
    if args.quantity <= 0:
        print(f"Removed product {args.product_id}")
    else:
        print(f"Quantity for product {args.product_id} set to {args.quantity}")


def cmd_remove(args):
    cart = open_cart(args)
    cart.remove_item(args.product_id)
    print(f"Removed product {args.product_id}")


def cmd_clear(args):
    open_cart(args).clear()
    print("Cart cleared")


# =============================================================================
# SEARCH COMMAND
# =============================================================================


def cmd_search(args):
    """Search the catalogue."""
    params = {"q": args.term, "limit": args.limit}
    if args.category_id is not None:
        params["category_id"] = args.category_id
    if args.min_price is not None:
        params["min_price"] = args.min_price
    if args.max_price is not None:
        params["max_price"] = args.max_price
    if args.in_stock:
        params["in_stock"] = "true"

    try:
        data = api_request("GET", "/api/products/search", params=params)
    except httpx.HTTPStatusError as e:
        print(f"Failed: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.RequestError as e:
        print(f"Could not reach API at {get_base_url()}: {e}")
        sys.exit(1)

    products = data.get("products", [])
    if not products:
        print(f"No products found for '{args.term}'")
        return

    print(f"\n{data.get('count', len(products))} results for '{args.term}':")
    for product in products:
        stock = product.get("stock", 0)
        availability = "in stock" if stock > 0 else "out of stock"
        print(f"  {product['slug']}: {product['title']} - {settings.CURRENCY} "
              f"{format_amount(product['price'])} ({availability})")


# =============================================================================
# CHECKOUT COMMAND
# =============================================================================


def cmd_checkout(args):
    """Submit the cart as an enquiry and hand off to WhatsApp."""
    cart = open_cart(args)
    if cart.is_empty():
        print("Your enquiry cart is empty")
        return

    customer = CustomerInfo(name=args.name, phone=args.phone, location=args.location)
    opener = (lambda url: None) if args.no_open else None
    service = CheckoutService(cart, HttpEnquiryGateway(get_base_url()), opener=opener)

    try:
        result = asyncio.run(service.submit(customer))
    except EnquirySubmissionError as e:
        print(e.message)
        sys.exit(1)

    print(f"Enquiry #{result.enquiry_id} submitted")
    print("\n" + result.message + "\n")
    print(f"WhatsApp link: {result.whatsapp_url}")


# =============================================================================
# MAIN
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="partsdesk-cart",
        description="PartsDesk enquiry cart",
    )
    parser.add_argument("--storage-dir", help="Cart storage directory (default: CART_STORAGE_DIR)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser("add", help="Add a product to the cart")
    add_parser.add_argument("slug", help="Product slug")
    add_parser.set_defaults(func=cmd_add)

    list_parser = subparsers.add_parser("list", help="Show the cart")
    list_parser.set_defaults(func=cmd_list)

    update_parser = subparsers.add_parser("update", help="Set quantity (0 removes)")
    update_parser.add_argument("product_id", type=int)
    update_parser.add_argument("quantity", type=int)
    update_parser.set_defaults(func=cmd_update)

    remove_parser = subparsers.add_parser("remove", help="Remove a product")
    remove_parser.add_argument("product_id", type=int)
    remove_parser.set_defaults(func=cmd_remove)

    clear_parser = subparsers.add_parser("clear", help="Empty the cart")
    clear_parser.set_defaults(func=cmd_clear)

    search_parser = subparsers.add_parser("search", help="Search the catalogue")
    search_parser.add_argument("term")
    search_parser.add_argument("--category-id", type=int)
    search_parser.add_argument("--min-price", type=float)
    search_parser.add_argument("--max-price", type=float)
    search_parser.add_argument("--in-stock", action="store_true", help="Only products in stock")
    search_parser.add_argument("--limit", type=int, default=settings.SEARCH_PAGE_LIMIT)
    search_parser.set_defaults(func=cmd_search)

    checkout_parser = subparsers.add_parser("checkout", help="Submit the enquiry")
    checkout_parser.add_argument("--name")
    checkout_parser.add_argument("--phone")
    checkout_parser.add_argument("--location")
    checkout_parser.add_argument("--no-open", action="store_true", help="Print the link instead of opening it")
    checkout_parser.set_defaults(func=cmd_checkout)

    return parser


def main(argv: Optional[list] = None):
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
