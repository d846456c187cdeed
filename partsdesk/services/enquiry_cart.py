"""
Enquiry Cart Manager

Holds the items a visitor intends to enquire about. The cart is an explicit
object: whoever needs it is handed the same instance, together with the
storage slot it persists to.

Rules:
- One CartItem per product_id; items keep the order of their first add
- Quantity is always >= 1; setting it to 0 or below removes the item
- No stock check. Enquiries are non-binding, so stock is only enforced by
  the storefront hiding the add action when stock is 0
- Every mutation rewrites the full list to storage
- A missing or corrupt slot starts an empty cart; nothing here raises
"""
import json
import logging
from typing import List, Optional, Union

from pydantic import ValidationError

from partsdesk.schemas.cart import CartItem, ProductSnapshot
from partsdesk.services.cart_storage import CartStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "enquiry-cart"


def serialize_items(items: List[CartItem]) -> str:
    return json.dumps([item.model_dump() for item in items])


def deserialize_items(raw: Optional[str]) -> List[CartItem]:
    """
    Parse a stored cart.

    Anything that is not a JSON list yields an empty cart. Entries that no
    longer fit the CartItem shape are dropped individually, and duplicate
    product ids keep their first occurrence.
    """
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Discarding unreadable cart slot: {e}")
        return []

    if not isinstance(data, list):
        logger.debug(f"Discarding cart slot with unexpected type {type(data).__name__}")
        return []

    items: List[CartItem] = []
    seen = set()
    for entry in data:
        try:
            item = CartItem.model_validate(entry)
        except ValidationError as e:
            logger.debug(f"Skipping malformed cart entry: {e.error_count()} errors")
            continue
        if item.product_id in seen:
            continue
        seen.add(item.product_id)
        items.append(item)
    return items


class EnquiryCart:
    """Client-held enquiry cart persisted to a storage slot."""

    def __init__(self, storage: CartStorage, storage_key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._items: List[CartItem] = deserialize_items(storage.read(storage_key))

    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy() for item in self._items]

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total_price(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, product_id: int) -> Optional[CartItem]:
        for item in self._items:
            if item.product_id == product_id:
                return item.model_copy()
        return None

    def add_item(self, snapshot: Union[ProductSnapshot, dict]) -> CartItem:
        """Add one unit of a product. Re-adding increments in place."""
        if isinstance(snapshot, dict):
            snapshot = ProductSnapshot.model_validate(snapshot)

        for item in self._items:
            if item.product_id == snapshot.product_id:
                item.quantity += 1
                self._persist()
                return item.model_copy()

        item = CartItem(**snapshot.model_dump(), quantity=1)
        self._items.append(item)
        self._persist()
        return item.model_copy()

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set (not add to) the quantity. Zero or less removes the item."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        for item in self._items:
            if item.product_id == product_id:
                item.quantity = quantity
                self._persist()
                return

    def remove_item(self, product_id: int) -> None:
        remaining = [item for item in self._items if item.product_id != product_id]
        if len(remaining) != len(self._items):
            self._items = remaining
            self._persist()

    def clear(self) -> None:
        self._items = []
        self._persist()

    def _persist(self) -> None:
        try:
            self.storage.write(self.storage_key, serialize_items(self._items))
        except Exception as e:
            # Cart state stays usable in memory even if the slot cannot be written
            logger.warning(f"Failed to persist enquiry cart: {e}")
