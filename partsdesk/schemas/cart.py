"""
Enquiry cart schemas

CartItem is client-side state. It is validated here so persisted slots and
API snapshots share one shape.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ProductSnapshot(BaseModel):
    """What the storefront captures when a product is added to the cart."""
    product_id: int
    title: str
    price: float = Field(..., ge=0, allow_inf_nan=False)
    image: Optional[str] = None


class CartItem(ProductSnapshot):
    quantity: int = Field(1, ge=1)


class CustomerInfo(BaseModel):
    """Optional contact fields typed in at checkout."""
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
