"""
Product schemas
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

# products.price is Numeric(12, 2)
MAX_PRICE = 9_999_999_999.99


def _whole_cents(v):
    if v is not None and round(v, 2) != v:
        raise ValueError("price must have at most 2 decimal places")
    return v


class ProductBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    slug: str = Field(..., min_length=1, max_length=300)
    category_id: int
    price: float = Field(..., ge=0, le=MAX_PRICE, allow_inf_nan=False)
    stock: int = Field(..., ge=0)
    description: Optional[str] = None
    images: List[str] = []
    brand: Optional[str] = None
    oem_number: Optional[str] = None
    compatible_models: Optional[List[str]] = None

    @field_validator('price')
    @classmethod
    def price_in_cents(cls, v):
        return _whole_cents(v)


class ProductCreate(ProductBase):
    featured: bool = False


class ProductUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    slug: Optional[str] = Field(None, min_length=1, max_length=300)
    category_id: Optional[int] = None
    price: Optional[float] = Field(None, ge=0, le=MAX_PRICE, allow_inf_nan=False)
    stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    brand: Optional[str] = None
    oem_number: Optional[str] = None
    compatible_models: Optional[List[str]] = None
    featured: Optional[bool] = None

    @field_validator('price')
    @classmethod
    def price_in_cents(cls, v):
        return _whole_cents(v)


class ProductResponse(ProductBase):
    id: int
    featured: bool = False
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Handle NULL values from database
    @field_validator('views', mode='before')
    @classmethod
    def default_int(cls, v):
        return v if v is not None else 0

    @field_validator('images', mode='before')
    @classmethod
    def default_list(cls, v):
        return v if v is not None else []

    @field_validator('featured', mode='before')
    @classmethod
    def default_bool(cls, v):
        return v if v is not None else False

    class Config:
        from_attributes = True


class ProductSearchResponse(BaseModel):
    term: str
    products: List[ProductResponse]
    count: int
