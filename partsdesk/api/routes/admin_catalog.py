"""
Admin catalogue routes: categories and products

Admin actions are logged with the acting admin's email.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.api.deps import AdminIdentity, get_current_admin
from partsdesk.core.database import get_db
from partsdesk.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from partsdesk.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from partsdesk.services.catalog_service import CategoryService, ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


# ============== CATEGORIES ==============

@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    category = await CategoryService(db).create(category_data)
    logger.info(f"Admin {admin.email} created category {category.id}")
    return category


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    update_data: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    category = await CategoryService(db).update(category_id, update_data)
    logger.info(f"Admin {admin.email} updated category {category_id}")
    return category


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """Delete a category. 409 while products still use it."""
    await CategoryService(db).delete(category_id)
    logger.info(f"Admin {admin.email} deleted category {category_id}")


# ============== PRODUCTS ==============

@router.get("/products", response_model=List[ProductResponse])
async def list_products(
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await ProductService(db).list()


@router.get("/products/low-stock", response_model=List[ProductResponse])
async def list_low_stock_products(
    threshold: Optional[int] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """Products with stock at or below the threshold"""
    return await ProductService(db).list_low_stock(threshold)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    product = await ProductService(db).get(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return product


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    product = await ProductService(db).create(product_data)
    logger.info(f"Admin {admin.email} created product {product.id}")
    return product


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    update_data: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    product = await ProductService(db).update(product_id, update_data)
    logger.info(f"Admin {admin.email} updated product {product_id}")
    return product


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin)
):
    await ProductService(db).delete(product_id)
    logger.info(f"Admin {admin.email} deleted product {product_id}")
