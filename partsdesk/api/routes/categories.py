"""
Category routes (public)
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.database import get_db
from partsdesk.schemas.category import CategoryResponse
from partsdesk.schemas.product import ProductResponse
from partsdesk.services.catalog_service import CategoryService, ProductService

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List all categories, newest first"""
    return await CategoryService(db).list()


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, db: AsyncSession = Depends(get_db)):
    """Get single category by slug"""
    category = await CategoryService(db).get_by_slug(slug)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return category


@router.get("/{slug}/products", response_model=List[ProductResponse])
async def list_category_products(slug: str, db: AsyncSession = Depends(get_db)):
    """Products in a category, newest first"""
    category = await CategoryService(db).get_by_slug(slug)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return await ProductService(db).list_by_category(category.id)
