"""
Product routes (public)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.core.database import get_db
from partsdesk.schemas.product import ProductResponse, ProductSearchResponse
from partsdesk.services.catalog_service import ProductService
from partsdesk.services.product_search import ProductSearchService, SearchQuery

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    category_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db)
):
    """List products, newest first, optionally within one category"""
    service = ProductService(db)
    if category_id is not None:
        return await service.list_by_category(category_id)
    return await service.list()


@router.get("/featured", response_model=List[ProductResponse])
async def list_featured_products(
    limit: int = Query(settings.FEATURED_LIMIT, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Featured products for the storefront home page"""
    return await ProductService(db).list_featured(limit)


@router.get("/search", response_model=ProductSearchResponse)
async def search_products(
    q: str = Query("", description="Search term; blank returns no results"),
    category_id: Optional[int] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    in_stock: bool = False,
    limit: int = Query(settings.SEARCH_MODAL_LIMIT, ge=1),
    db: AsyncSession = Depends(get_db)
):
    """
    Search products by title, description, brand, OEM number or compatible model.

    Title matches rank first, then by views. No pagination: ask for a larger
    limit to see more.
    """
    query = SearchQuery(
        term=q,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        in_stock_only=in_stock,
        limit=min(limit, settings.SEARCH_PAGE_LIMIT),
    )
    products = await ProductSearchService(db).search(query)
    return ProductSearchResponse(term=q, products=products, count=len(products))


@router.get("/{slug}", response_model=ProductResponse)
async def get_product(slug: str, db: AsyncSession = Depends(get_db)):
    """Get single product by slug"""
    product = await ProductService(db).get_by_slug(slug)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return product


@router.post("/{product_id}/views")
async def record_product_view(product_id: int, db: AsyncSession = Depends(get_db)):
    """Count a product detail page visit"""
    views = await ProductService(db).increment_views(product_id)
    return {"id": product_id, "views": views}
