"""
Catalog Service

CRUD for categories and products.

- Lookups return None when a row is absent; routes turn that into a 404
- Slugs are unique per table and checked before insert/update
- Products must reference an existing category
- A category cannot be deleted while products reference it
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.core.exceptions import DuplicateSlugError, NotFoundError, ReferentialIntegrityError
from partsdesk.core.utils import utcnow
from partsdesk.models.category import Category
from partsdesk.models.product import Product
from partsdesk.schemas.category import CategoryCreate, CategoryUpdate
from partsdesk.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


async def commit_unique_slug(db: AsyncSession, slug: str, label: str) -> None:
    """
    Commit a create/update that sets a slug.

    The pre-insert slug check cannot stop a concurrent writer; if the unique
    index rejects the row, the session is rolled back and the loss is
    reported as DuplicateSlugError. Other integrity failures propagate.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if "slug" not in str(e.orig):
            raise
        logger.warning(f"{label} slug '{slug}' claimed by a concurrent write")
        raise DuplicateSlugError(f"{label} slug '{slug}' already exists", slug=slug) from e


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Category]:
        result = await self.db.execute(select(Category).order_by(Category.id.desc()))
        return list(result.scalars().all())

    async def get(self, category_id: int) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def _ensure_slug_free(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.get_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateSlugError(f"Category slug '{slug}' already exists", slug=slug)

    async def create(self, data: CategoryCreate) -> Category:
        await self._ensure_slug_free(data.slug)

        category = Category(**data.model_dump(), created_at=utcnow())
        self.db.add(category)
        await commit_unique_slug(self.db, category.slug, "Category")
        await self.db.refresh(category)

        logger.info(f"Category created: id={category.id} slug={category.slug}")
        return category

    async def update(self, category_id: int, data: CategoryUpdate) -> Category:
        category = await self.get(category_id)
        if category is None:
            raise NotFoundError("Category not found", resource_type="category", resource_id=category_id)

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "slug" in updates:
            await self._ensure_slug_free(updates["slug"], exclude_id=category_id)

        for field, value in updates.items():
            setattr(category, field, value)

        await commit_unique_slug(self.db, category.slug, "Category")
        await self.db.refresh(category)

        logger.info(f"Category updated: id={category_id} fields={list(updates.keys())}")
        return category

    async def delete(self, category_id: int) -> None:
        """Delete a category. Refused while any product still references it."""
        category = await self.get(category_id)
        if category is None:
            raise NotFoundError("Category not found", resource_type="category", resource_id=category_id)

        result = await self.db.execute(
            select(Product.id).where(Product.category_id == category_id).limit(1)
        )
        if result.scalar_one_or_none() is not None:
            raise ReferentialIntegrityError(
                "Cannot delete category with existing products",
                resource_type="category",
                resource_id=category_id,
                referenced_by="products",
            )

        await self.db.delete(category)
        await self.db.commit()
        logger.info(f"Category deleted: id={category_id}")


class ProductService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id.desc()))
        return list(result.scalars().all())

    async def list_featured(self, limit: Optional[int] = None) -> List[Product]:
        limit = limit if limit is not None else settings.FEATURED_LIMIT
        result = await self.db.execute(
            select(Product)
            .where(Product.featured.is_(True))
            .order_by(Product.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_by_category(self, category_id: int) -> List[Product]:
        result = await self.db.execute(
            select(Product)
            .where(Product.category_id == category_id)
            .order_by(Product.id.desc())
        )
        return list(result.scalars().all())

    async def list_low_stock(self, threshold: Optional[int] = None) -> List[Product]:
        threshold = threshold if threshold is not None else settings.LOW_STOCK_THRESHOLD
        result = await self.db.execute(
            select(Product).where(Product.stock <= threshold).order_by(Product.stock.asc())
        )
        return list(result.scalars().all())

    async def get(self, product_id: int) -> Optional[Product]:
        result = await self.db.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Product]:
        result = await self.db.execute(select(Product).where(Product.slug == slug))
        return result.scalar_one_or_none()

    async def _ensure_category_exists(self, category_id: int) -> None:
        result = await self.db.execute(select(Category.id).where(Category.id == category_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Category not found", resource_type="category", resource_id=category_id)

    async def _ensure_slug_free(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = await self.get_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateSlugError(f"Product slug '{slug}' already exists", slug=slug)

    async def create(self, data: ProductCreate) -> Product:
        await self._ensure_category_exists(data.category_id)
        await self._ensure_slug_free(data.slug)

        now = utcnow()
        product = Product(**data.model_dump(), views=0, created_at=now, updated_at=now)
        self.db.add(product)
        await commit_unique_slug(self.db, product.slug, "Product")
        await self.db.refresh(product)

        logger.info(f"Product created: id={product.id} slug={product.slug}")
        return product

    async def update(self, product_id: int, data: ProductUpdate) -> Product:
        product = await self.get(product_id)
        if product is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "category_id" in updates:
            await self._ensure_category_exists(updates["category_id"])
        if "slug" in updates:
            await self._ensure_slug_free(updates["slug"], exclude_id=product_id)

        for field, value in updates.items():
            setattr(product, field, value)
        product.updated_at = utcnow()

        await commit_unique_slug(self.db, product.slug, "Product")
        await self.db.refresh(product)

        logger.info(f"Product updated: id={product_id} fields={list(updates.keys())}")
        return product

    async def delete(self, product_id: int) -> None:
        product = await self.get(product_id)
        if product is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

        await self.db.delete(product)
        await self.db.commit()
        logger.info(f"Product deleted: id={product_id} slug={product.slug}")

    async def increment_views(self, product_id: int) -> int:
        """Bump the view counter by one and return the new value."""
        product = await self.get(product_id)
        if product is None:
            raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

        product.views = (product.views or 0) + 1
        await self.db.commit()
        return product.views
