"""
Admin dashboard statistics
"""
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.models.category import Category
from partsdesk.models.enquiry import Enquiry
from partsdesk.models.product import Product
from partsdesk.schemas.admin import DashboardStats


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self, threshold: Optional[int] = None) -> DashboardStats:
        threshold = threshold if threshold is not None else settings.LOW_STOCK_THRESHOLD

        total_products = await self.db.scalar(select(func.count(Product.id)))
        total_categories = await self.db.scalar(select(func.count(Category.id)))
        total_enquiries = await self.db.scalar(select(func.count(Enquiry.id)))
        low_stock_count = await self.db.scalar(
            select(func.count(Product.id)).where(Product.stock <= threshold)
        )
        total_views = await self.db.scalar(select(func.coalesce(func.sum(Product.views), 0)))

        return DashboardStats(
            total_products=total_products or 0,
            total_categories=total_categories or 0,
            total_enquiries=total_enquiries or 0,
            low_stock_count=low_stock_count or 0,
            total_views=total_views or 0,
            low_stock_threshold=threshold,
        )
