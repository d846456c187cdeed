"""
Enquiry Service

Enquiries are written once at checkout and only read afterwards. There is
no update or delete.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.core.config import settings
from partsdesk.core.utils import utcnow
from partsdesk.models.enquiry import Enquiry
from partsdesk.models.product import Product
from partsdesk.schemas.enquiry import EnquiryCreate, EnquiryItemWithProduct, EnquiryWithProducts
from partsdesk.schemas.product import ProductResponse

logger = logging.getLogger(__name__)


class EnquiryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: EnquiryCreate) -> Enquiry:
        enquiry = Enquiry(
            items=[item.model_dump() for item in data.items],
            name=data.name,
            phone=data.phone,
            location=data.location,
            whatsapp_message=data.whatsapp_message,
            created_at=utcnow(),
        )
        self.db.add(enquiry)
        await self.db.commit()
        await self.db.refresh(enquiry)

        logger.info(f"Enquiry created: id={enquiry.id} items={len(enquiry.items)}")
        return enquiry

    async def list(self) -> List[Enquiry]:
        result = await self.db.execute(select(Enquiry).order_by(Enquiry.id.desc()))
        return list(result.scalars().all())

    async def list_recent(self, limit: Optional[int] = None) -> List[Enquiry]:
        limit = limit if limit is not None else settings.RECENT_ENQUIRIES_LIMIT
        result = await self.db.execute(
            select(Enquiry).order_by(Enquiry.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def get(self, enquiry_id: int) -> Optional[Enquiry]:
        result = await self.db.execute(select(Enquiry).where(Enquiry.id == enquiry_id))
        return result.scalar_one_or_none()

    async def list_with_products(self) -> List[EnquiryWithProducts]:
        """Enquiries with each item joined to its live product (None if deleted)."""
        enquiries = await self.list()

        product_ids = {
            item["product_id"] for enquiry in enquiries for item in (enquiry.items or [])
        }
        products = {}
        if product_ids:
            result = await self.db.execute(select(Product).where(Product.id.in_(product_ids)))
            products = {p.id: p for p in result.scalars().all()}

        enriched = []
        for enquiry in enquiries:
            items = []
            for item in enquiry.items or []:
                product = products.get(item["product_id"])
                items.append(EnquiryItemWithProduct(
                    **item,
                    product=ProductResponse.model_validate(product) if product else None,
                ))
            enriched.append(EnquiryWithProducts(
                id=enquiry.id,
                items=items,
                name=enquiry.name,
                phone=enquiry.phone,
                location=enquiry.location,
                whatsapp_message=enquiry.whatsapp_message,
                created_at=enquiry.created_at,
            ))
        return enriched
