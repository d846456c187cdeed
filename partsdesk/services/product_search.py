"""
Product Search

Linear scan over the whole product table with a case-insensitive substring
match. Fine for a catalogue of a few thousand parts; a larger catalogue
would need an index behind the same rank_products contract.

Ranking is a two-tier partition, not a relevance score:
1. products whose title contains the term
2. products matching only on description, brand, OEM number or a model
Each tier is ordered by view count, highest first.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from partsdesk.models.product import Product

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


@dataclass
class SearchQuery:
    term: str
    category_id: Optional[int] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock_only: bool = False
    limit: int = DEFAULT_LIMIT

    @property
    def is_blank(self) -> bool:
        return not self.term or not self.term.strip()


def _contains(value: Optional[str], term_lower: str) -> bool:
    return bool(value) and term_lower in value.lower()


def title_matches(product, term_lower: str) -> bool:
    return _contains(product.title, term_lower)


def matches_term(product, term_lower: str) -> bool:
    if title_matches(product, term_lower):
        return True
    if _contains(product.description, term_lower):
        return True
    if _contains(product.brand, term_lower):
        return True
    if _contains(product.oem_number, term_lower):
        return True
    return any(_contains(model, term_lower) for model in (product.compatible_models or []))


def passes_filters(product, query: SearchQuery) -> bool:
    if query.category_id is not None and product.category_id != query.category_id:
        return False
    price = float(product.price)
    if query.min_price is not None and price < query.min_price:
        return False
    if query.max_price is not None and price > query.max_price:
        return False
    if query.in_stock_only and (product.stock or 0) <= 0:
        return False
    return True


def rank_products(products: Iterable, query: SearchQuery) -> List:
    """
    Filter and rank products for a search query.

    A blank term returns nothing rather than the whole catalogue. An unknown
    category or min_price > max_price simply matches nothing.
    """
    if query.is_blank or query.limit <= 0:
        return []

    term_lower = query.term.lower()
    matches = [
        product for product in products
        if matches_term(product, term_lower) and passes_filters(product, query)
    ]

    # sorted() is stable, so equal keys keep scan order
    matches = sorted(
        matches,
        key=lambda p: (not title_matches(p, term_lower), -(p.views or 0)),
    )
    return matches[:query.limit]


class ProductSearchService:
    """Runs rank_products over every stored product."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(self, query: SearchQuery) -> List[Product]:
        if query.is_blank:
            return []

        result = await self.db.execute(select(Product).order_by(Product.id.asc()))
        products = result.scalars().all()

        ranked = rank_products(products, query)
        logger.debug(
            f"Product search term={query.term!r} scanned={len(products)} returned={len(ranked)}"
        )
        return ranked
