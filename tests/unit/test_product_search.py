"""
Tests for product search filtering and ranking.
"""
from decimal import Decimal

import pytest

from partsdesk.models.product import Product
from partsdesk.services.product_search import ProductSearchService, SearchQuery, rank_products


def make_product(id, title, views=0, stock=5, price="1000.00", category_id=1, **kwargs):
    return Product(
        id=id,
        title=title,
        slug=title.lower().replace(" ", "-"),
        category_id=category_id,
        price=Decimal(price),
        stock=stock,
        views=views,
        images=[],
        **kwargs
    )


@pytest.fixture
def catalogue():
    return [
        make_product(1, "Brake Pad Toyota", brand="OEM", stock=5, views=10),
        make_product(2, "Clutch Kit", brand="Toyota Genuine", stock=0, views=50),
    ]


class TestRankProducts:
    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_term_returns_nothing(self, catalogue, term):
        assert rank_products(catalogue, SearchQuery(term=term)) == []

    def test_matches_title_and_brand(self, catalogue):
        results = rank_products(catalogue, SearchQuery(term="toyota"))
        assert {p.id for p in results} == {1, 2}

    def test_title_match_ranks_above_more_viewed_brand_match(self, catalogue):
        results = rank_products(catalogue, SearchQuery(term="toyota"))
        assert [p.title for p in results] == ["Brake Pad Toyota", "Clutch Kit"]

    def test_in_stock_only(self, catalogue):
        results = rank_products(catalogue, SearchQuery(term="toyota", in_stock_only=True))
        assert [p.id for p in results] == [1]

    def test_case_insensitive(self, catalogue):
        assert len(rank_products(catalogue, SearchQuery(term="TOYOTA"))) == 2

    def test_matches_description_oem_and_models(self):
        products = [
            make_product(1, "Filter A", description="Fits most saloon cars"),
            make_product(2, "Filter B", oem_number="04152-YZZA1"),
            make_product(3, "Filter C", compatible_models=["Corolla 2008", "Premio"]),
            make_product(4, "Filter D"),
        ]
        assert [p.id for p in rank_products(products, SearchQuery(term="saloon"))] == [1]
        assert [p.id for p in rank_products(products, SearchQuery(term="yzza"))] == [2]
        assert [p.id for p in rank_products(products, SearchQuery(term="premio"))] == [3]

    def test_views_order_within_tier(self):
        products = [
            make_product(1, "Shock Absorber", views=3),
            make_product(2, "Shock Absorber Rear", views=30),
            make_product(3, "Bushing", description="for shock mounts", views=100),
            make_product(4, "Shock Boot", views=3),
        ]
        results = rank_products(products, SearchQuery(term="shock"))
        # Equal views keep scan order
        assert [p.id for p in results] == [2, 1, 4, 3]

    def test_price_and_category_filters(self):
        products = [
            make_product(1, "Spark Plug", price="300.00", category_id=1),
            make_product(2, "Spark Plug Iridium", price="1200.00", category_id=1),
            make_product(3, "Spark Plug Set", price="900.00", category_id=2),
        ]
        query = SearchQuery(term="spark", min_price=500, max_price=1500)
        assert [p.id for p in rank_products(products, query)] == [2, 3]

        query = SearchQuery(term="spark", category_id=2)
        assert [p.id for p in rank_products(products, query)] == [3]

    def test_inverted_price_range_matches_nothing(self, catalogue):
        query = SearchQuery(term="toyota", min_price=2000, max_price=100)
        assert rank_products(catalogue, query) == []

    def test_limit(self):
        products = [make_product(i, f"Bolt {i}") for i in range(1, 31)]
        assert len(rank_products(products, SearchQuery(term="bolt"))) == 20
        assert len(rank_products(products, SearchQuery(term="bolt", limit=5))) == 5

    def test_nullable_fields_do_not_match(self):
        product = make_product(1, "Radiator Cap", description=None, brand=None, oem_number=None)
        assert rank_products([product], SearchQuery(term="toyota")) == []


class TestProductSearchService:
    @pytest.mark.asyncio
    async def test_blank_term_skips_query(self, mock_db):
        results = await ProductSearchService(mock_db).search(SearchQuery(term=" "))
        assert results == []
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_ranks_loaded_products(self, mock_db, make_result, catalogue):
        mock_db.execute.return_value = make_result(rows=catalogue)

        results = await ProductSearchService(mock_db).search(SearchQuery(term="toyota", in_stock_only=True))

        assert [p.id for p in results] == [1]
        mock_db.execute.assert_awaited_once()
