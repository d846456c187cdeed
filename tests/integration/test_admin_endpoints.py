from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from partsdesk.models.category import Category
from partsdesk.models.enquiry import Enquiry
from partsdesk.models.product import Product


@pytest.mark.anyio
async def test_missing_identity_is_401(app_with_db):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/admin/dashboard")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_non_admin_email_is_403(app_with_db):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get(
            "/api/admin/dashboard",
            headers={"x-partsdesk-email": "customer@example.com"},
        )
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_admin_email_is_case_insensitive(app_with_db, mock_db):
    mock_db.scalar.side_effect = [1, 1, 0, 0, 0]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get(
            "/api/admin/dashboard",
            headers={"x-partsdesk-email": "Admin@PartsDesk.test"},
        )
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_dashboard(app_with_db, mock_db, admin_headers):
    mock_db.scalar.side_effect = [12, 3, 40, 2, 980]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/admin/dashboard", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json() == {
        "total_products": 12,
        "total_categories": 3,
        "total_enquiries": 40,
        "low_stock_count": 2,
        "total_views": 980,
        "low_stock_threshold": 10,
    }


@pytest.mark.anyio
async def test_delete_category_in_use_is_409(app_with_db, mock_db, make_result, admin_headers):
    mock_db.execute.side_effect = [
        make_result(scalar=Category(id=1, name="Brakes", slug="brakes")),
        make_result(scalar=4),
    ]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.delete("/api/admin/categories/1", headers=admin_headers)

    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "REFERENTIAL_INTEGRITY"
    assert body["message"] == "Cannot delete category with existing products"
    mock_db.delete.assert_not_called()


@pytest.mark.anyio
async def test_delete_unused_category(app_with_db, mock_db, make_result, admin_headers):
    mock_db.execute.side_effect = [
        make_result(scalar=Category(id=1, name="Brakes", slug="brakes")),
        make_result(scalar=None),
    ]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.delete("/api/admin/categories/1", headers=admin_headers)

    assert resp.status_code == 204
    mock_db.delete.assert_awaited_once()


@pytest.mark.anyio
async def test_create_product_with_duplicate_slug_is_409(app_with_db, mock_db, make_result, admin_headers):
    existing = Product(
        id=8, title="Brake Pad", slug="brake-pad", category_id=1,
        price=Decimal("1000.00"), stock=5, views=0, images=[],
    )
    mock_db.execute.side_effect = [
        make_result(scalar=1),
        make_result(scalar=existing),
    ]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/admin/products", headers=admin_headers, json={
            "title": "Brake Pad", "slug": "brake-pad", "category_id": 1,
            "price": 1000, "stock": 5,
        })

    assert resp.status_code == 409
    assert resp.json()["error"] == "DUPLICATE_SLUG"


@pytest.mark.anyio
async def test_enquiries_include_live_products(app_with_db, mock_db, make_result, admin_headers):
    enquiry = Enquiry(
        id=1,
        items=[
            {"product_id": 1, "quantity": 2, "price": 1000.0},
            {"product_id": 99, "quantity": 1, "price": 300.0},
        ],
        name="Jane",
        whatsapp_message="*New Enquiry Request*",
    )
    product = Product(
        id=1, title="Brake Pad", slug="brake-pad", category_id=1,
        price=Decimal("1100.00"), stock=5, views=0, images=[],
    )
    mock_db.execute.side_effect = [
        make_result(rows=[enquiry]),
        make_result(rows=[product]),
    ]

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/admin/enquiries", headers=admin_headers)

    assert resp.status_code == 200
    items = resp.json()[0]["items"]
    # Snapshot price is kept even though the live product changed
    assert items[0]["price"] == 1000.0
    assert items[0]["product"]["price"] == 1100.0
    assert items[1]["product"] is None


@pytest.mark.anyio
async def test_concurrent_slug_insert_is_409(app_with_db, mock_db, make_result, admin_headers):
    mock_db.execute.return_value = make_result(scalar=None)
    mock_db.commit.side_effect = IntegrityError(
        "INSERT ...", {},
        Exception('duplicate key value violates unique constraint "ix_categories_slug"'),
    )

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/api/admin/categories",
            headers=admin_headers,
            json={"name": "Brakes", "slug": "brakes"},
        )

    assert resp.status_code == 409
    assert resp.json()["error"] == "DUPLICATE_SLUG"


@pytest.mark.anyio
@pytest.mark.parametrize("price", [12.345, 10_000_000_000])
async def test_create_product_price_must_fit_column(app_with_db, mock_db, admin_headers, price):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/admin/products", headers=admin_headers, json={
            "title": "Brake Pad", "slug": "brake-pad", "category_id": 1,
            "price": price, "stock": 5,
        })

    assert resp.status_code == 422
    mock_db.commit.assert_not_awaited()
