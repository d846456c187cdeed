from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from partsdesk.models.blog_post import BlogPost
from partsdesk.models.category import Category
from partsdesk.models.product import Product


def make_product(id, title, brand=None, stock=5, views=0):
    return Product(
        id=id, title=title, slug=title.lower().replace(" ", "-"), category_id=1,
        price=Decimal("1000.00"), stock=stock, views=views, images=[], brand=brand,
        featured=False,
    )


@pytest.mark.anyio
async def test_root_endpoint_basic_response(app_with_db):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/")
    assert resp.status_code == 200
    body = resp.json()
    assert body.get("message") == "PartsDesk API"
    assert body.get("status") == "operational"


@pytest.mark.anyio
async def test_list_categories(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(rows=[
        Category(id=2, name="Filters", slug="filters"),
        Category(id=1, name="Brakes", slug="brakes"),
    ])

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/categories")

    assert resp.status_code == 200
    assert [c["slug"] for c in resp.json()] == ["filters", "brakes"]


@pytest.mark.anyio
async def test_unknown_product_slug_is_404(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(scalar=None)

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/products/no-such-part")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Product not found"


@pytest.mark.anyio
async def test_search_ranks_title_matches_first(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(rows=[
        make_product(1, "Brake Pad Toyota", brand="OEM", stock=5, views=10),
        make_product(2, "Clutch Kit", brand="Toyota Genuine", stock=0, views=50),
    ])

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/products/search", params={"q": "toyota"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [p["title"] for p in body["products"]] == ["Brake Pad Toyota", "Clutch Kit"]


@pytest.mark.anyio
async def test_search_blank_term(app_with_db, mock_db):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/products/search", params={"q": "   "})

    assert resp.status_code == 200
    assert resp.json()["products"] == []
    mock_db.execute.assert_not_called()


@pytest.mark.anyio
async def test_record_product_view(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(scalar=make_product(3, "Spark Plug", views=7))

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/products/3/views")

    assert resp.status_code == 200
    assert resp.json() == {"id": 3, "views": 8}


@pytest.mark.anyio
async def test_record_view_for_missing_product(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(scalar=None)

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/products/404/views")

    assert resp.status_code == 404
    assert resp.json()["error"] == "NOT_FOUND"


@pytest.mark.anyio
async def test_create_enquiry(app_with_db, mock_db):
    async def assign_id(enquiry):
        enquiry.id = 21

    mock_db.refresh.side_effect = assign_id
    payload = {
        "items": [{"product_id": 1, "quantity": 2, "price": 1000}],
        "name": "Jane",
        "phone": "",
        "whatsapp_message": "*New Enquiry Request*",
    }

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/enquiries", json=payload)

    assert resp.status_code == 201
    assert resp.json() == {"id": 21}
    stored = mock_db.add.call_args[0][0]
    assert stored.phone is None
    assert stored.location is None


@pytest.mark.anyio
async def test_create_enquiry_requires_items(app_with_db, mock_db):
    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/enquiries", json={"items": [], "whatsapp_message": "x"})

    assert resp.status_code == 422
    mock_db.add.assert_not_called()


@pytest.mark.anyio
async def test_draft_blog_post_is_not_public(app_with_db, mock_db, make_result):
    mock_db.execute.return_value = make_result(scalar=BlogPost(
        id=1, title="Draft", slug="draft", content="Soon.", published=False,
    ))

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/api/blog/draft")

    assert resp.status_code == 404


@pytest.mark.anyio
async def test_contact_form(app_with_db, mock_db):
    async def assign_id(contact):
        contact.id = 5

    mock_db.refresh.side_effect = assign_id

    transport = ASGITransport(app=app_with_db)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/api/contact", json={
            "name": "Jane",
            "email": "jane@example.com",
            "subject": "Stock",
            "message": "Do you have Corolla brake pads?",
        })

    assert resp.status_code == 201
    assert resp.json()["id"] == 5
