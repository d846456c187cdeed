"""
PartsDesk Backend
FastAPI application entry point

- Rate limiting with SlowAPI
- Structured domain errors (PartsDeskError handler)
- Error sanitization middleware
- Health endpoint with DB ping
"""
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from partsdesk.api.routes import products, categories, enquiries, blog, contact
from partsdesk.api.routes import admin, admin_catalog, admin_blog
from partsdesk.core.config import settings
from partsdesk.core.database import AsyncSessionLocal, engine, init_models
from partsdesk.core.error_handler import ErrorSanitizationMiddleware, partsdesk_error_handler
from partsdesk.core.exceptions import PartsDeskError
from partsdesk.core.rate_limit import limiter, rate_limit_exceeded_handler

# Import models to register them with SQLAlchemy
from partsdesk.models import Category, Product, Enquiry, BlogPost, ContactMessage  # noqa: F401

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup, dispose the pool on shutdown."""
    await init_models()
    logger.info(f"{settings.APP_NAME} started (environment={settings.ENVIRONMENT})")

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    lifespan=lifespan,
    title=f"{settings.APP_NAME} API",
    description="""
## PartsDesk Auto Parts API

Catalogue and enquiry backend for an auto-parts shop.

### Features
- **Catalogue**: Browse categories and products, search by title, brand, OEM number or model
- **Enquiries**: Customers submit a cart as a non-binding enquiry, then continue on WhatsApp
- **Blog**: Published articles
- **Admin**: Catalogue, blog and contact inbox management plus a dashboard

### Authentication
Admin endpoints trust the `x-partsdesk-email` header set by the identity proxy.
The email must be on the `ADMIN_EMAILS` allowlist.

### Rate Limits
- Contact form: 5 requests/minute
- General: 100 requests/minute
    """,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Categories", "description": "Product categories"},
        {"name": "Products", "description": "Product catalogue and search"},
        {"name": "Enquiries", "description": "Enquiry submission"},
        {"name": "Blog", "description": "Published blog posts"},
        {"name": "Contact", "description": "Contact form"},
    ],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Domain errors -> structured JSON
app.add_exception_handler(PartsDeskError, partsdesk_error_handler)

# Error sanitization (catches unhandled exceptions)
app.add_middleware(ErrorSanitizationMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(enquiries.router, prefix="/api/enquiries", tags=["Enquiries"])
app.include_router(blog.router, prefix="/api/blog", tags=["Blog"])
app.include_router(contact.router, prefix="/api/contact", tags=["Contact"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(admin_catalog.router, prefix="/api/admin", tags=["Admin - Catalogue"])
app.include_router(admin_blog.router, prefix="/api/admin/blog", tags=["Admin - Blog"])


@app.get("/", tags=["Health"])
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.API_VERSION,
        "status": "operational"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check with an actual DB ping.
    Returns 503 if database is unreachable.
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    try:
        async with AsyncSessionLocal() as db:
            await db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        health_status["database"] = f"error: {type(e).__name__}"
        health_status["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "partsdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
