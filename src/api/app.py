"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080 --workers 4
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.constants import SERVICE_NAME
from config.settings import get_settings
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    The Supabase client is created lazily on the first catalog request,
    so startup only configures logging.
    """
    settings = get_settings()

    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
        service=SERVICE_NAME,
    )

    logger.info(
        "Starting storefront API",
        environment=settings.environment,
        port=settings.port,
        sample_data_fallback=settings.sample_data_fallback,
    )

    yield

    logger.info("Shutting down storefront API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Storefront Catalog API",
        description="""
        Catalog browsing for the apparel storefront.

        ## Main Endpoints

        - `/api/products` - Category listings with subcategory filter chips
        - `/api/products/{slug}` - Product page with related products
        - `/api/products/best-selling` - Hot-sale row
        - `/api/products/recommended` - Recommendations
        - `/api/categories` - Category navigation
        - `/api/cart/items` - Add to cart (requires login)

        ## Health Checks

        - `/health`, `/health/detailed`, `/ready`, `/live`
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router)

    from api.routes.categories import router as categories_router
    app.include_router(categories_router)

    from api.routes.products import router as products_router
    app.include_router(products_router)

    from api.routes.cart import router as cart_router
    app.include_router(cart_router)

    return app


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()
