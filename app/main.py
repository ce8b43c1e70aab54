"""
Sur Innova Logistica API - Main application entry point.
FastAPI backend for the inventory, dispatch orders and user administration
dashboard of Sur Innova.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
from app.middleware.error_handler import register_exception_handlers

# Import routers
from app.features.auth.router import router as auth_router
from app.features.products.router import router as products_router
from app.features.inventory.router import router as inventory_router
from app.features.orders.router import router as orders_router
from app.features.users.router import router as users_router
from app.features.dashboard.router import router as dashboard_router

from app.features.container import StoreContainer
from app.infrastructure.dataservice import DataServiceManager
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    manager: DataServiceManager = app.state.manager
    stores: StoreContainer = app.state.stores

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if manager.is_configured():
        result = stores.auth.check_auth()
        if not result:
            logger.warning(f"Could not resolve session at startup: {result.detail}")
    else:
        stores.auth.loading = False
        logger.warning("Data service not configured; set DATA_SERVICE_URL and DATA_SERVICE_ANON_KEY")

    yield

    logger.info("Shutting down application")
    manager.close()


def create_app(manager: Optional[DataServiceManager] = None) -> FastAPI:
    """
    Build the application with its own stores.

    Args:
        manager: Data service manager; one is created from settings if omitted

    Returns:
        Configured FastAPI application
    """
    manager = manager or DataServiceManager(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API for inventory, dispatch orders and users of the Sur Innova dashboard",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Store config in app state for error handler
    app.state.config = settings
    app.state.manager = manager
    app.state.stores = StoreContainer(manager.get_client(), settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(products_router, prefix="/api")
    app.include_router(inventory_router, prefix="/api")
    app.include_router(orders_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(dashboard_router, prefix="/api")

    @app.get("/", tags=["Root"])
    def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "docs": "/docs",
            "health": "/health",
            "api_prefix": "/api"
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Reports whether the data service is configured and a session is open.
        """
        connection_status = app.state.manager.get_connection_status()
        return HealthResponse(
            status="healthy" if connection_status["configured"] else "degraded",
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            data_service_configured=connection_status["configured"],
            authenticated=app.state.stores.auth.is_authenticated
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development"
    )
