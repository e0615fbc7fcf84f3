import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from property_authz.core.database import prisma
from property_authz.core.logging_config import configure_logging
from property_authz.core.settings import settings
from property_authz.domains.memberships.repository import PrismaMembershipStore
from property_authz.domains.organizations.repository import PrismaOrganizationStore
from property_authz.domains.permissions.routes import router as permissions_router
from property_authz.domains.resources.repository import PrismaResourceScopeStore
from property_authz.shared.permissions.stores import AuthorizationStores

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    await prisma.connect()
    app.state.authorization_stores = AuthorizationStores(
        memberships=PrismaMembershipStore(prisma),
        organizations=PrismaOrganizationStore(prisma),
        scopes=PrismaResourceScopeStore(prisma),
    )
    logger.info("Authorization stores ready")
    yield
    # Shutdown
    await prisma.disconnect()


app = FastAPI(
    title="Property Authorization API",
    description="Multi-tenant authorization for property management",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(permissions_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
