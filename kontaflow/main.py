from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.api.error_handlers import register_exception_handlers
from kontaflow.api.v1 import api_router
from kontaflow.core.settings import settings
from kontaflow.database import get_async_db
from kontaflow.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: el esquema lo gestionan las migraciones de Alembic
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"{settings.PROJECT_NAME} v{settings.VERSION} starting ({settings.ENVIRONMENT})")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.PROJECT_DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    lifespan=lifespan
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS or ["*"],
    allow_credentials=bool(settings.BACKEND_CORS_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": f"{settings.API_PREFIX}/docs"
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_async_db)):
    try:
        await db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as error:
        logger.error(f"Health check failed: {error}")
        database = "disconnected"

    return {
        "status": "healthy" if database == "connected" else "unhealthy",
        "database": database,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }
