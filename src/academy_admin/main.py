"""Main FastAPI application"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.academy_admin.api.endpoints import health, imports
from src.academy_admin.api.errors import http_exception_handler, validation_exception_handler
from src.academy_admin.config import settings
from src.academy_admin.database import engine
from src.academy_admin.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Academy Admin API in {settings.APP_ENV} environment")
    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down Academy Admin API")


app = FastAPI(
    title="Academy Admin - Participant Import Console",
    description="Admin API for importing participants, programs and modules from spreadsheets",
    version="0.1.0",
    lifespan=lifespan
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(health.router, tags=["Health"])
app.include_router(imports.router, prefix="/api", tags=["Import"])


@app.get("/")
def root():
    return {
        "message": "Academy Admin API",
        "environment": settings.APP_ENV,
        "docs": "/docs"
    }
