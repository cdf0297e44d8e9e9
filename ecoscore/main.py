from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from ecoscore.core.config import settings
from ecoscore.core.database import engine, Base
from ecoscore.middleware.error_handler import register_exception_handlers
from ecoscore.middleware.logging import configure_logging
from ecoscore.services.open_food_facts import OpenFoodFactsClient
import ecoscore.models  # noqa: F401  enregistre toutes les tables

from ecoscore.api.v1 import api_router

logger = logging.getLogger("ecoscore")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Starting EcoScore Finder API")

    Base.metadata.create_all(bind=engine)

    app.state.product_source = OpenFoodFactsClient.from_settings()

    yield

    logger.info("Shutting down EcoScore Finder API")
    await app.state.product_source.aclose()


app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


app.include_router(api_router, prefix="/api/v1")

register_exception_handlers(app)


@app.get("/")
async def root():
    return {"message": settings.APP_NAME, "version": settings.VERSION, "docs": "/docs"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
