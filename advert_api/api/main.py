"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI

from advert_api.api.dependencies import build_document_store, build_message_sink
from advert_api.api.routes import adverts, health
from advert_api.config import settings
from advert_api.infrastructure.database.document_store import SqlAlchemyDocumentStore
from advert_api.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level, json_output=settings.log_json)

    document_store = build_document_store(settings)
    if isinstance(document_store, SqlAlchemyDocumentStore) and settings.create_tables_on_startup:
        await document_store.create_tables()

    app.state.document_store = document_store
    app.state.message_sink = build_message_sink(settings)
    logger.info(
        "advert_api_starting",
        document_store=settings.document_store_backend,
        message_sink=settings.message_sink_backend,
    )
    yield
    logger.info("advert_api_stopping")
    if isinstance(document_store, SqlAlchemyDocumentStore):
        await document_store.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Advert API",
        description="Lifecycle service for advert records.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(adverts.router)

    return app


app = create_app()
