from decimal import Decimal

import structlog
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from advert_api.application.interfaces.document_store import DocumentStore, DocumentStoreError
from advert_api.domain.entities.advert import Advert
from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.infrastructure.database.connection import (
    build_engine,
    build_session_factory,
    create_tables,
)
from advert_api.infrastructure.database.models import AdvertModel

logger = structlog.get_logger(__name__)

# asyncpg lets socket-level failures (refused connection, unknown host) through unwrapped.
_BACKEND_ERRORS = (SQLAlchemyError, OSError)


def _to_domain(model: AdvertModel) -> Advert:
    return Advert(
        id=model.id,
        title=model.title,
        description=model.description,
        price=Decimal(str(model.price)),
        user_name=model.user_name,
        status=AdvertStatus(model.status),
        creation_date_time=model.creation_date_time,
        file_path=model.file_path,
    )


def _apply(model: AdvertModel, advert: Advert) -> None:
    model.title = advert.title
    model.description = advert.description
    model.price = advert.price
    model.user_name = advert.user_name
    model.status = advert.status
    model.creation_date_time = advert.creation_date_time
    model.file_path = advert.file_path


class SqlAlchemyDocumentStore(DocumentStore):
    """
    Advert documents stored as rows of the `adverts` table, keyed by id.

    Every call runs in its own session and commits before returning, so a
    successful save is durable by the time the caller sees it.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "SqlAlchemyDocumentStore":
        engine = build_engine(database_url)
        return cls(build_session_factory(engine), engine=engine)

    async def create_tables(self) -> None:
        if self._engine is not None:
            await create_tables(self._engine)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def load(self, key: str) -> Advert | None:
        try:
            async with self._session_factory() as session:
                model = await session.get(AdvertModel, key)
                return _to_domain(model) if model is not None else None
        except _BACKEND_ERRORS as exc:
            raise DocumentStoreError(f"Failed to load advert {key}: {exc}") from exc

    async def save(self, advert: Advert) -> None:
        try:
            async with self._session_factory() as session:
                model = await session.get(AdvertModel, advert.id)
                if model is None:
                    model = AdvertModel(id=advert.id)
                    session.add(model)
                _apply(model, advert)
                await session.commit()
        except _BACKEND_ERRORS as exc:
            raise DocumentStoreError(f"Failed to save advert {advert.id}: {exc}") from exc

    async def delete(self, advert: Advert) -> None:
        try:
            async with self._session_factory() as session:
                model = await session.get(AdvertModel, advert.id)
                if model is not None:
                    await session.delete(model)
                    await session.commit()
        except _BACKEND_ERRORS as exc:
            raise DocumentStoreError(f"Failed to delete advert {advert.id}: {exc}") from exc

    async def scan_all(self) -> list[Advert]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(AdvertModel))
                return [_to_domain(m) for m in result.scalars().all()]
        except _BACKEND_ERRORS as exc:
            raise DocumentStoreError(f"Failed to scan adverts: {exc}") from exc

    async def check_health(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except _BACKEND_ERRORS as exc:
            logger.error("document_store_unreachable", error=str(exc))
            raise DocumentStoreError(f"Error while checking connection with the adverts table: {exc}") from exc
        return True
