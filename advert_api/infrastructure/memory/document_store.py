"""
In-memory document store, used in tests and for local runs without a database.
"""
from dataclasses import replace

from advert_api.application.interfaces.document_store import DocumentStore
from advert_api.domain.entities.advert import Advert


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store. Records are copied on the way in and out."""

    def __init__(self) -> None:
        self._records: dict[str, Advert] = {}

    async def load(self, key: str) -> Advert | None:
        record = self._records.get(key)
        return replace(record) if record is not None else None

    async def save(self, advert: Advert) -> None:
        self._records[advert.id] = replace(advert)

    async def delete(self, advert: Advert) -> None:
        self._records.pop(advert.id, None)

    async def scan_all(self) -> list[Advert]:
        return [replace(record) for record in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)
