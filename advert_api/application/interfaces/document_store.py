from abc import ABC, abstractmethod

from advert_api.domain.entities.advert import Advert


class DocumentStoreError(Exception):
    """Raised when the backing store is unreachable or a call against it fails."""


class DocumentStore(ABC):
    """Port for key-addressed persistence of Advert records."""

    @abstractmethod
    async def load(self, key: str) -> Advert | None:
        ...

    @abstractmethod
    async def save(self, advert: Advert) -> None:
        """Insert or overwrite the record stored under advert.id."""
        ...

    @abstractmethod
    async def delete(self, advert: Advert) -> None:
        ...

    @abstractmethod
    async def scan_all(self) -> list[Advert]:
        """Return every stored record. Full scan; no ordering guarantee."""
        ...

    async def check_health(self) -> bool:
        return True
