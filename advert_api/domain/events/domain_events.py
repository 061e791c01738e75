from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class AdvertConfirmedEvent(DomainEvent):
    """Published once an advert has been persisted as Active."""

    advert_id: str = ""
    title: str = ""

    @property
    def event_type(self) -> str:
        return "advert.confirmed"

    def to_payload(self) -> dict:  # type: ignore[type-arg]
        return {
            "event_type": self.event_type,
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "id": self.advert_id,
            "title": self.title,
        }
