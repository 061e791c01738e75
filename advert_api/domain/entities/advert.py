from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.state_machine.advert_state_machine import AdvertStateMachine

_state_machine = AdvertStateMachine()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class AdvertSubmission:
    """Client-supplied advert content, before an identity or status exists."""

    title: str
    description: str = ""
    price: Decimal = Decimal("0")
    user_name: str | None = None


@dataclass(frozen=True)
class Activate:
    """Confirmation outcome: the uploaded asset at file_path is ready."""

    file_path: str


@dataclass(frozen=True)
class Reject:
    """Confirmation outcome: discard the advert."""


ConfirmationOutcome = Activate | Reject


@dataclass
class Advert:
    """
    Persisted advert record.

    Created in PENDING and mutated at most once more: activated with the
    path of its uploaded asset, or removed from the store on rejection.
    """

    # Identity
    id: str = field(default_factory=_new_id)

    # Descriptive fields (copied from the submission)
    title: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    user_name: str | None = None

    # State
    status: AdvertStatus = AdvertStatus.PENDING
    creation_date_time: datetime = field(default_factory=_utcnow)
    file_path: str | None = None

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create_pending(cls, submission: AdvertSubmission) -> "Advert":
        return cls(
            title=submission.title,
            description=submission.description,
            price=submission.price,
            user_name=submission.user_name,
        )

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def activate(self, file_path: str) -> None:
        """Move to ACTIVE, or overwrite the file path of an already active advert."""
        _state_machine.validate_transition(self.status, AdvertStatus.ACTIVE)
        self.file_path = file_path
        self.status = AdvertStatus.ACTIVE

    def mark_deleted(self) -> None:
        _state_machine.validate_transition(self.status, AdvertStatus.DELETED)
        self.status = AdvertStatus.DELETED
