from enum import Enum


class AdvertStatus(str, Enum):
    """All possible states of an advert record."""

    PENDING = "Pending"
    ACTIVE = "Active"
    DELETED = "Deleted"

    @property
    def is_terminal(self) -> bool:
        """Terminal states cannot be transitioned out of."""
        return self in (AdvertStatus.ACTIVE, AdvertStatus.DELETED)
