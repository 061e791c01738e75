from dataclasses import dataclass

from advert_api.domain.enums.advert_status import AdvertStatus


# Mapping of valid transitions: from_status -> set of allowed to_statuses
VALID_TRANSITIONS: dict[AdvertStatus, frozenset[AdvertStatus]] = {
    AdvertStatus.PENDING: frozenset({AdvertStatus.ACTIVE, AdvertStatus.DELETED}),
    # Terminal states: no valid outgoing transitions
    AdvertStatus.ACTIVE: frozenset(),
    AdvertStatus.DELETED: frozenset(),
}


@dataclass(frozen=True)
class TransitionResult:
    success: bool
    from_status: AdvertStatus
    to_status: AdvertStatus
    redundant: bool = False
    error_message: str | None = None


class InvalidStateTransitionError(Exception):
    """Raised when an invalid status transition is attempted."""

    def __init__(self, from_status: AdvertStatus, to_status: AdvertStatus) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid transition from {from_status.value} to {to_status.value}. "
            f"Allowed transitions: {[s.value for s in VALID_TRANSITIONS.get(from_status, frozenset())]}"
        )


class AdvertStateMachine:
    """
    Validates status transitions for the advert lifecycle.

    Re-activating an already active advert is accepted as a redundant
    transition; every other move out of a terminal state is rejected.
    """

    def can_transition(self, from_status: AdvertStatus, to_status: AdvertStatus) -> bool:
        """Return True if transitioning from_status → to_status is permitted."""
        if self.is_redundant(from_status, to_status):
            return True
        if from_status.is_terminal:
            return False
        return to_status in VALID_TRANSITIONS.get(from_status, frozenset())

    def is_redundant(self, from_status: AdvertStatus, to_status: AdvertStatus) -> bool:
        return from_status == to_status == AdvertStatus.ACTIVE

    def check(self, from_status: AdvertStatus, to_status: AdvertStatus) -> TransitionResult:
        """Evaluate a transition without raising."""
        if not self.can_transition(from_status, to_status):
            return TransitionResult(
                success=False,
                from_status=from_status,
                to_status=to_status,
                error_message=str(InvalidStateTransitionError(from_status, to_status)),
            )
        return TransitionResult(
            success=True,
            from_status=from_status,
            to_status=to_status,
            redundant=self.is_redundant(from_status, to_status),
        )

    def validate_transition(self, from_status: AdvertStatus, to_status: AdvertStatus) -> None:
        """Raise InvalidStateTransitionError if the transition is not permitted."""
        if not self.can_transition(from_status, to_status):
            raise InvalidStateTransitionError(from_status, to_status)
