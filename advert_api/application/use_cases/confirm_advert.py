from dataclasses import dataclass

import structlog

from advert_api.application.services.advert_store import AdvertStore
from advert_api.application.services.confirmation_notifier import ConfirmationNotifier
from advert_api.domain.entities.advert import Activate, ConfirmationOutcome
from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.results import Result

logger = structlog.get_logger(__name__)


@dataclass
class ConfirmAdvertInput:
    advert_id: str
    outcome: ConfirmationOutcome


@dataclass
class ConfirmAdvertOutput:
    advert_id: str
    status: AdvertStatus
    notified: bool


class ConfirmAdvert:
    """
    Use case: apply a confirmation to the store, then announce activations.

    The store transition is never rolled back. If the notification fails
    after an activation was persisted, the advert stays ACTIVE and the
    TRANSIENT error is returned to the caller.
    """

    def __init__(self, store: AdvertStore, notifier: ConfirmationNotifier) -> None:
        self._store = store
        self._notifier = notifier

    async def execute(self, input_data: ConfirmAdvertInput) -> Result[ConfirmAdvertOutput]:
        confirmed = await self._store.confirm(input_data.advert_id, input_data.outcome)
        if not confirmed.ok:
            return Result.failure(confirmed.error)  # type: ignore[arg-type]

        if not isinstance(input_data.outcome, Activate):
            return Result.success(
                ConfirmAdvertOutput(
                    advert_id=input_data.advert_id,
                    status=AdvertStatus.DELETED,
                    notified=False,
                )
            )

        # Notify from the persisted record, not the in-flight copy.
        stored = await self._store.get_by_id(input_data.advert_id)
        if not stored.ok:
            return Result.failure(stored.error)  # type: ignore[arg-type]
        advert = stored.unwrap()

        notified = await self._notifier.notify_activated(advert.id, advert.title)
        if not notified.ok:
            logger.warning(
                "advert_active_without_notification",
                advert_id=advert.id,
            )
            return Result.failure(notified.error)  # type: ignore[arg-type]

        return Result.success(
            ConfirmAdvertOutput(advert_id=advert.id, status=advert.status, notified=True)
        )
