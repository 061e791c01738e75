from collections.abc import Iterable

import structlog

from advert_api.application.interfaces.document_store import DocumentStore, DocumentStoreError
from advert_api.domain.entities.advert import (
    Activate,
    Advert,
    AdvertSubmission,
    ConfirmationOutcome,
)
from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.results import AdvertError, Result
from advert_api.domain.state_machine.advert_state_machine import AdvertStateMachine
from advert_api.domain.validation import (
    DEFAULT_REQUIRED_FIELDS,
    validate_outcome,
    validate_submission,
)

logger = structlog.get_logger(__name__)
_state_machine = AdvertStateMachine()


class AdvertStore:
    """
    Single writer for advert records.

    Enforces the Pending → Active / deleted lifecycle on top of a generic
    document store. Backend failures come back as TRANSIENT results and
    are never retried here.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        required_fields: Iterable[str] = DEFAULT_REQUIRED_FIELDS,
    ) -> None:
        self._documents = document_store
        self._required_fields = frozenset(required_fields)

    async def create(self, submission: AdvertSubmission) -> Result[str]:
        problems = validate_submission(submission, self._required_fields)
        if problems:
            logger.info("advert_submission_rejected", problems=problems)
            return Result.failure(AdvertError.invalid("; ".join(problems)))

        advert = Advert.create_pending(submission)
        try:
            await self._documents.save(advert)
        except DocumentStoreError as exc:
            logger.error("advert_create_failed", advert_id=advert.id, error=str(exc))
            return Result.failure(AdvertError.transient(str(exc), advert.id))

        logger.info("advert_created", advert_id=advert.id, title=advert.title)
        return Result.success(advert.id)

    async def confirm(self, advert_id: str, outcome: ConfirmationOutcome) -> Result[Advert]:
        problems = validate_outcome(outcome)
        if problems:
            return Result.failure(AdvertError.invalid("; ".join(problems), advert_id))

        try:
            advert = await self._documents.load(advert_id)
            if advert is None:
                return Result.failure(AdvertError.not_found(advert_id))

            from_status = advert.status
            target = AdvertStatus.ACTIVE if isinstance(outcome, Activate) else AdvertStatus.DELETED
            transition = _state_machine.check(from_status, target)
            if not transition.success:
                logger.info(
                    "advert_confirm_refused",
                    advert_id=advert_id,
                    from_status=from_status.value,
                    to_status=target.value,
                )
                return Result.failure(AdvertError.invalid(transition.error_message or "", advert_id))
            if transition.redundant:
                logger.info(
                    "advert_reactivated",
                    advert_id=advert_id,
                    previous_file_path=advert.file_path,
                )

            if isinstance(outcome, Activate):
                advert.activate(outcome.file_path)
                await self._documents.save(advert)
            else:
                advert.mark_deleted()
                await self._documents.delete(advert)
        except DocumentStoreError as exc:
            logger.error("advert_confirm_failed", advert_id=advert_id, error=str(exc))
            return Result.failure(AdvertError.transient(str(exc), advert_id))

        logger.info(
            "advert_confirmed",
            advert_id=advert_id,
            from_status=from_status.value,
            to_status=advert.status.value,
        )
        return Result.success(advert)

    async def get_by_id(self, advert_id: str) -> Result[Advert]:
        try:
            advert = await self._documents.load(advert_id)
        except DocumentStoreError as exc:
            logger.error("advert_load_failed", advert_id=advert_id, error=str(exc))
            return Result.failure(AdvertError.transient(str(exc), advert_id))

        if advert is None:
            return Result.failure(AdvertError.not_found(advert_id))
        return Result.success(advert)

    async def get_all(self) -> Result[list[Advert]]:
        # Full scan of the collection; swap for an index-backed query at scale.
        try:
            adverts = list(await self._documents.scan_all())
        except DocumentStoreError as exc:
            logger.error("advert_scan_failed", error=str(exc))
            return Result.failure(AdvertError.transient(str(exc)))

        return Result.success(adverts)

    async def check_health(self) -> bool:
        try:
            return await self._documents.check_health()
        except DocumentStoreError as exc:
            logger.error("advert_store_health_check_failed", error=str(exc))
            return False
