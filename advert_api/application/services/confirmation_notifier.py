import json

import structlog

from advert_api.application.interfaces.message_sink import MessageSink, MessageSinkError
from advert_api.domain.events.domain_events import AdvertConfirmedEvent
from advert_api.domain.results import AdvertError, Result

logger = structlog.get_logger(__name__)


def serialise_event(event: AdvertConfirmedEvent) -> str:
    return json.dumps(event.to_payload(), default=str)


class ConfirmationNotifier:
    """Tells subscribers that an advert became active. One publish per call, no retries."""

    def __init__(self, sink: MessageSink, topic: str) -> None:
        self._sink = sink
        self._topic = topic

    async def notify_activated(self, advert_id: str, title: str) -> Result[None]:
        event = AdvertConfirmedEvent(advert_id=advert_id, title=title)
        try:
            await self._sink.publish(self._topic, serialise_event(event))
        except MessageSinkError as exc:
            logger.error(
                "advert_notification_failed",
                advert_id=advert_id,
                topic=self._topic,
                error=str(exc),
            )
            return Result.failure(AdvertError.transient(str(exc), advert_id))

        logger.info(
            "advert_notification_published",
            advert_id=advert_id,
            topic=self._topic,
            event_id=str(event.event_id),
        )
        return Result.success(None)
