"""
No-op and recording message sinks, used in tests and when RabbitMQ is unavailable.
"""
from dataclasses import dataclass

import structlog

from advert_api.application.interfaces.message_sink import MessageSink

logger = structlog.get_logger(__name__)


class NoOpMessageSink(MessageSink):
    """Discards all messages. Useful for local development."""

    async def publish(self, topic: str, payload: str) -> None:
        logger.debug("noop_message_discarded", topic=topic)


@dataclass(frozen=True)
class PublishedMessage:
    topic: str
    payload: str


class RecordingMessageSink(MessageSink):
    """Keeps every published message in memory, in publish order."""

    def __init__(self) -> None:
        self.messages: list[PublishedMessage] = []

    async def publish(self, topic: str, payload: str) -> None:
        self.messages.append(PublishedMessage(topic=topic, payload=payload))
