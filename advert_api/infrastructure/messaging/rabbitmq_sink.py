"""
RabbitMQ message sink.

Uses pika in a thread-pool executor so blocking I/O doesn't stall the
asyncio event loop. A new connection is opened per publish call; the
topic identifier becomes the routing key on a durable topic exchange.
"""
import asyncio
from functools import partial

import pika
import pika.exceptions
import structlog

from advert_api.application.interfaces.message_sink import MessageSink, MessageSinkError

logger = structlog.get_logger(__name__)


def _blocking_publish(rabbitmq_url: str, exchange: str, routing_key: str, body: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    try:
        channel = connection.channel()
        channel.exchange_declare(exchange=exchange, exchange_type="topic", durable=True)
        channel.basic_publish(
            exchange=exchange,
            routing_key=routing_key,
            body=body.encode(),
            properties=pika.BasicProperties(
                delivery_mode=pika.DeliveryMode.Persistent,
                content_type="application/json",
            ),
        )
    finally:
        connection.close()


def _blocking_ping(rabbitmq_url: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(rabbitmq_url))
    connection.close()


class RabbitMQMessageSink(MessageSink):
    """Publishes messages to a RabbitMQ topic exchange. Failures are raised, not swallowed."""

    def __init__(self, rabbitmq_url: str, exchange: str) -> None:
        self._url = rabbitmq_url
        self._exchange = exchange

    async def publish(self, topic: str, payload: str) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(_blocking_publish, self._url, self._exchange, topic, payload),
            )
        except (pika.exceptions.AMQPError, OSError) as exc:
            logger.error(
                "failed_to_publish_message",
                exchange=self._exchange,
                routing_key=topic,
                error=str(exc),
            )
            raise MessageSinkError(f"Failed to publish to {self._exchange}/{topic}: {exc}") from exc

        logger.debug("message_published", exchange=self._exchange, routing_key=topic)

    async def check_health(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(_blocking_ping, self._url))
        except (pika.exceptions.AMQPError, OSError) as exc:
            logger.error("rabbitmq_unreachable", error=str(exc))
            return False
        return True
