"""
FastAPI dependency injection wiring.

Collaborators are built once in the application lifespan and kept on
app.state; each dependency function hands out a fully-constructed object
with those collaborators injected, keeping the route handlers thin.
"""
from fastapi import Depends, Request

from advert_api.application.interfaces.document_store import DocumentStore
from advert_api.application.interfaces.message_sink import MessageSink
from advert_api.application.services.advert_store import AdvertStore
from advert_api.application.services.confirmation_notifier import ConfirmationNotifier
from advert_api.application.use_cases.confirm_advert import ConfirmAdvert
from advert_api.config import Settings, settings
from advert_api.infrastructure.database.document_store import SqlAlchemyDocumentStore
from advert_api.infrastructure.memory.document_store import InMemoryDocumentStore
from advert_api.infrastructure.messaging.noop_sink import NoOpMessageSink
from advert_api.infrastructure.messaging.rabbitmq_sink import RabbitMQMessageSink


# ---- Infrastructure factories ----------------------------------------------

def build_document_store(config: Settings) -> DocumentStore:
    if config.document_store_backend == "memory":
        return InMemoryDocumentStore()
    if config.document_store_backend == "sqlalchemy":
        return SqlAlchemyDocumentStore.from_url(config.database_url)
    raise ValueError(f"Unknown document store backend: {config.document_store_backend!r}")


def build_message_sink(config: Settings) -> MessageSink:
    if config.message_sink_backend == "noop":
        return NoOpMessageSink()
    if config.message_sink_backend == "rabbitmq":
        return RabbitMQMessageSink(config.rabbitmq_url, config.events_exchange)
    raise ValueError(f"Unknown message sink backend: {config.message_sink_backend!r}")


# ---- Low-level dependencies ------------------------------------------------

def get_settings() -> Settings:
    return settings


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def get_message_sink(request: Request) -> MessageSink:
    return request.app.state.message_sink


# ---- Service dependencies --------------------------------------------------

def get_advert_store(
    document_store: DocumentStore = Depends(get_document_store),
    config: Settings = Depends(get_settings),
) -> AdvertStore:
    return AdvertStore(document_store, required_fields=config.advert_required_fields)


def get_confirmation_notifier(
    sink: MessageSink = Depends(get_message_sink),
    config: Settings = Depends(get_settings),
) -> ConfirmationNotifier:
    return ConfirmationNotifier(sink, topic=config.advert_confirmed_topic)


def get_confirm_advert_use_case(
    store: AdvertStore = Depends(get_advert_store),
    notifier: ConfirmationNotifier = Depends(get_confirmation_notifier),
) -> ConfirmAdvert:
    return ConfirmAdvert(store, notifier)
