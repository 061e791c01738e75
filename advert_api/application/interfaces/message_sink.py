from abc import ABC, abstractmethod


class MessageSinkError(Exception):
    """Raised when a message could not be handed to the broker."""


class MessageSink(ABC):
    """Port for publishing serialised messages to a topic."""

    @abstractmethod
    async def publish(self, topic: str, payload: str) -> None:
        ...

    async def check_health(self) -> bool:
        return True
