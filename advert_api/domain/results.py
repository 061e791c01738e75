"""Typed outcomes for the advert service boundary.

Store and notifier operations return a Result instead of raising, so a
caller has to look at the error kind before it can reach the value.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    TRANSIENT = "transient"

    @property
    def retryable(self) -> bool:
        return self is ErrorKind.TRANSIENT


@dataclass(frozen=True)
class AdvertError:
    kind: ErrorKind
    message: str
    advert_id: str | None = None

    @classmethod
    def not_found(cls, advert_id: str) -> "AdvertError":
        return cls(ErrorKind.NOT_FOUND, f"A record with Id={advert_id} was not found", advert_id)

    @classmethod
    def invalid(cls, message: str, advert_id: str | None = None) -> "AdvertError":
        return cls(ErrorKind.INVALID, message, advert_id)

    @classmethod
    def transient(cls, message: str, advert_id: str | None = None) -> "AdvertError":
        return cls(ErrorKind.TRANSIENT, message, advert_id)


class AdvertOperationError(Exception):
    """Raised by Result.unwrap() when the result holds an error."""

    def __init__(self, error: AdvertError) -> None:
        self.error = error
        super().__init__(f"{error.kind.value}: {error.message}")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: AdvertError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AdvertError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise AdvertOperationError(self.error)
        return self.value  # type: ignore[return-value]
