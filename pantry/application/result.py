"""Uniform result envelope returned by the moderation facade."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from pantry.domain.value import ErrorKind

T = TypeVar("T")


class ServiceError(BaseModel):
    """Typed failure: a kind callers can branch on and a readable message."""

    kind: ErrorKind
    message: str


class Result(BaseModel, Generic[T]):
    """Either a value (``ok``) or a ``ServiceError``, never both."""

    ok: bool
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(ok=False, error=ServiceError(kind=kind, message=message))
