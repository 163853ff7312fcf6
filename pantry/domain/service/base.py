"""Base service class for domain services."""

from typing import Any, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def evolve(model: M, **changes: Any) -> M:
    """Return a validated copy of an immutable model with fields replaced.

    Unlike ``model_copy(update=...)`` this re-runs validators, so model
    invariants hold on the copy.
    """
    return type(model).model_validate({**model.model_dump(), **changes})
