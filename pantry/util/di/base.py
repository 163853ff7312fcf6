"""Provider base carrying the mock-swapping metadata."""

from typing import ClassVar, Literal

from dishka import Provider

# Components the test container can replace with in-memory fakes
Component = Literal["persistence"]


class ProviderBase(Provider):
    """dishka provider tagged with the component it implements.

    ``__mock_component__`` is set on component bases only; subclasses set
    ``__is_mock__`` to say which side of the swap they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
