from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Builder(ABC, Generic[T]):
    """Accumulates parts through chainable calls; build() returns a snapshot.

    A built value never changes when the builder is used again afterwards.
    """

    @abstractmethod
    def build(self) -> T:
        ...
