from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

T = TypeVar("T")


class IAutoWirer(ABC):
    """Interface for wirer-like objects handed out as dependencies.

    The wirer registers itself as a singleton, so any constructor may declare
    a parameter of this type to look up or build further singletons lazily.
    """

    @abstractmethod
    def find_instance(self, dependency_type: type[T]) -> T | None:
        """Return the single existing instance of ``dependency_type``, if any."""

    @abstractmethod
    def get_or_instantiate_class(self, dependency_type: type[T], as_singleton: bool = True) -> T:  # noqa: FBT001, FBT002
        """Return an instance of ``dependency_type``, constructing it when needed."""

    @property
    @abstractmethod
    def instances_count(self) -> int:
        """Return the number of singletons currently held."""
