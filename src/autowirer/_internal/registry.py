from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from autowirer._internal.constructors import ConstructorInfo
from autowirer._internal.type_checks import is_assignable
from autowirer.exceptions import (
    AutoWirerAmbiguousConstructorError,
    AutoWirerAmbiguousInstanceError,
    AutoWirerCircularDependencyError,
)


@dataclass(frozen=True, slots=True)
class SingletonRecord:
    """Pair a held singleton with the constructor info that built it."""

    instance: Any
    constructor_info: ConstructorInfo | None = None
    """None for instances supplied from outside the wirer."""


class InstanceRegistry:
    """Own every piece of mutable wiring state of a single wirer.

    Constructor registrations are unique per type key; adding one for an
    existing key replaces it. Records keep insertion order, which is the
    construction order and the reverse of the teardown order.
    """

    def __init__(self) -> None:
        self.constructors: dict[Any, ConstructorInfo] = {}
        self.records: list[SingletonRecord] = []
        self.listener_targets: list[Any] = []
        self.constructing: set[Any] = set()
        self.encountered: set[Any] = set()

    def register_constructor(self, dependency_type: Any, info: ConstructorInfo) -> None:
        self.constructors[dependency_type] = info

    def has_constructor_for(self, dependency_type: Any) -> bool:
        """Return true when any registered key is assignable to ``dependency_type``."""
        return any(is_assignable(dependency_type, key) for key in self.constructors)

    def find_constructor(self, dependency_type: Any) -> ConstructorInfo | None:
        """Return the single constructor whose key is assignable to ``dependency_type``.

        Raises:
            AutoWirerAmbiguousConstructorError: If several registered keys match.

        """
        matches = [key for key in self.constructors if is_assignable(dependency_type, key)]
        if len(matches) > 1:
            raise AutoWirerAmbiguousConstructorError(dependency_type, matches)
        if not matches:
            return None
        return self.constructors[matches[0]]

    def find_record(self, dependency_type: Any) -> SingletonRecord | None:
        """Return the single record whose instance is of ``dependency_type``.

        Raises:
            AutoWirerAmbiguousInstanceError: If several held instances match.

        """
        matches = [record for record in self.records if isinstance(record.instance, dependency_type)]
        if len(matches) > 1:
            raise AutoWirerAmbiguousInstanceError(
                dependency_type,
                [record.instance for record in matches],
            )
        return matches[0] if matches else None

    def add_record(self, instance: Any, info: ConstructorInfo | None = None) -> SingletonRecord:
        record = SingletonRecord(instance=instance, constructor_info=info)
        self.records.append(record)
        return record

    def drain_records(self) -> Iterator[SingletonRecord]:
        """Remove and yield records, newest first."""
        while self.records:
            yield self.records.pop()

    def enter_construction(
        self,
        dependency_type: Any,
        parent: Any | None,
        *,
        remember_encountered: bool,
    ) -> None:
        """Mark ``dependency_type`` as being constructed.

        Raises:
            AutoWirerCircularDependencyError: If the type is already guarded.
                With ``remember_encountered`` every type that ever entered
                construction counts as guarded.

        """
        guarded = self.encountered if remember_encountered else self.constructing
        if dependency_type in guarded:
            raise AutoWirerCircularDependencyError(dependency_type, parent)
        self.constructing.add(dependency_type)
        self.encountered.add(dependency_type)

    def exit_construction(self, dependency_type: Any) -> None:
        self.constructing.discard(dependency_type)

    def reset(self) -> None:
        """Forget registrations, guards and queued listener targets."""
        self.constructors.clear()
        self.listener_targets.clear()
        self.constructing.clear()
        self.encountered.clear()
