"""Errors raised while resolving a dependency graph.

Wiring never raises: failures go to the ``on_exception`` handler (or are
logged). On-demand lookups raise directly.
"""

from __future__ import annotations

from autowirer import (
    AutoWirer,
    AutoWirerAmbiguousConstructorError,
    AutoWirerAmbiguousInstanceError,
    AutoWirerError,
)


class Left:
    def __init__(self, right: Right) -> None:
        self.right = right


class Right:
    def __init__(self, left: Left) -> None:
        self.left = left


class Storage:
    pass


class DiskStorage(Storage):
    pass


class MemoryStorage(Storage):
    pass


class Report:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage


def main() -> None:
    failures: list[AutoWirerError] = []
    AutoWirer().on_exception(failures.append).add_singleton(Left).add_singleton(Right).wire()
    print(f"cycle={type(failures[0]).__name__}")  # => cycle=AutoWirerCircularDependencyError
    print(failures[0])  # => Circular dependency detected: Left of parent Right.

    failures.clear()
    AutoWirer().on_exception(failures.append).add_singleton(Report).wire()
    print(failures[0])  # => Unknown dependency Storage required by Report.

    wirer = AutoWirer().add_singleton(DiskStorage).add_singleton(MemoryStorage)
    try:
        wirer.get_or_instantiate_class(Storage)
    except AutoWirerAmbiguousConstructorError as error:
        print(f"constructors={[c.__name__ for c in error.candidates]}")  # => constructors=['DiskStorage', 'MemoryStorage']

    wirer.add_existing_singleton(DiskStorage()).add_existing_singleton(MemoryStorage())
    try:
        wirer.find_instance(Storage)
    except AutoWirerAmbiguousInstanceError as error:
        print(f"instances={len(error.candidates)}")  # => instances=2


if __name__ == "__main__":
    main()
