from __future__ import annotations

from typing import Protocol

import pytest

from autowirer import AutoWirer, Cleanable
from autowirer.exceptions import (
    AutoWirerAmbiguousConstructorError,
    AutoWirerAmbiguousInstanceError,
    AutoWirerCircularDependencyError,
    AutoWirerInvalidConstructorShapeError,
    AutoWirerInvalidRegistrationError,
    AutoWirerUnknownDependencyError,
)


class Left:
    def __init__(self, right: Right) -> None:
        self.right = right


class Right:
    def __init__(self, left: Left) -> None:
        self.left = left


class SelfReferencing:
    def __init__(self, other: SelfReferencing) -> None:
        self.other = other


class Storage:
    pass


class DiskStorage(Storage):
    pass


class MemoryStorage(Storage):
    pass


class Archive:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage


class Leaf:
    pass


class Closeable(Protocol):
    def close(self) -> None: ...


class Connection:
    def close(self) -> None:
        pass


class UsesCloseable:
    def __init__(self, closeable: Closeable) -> None:
        self.closeable = closeable


def test_cycle_fails_and_produces_no_instance(wirer: AutoWirer, errors: list[Exception]) -> None:
    wirer.on_exception(errors.append).add_singleton(Left).add_singleton(Right).wire()

    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, AutoWirerCircularDependencyError)
    assert error.dependency_type is Left
    assert error.parent is Right
    assert "Circular dependency detected" in str(error)
    assert wirer.find_instance(Left) is None
    assert wirer.find_instance(Right) is None
    assert wirer.instances_count == 1


def test_self_dependency_is_circular(wirer: AutoWirer) -> None:
    wirer.add_singleton(SelfReferencing)

    with pytest.raises(AutoWirerCircularDependencyError) as exc_info:
        wirer.get_or_instantiate_class(SelfReferencing)

    assert exc_info.value.dependency_type is SelfReferencing
    assert exc_info.value.parent is SelfReferencing


def test_guard_is_released_after_failed_resolution(wirer: AutoWirer) -> None:
    wirer.add_singleton(Left).add_singleton(Right)

    with pytest.raises(AutoWirerCircularDependencyError):
        wirer.get_or_instantiate_class(Left)

    assert wirer._registry.constructing == set()


def test_two_matching_constructors_are_ambiguous(wirer: AutoWirer) -> None:
    wirer.add_singleton(DiskStorage).add_singleton(MemoryStorage).add_singleton(Archive)

    with pytest.raises(AutoWirerAmbiguousConstructorError) as exc_info:
        wirer.get_or_instantiate_class(Archive)

    assert exc_info.value.dependency_type is Storage
    assert set(exc_info.value.candidates) == {DiskStorage, MemoryStorage}
    assert "Multiple possible constructors" in str(exc_info.value)


def test_two_matching_instances_are_ambiguous(wirer: AutoWirer) -> None:
    disk = DiskStorage()
    memory = MemoryStorage()
    wirer.add_existing_singleton(disk).add_existing_singleton(memory)

    with pytest.raises(AutoWirerAmbiguousInstanceError) as exc_info:
        wirer.find_instance(Storage)

    assert exc_info.value.dependency_type is Storage
    assert exc_info.value.candidates == (disk, memory)

    wirer.add_singleton(Archive)
    with pytest.raises(AutoWirerAmbiguousInstanceError):
        wirer.get_or_instantiate_class(Archive)


def test_find_instance_returns_single_subclass_instance(wirer: AutoWirer) -> None:
    disk = DiskStorage()
    wirer.add_existing_singleton(disk)

    assert wirer.find_instance(Storage) is disk
    assert wirer.find_instance(DiskStorage) is disk
    assert wirer.find_instance(MemoryStorage) is None


def test_unknown_dependency_names_parent(wirer: AutoWirer) -> None:
    wirer.add_singleton(Archive)

    with pytest.raises(AutoWirerUnknownDependencyError) as exc_info:
        wirer.get_or_instantiate_class(Archive)

    assert exc_info.value.dependency_type is Storage
    assert exc_info.value.parent is Archive
    assert str(exc_info.value) == "Unknown dependency Storage required by Archive."


def test_failed_dependency_aborts_dependent(wirer: AutoWirer, errors: list[Exception]) -> None:
    def build_archive(leaf: Leaf, storage: Storage) -> Archive:
        return Archive(storage)

    wirer.on_exception(errors.append)
    wirer.add_singleton(Archive, build_archive, Leaf, Storage).add_singleton(Leaf)
    wirer.wire()

    assert isinstance(errors[0], AutoWirerUnknownDependencyError)
    assert wirer.find_instance(Archive) is None


def test_remember_encountered_blocks_repeated_construction(remembering_wirer: AutoWirer) -> None:
    remembering_wirer.add_singleton(Leaf)

    remembering_wirer.get_or_instantiate_class(Leaf, as_singleton=False)

    with pytest.raises(AutoWirerCircularDependencyError):
        remembering_wirer.get_or_instantiate_class(Leaf, as_singleton=False)


def test_remember_encountered_still_reuses_singletons(remembering_wirer: AutoWirer) -> None:
    remembering_wirer.add_singleton(Leaf)

    leaf = remembering_wirer.get_or_instantiate_class(Leaf)

    assert remembering_wirer.get_or_instantiate_class(Leaf) is leaf


def test_remember_encountered_is_reset_by_cleanup(remembering_wirer: AutoWirer) -> None:
    remembering_wirer.add_singleton(Leaf)
    remembering_wirer.get_or_instantiate_class(Leaf, as_singleton=False)

    remembering_wirer.cleanup()

    assert isinstance(remembering_wirer.get_or_instantiate_class(Leaf, as_singleton=False), Leaf)


def test_call_stack_guard_allows_repeated_construction(wirer: AutoWirer) -> None:
    wirer.add_singleton(Leaf)

    first = wirer.get_or_instantiate_class(Leaf, as_singleton=False)
    second = wirer.get_or_instantiate_class(Leaf, as_singleton=False)

    assert first is not second


def test_get_or_instantiate_class_rejects_abstract_type(wirer: AutoWirer) -> None:
    with pytest.raises(AutoWirerInvalidConstructorShapeError, match="abstract"):
        wirer.get_or_instantiate_class(Cleanable)


def test_plain_protocol_parameter_is_rejected_at_registration(wirer: AutoWirer) -> None:
    wirer.add_singleton(Connection, Connection)

    with pytest.raises(AutoWirerInvalidConstructorShapeError, match="not runtime checkable"):
        wirer.add_singleton(UsesCloseable)

    assert wirer.wire().find_instance(UsesCloseable) is None


def test_plain_protocol_dependency_is_rejected_at_registration(wirer: AutoWirer) -> None:
    with pytest.raises(AutoWirerInvalidRegistrationError, match="runtime checkable protocol"):
        wirer.add_singleton(UsesCloseable, UsesCloseable, Closeable)


def test_plain_protocol_listener_trigger_is_rejected(wirer: AutoWirer) -> None:
    with pytest.raises(AutoWirerInvalidRegistrationError, match="runtime checkable protocol"):
        wirer.add_instantiation_listener(Closeable, lambda _: None)


@pytest.mark.parametrize("requested", [list[int], "Leaf", Closeable])
def test_lookups_reject_keys_unusable_with_isinstance(wirer: AutoWirer, requested: object) -> None:
    with pytest.raises(AutoWirerInvalidRegistrationError, match="Requested type"):
        wirer.find_instance(requested)  # type: ignore[arg-type]
    with pytest.raises(AutoWirerInvalidRegistrationError, match="Requested type"):
        wirer.get_or_instantiate_class(requested)  # type: ignore[arg-type]
