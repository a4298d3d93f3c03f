from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from autowirer._internal.type_checks import type_name as _type_name


class AutoWirerError(Exception):
    """Represent a base class for all AutoWirer-specific failures.

    Catch this type when you want to handle any AutoWirer error path without
    matching each concrete exception class individually. Exceptions raised by
    user factories, listeners and lifecycle hooks are never wrapped into it,
    except by ``AutoWirerCleanupError``.
    """


class AutoWirerInvalidRegistrationError(AutoWirerError):
    """Signal invalid arguments passed to a registration API.

    Raised by ``AutoWirer.add_singleton``, ``AutoWirer.add_existing_singleton``
    and ``AutoWirer.add_instantiation_listener`` when keys are not runtime
    classes, factories or callbacks are not callable, or dependencies are
    given without a factory.
    """


class AutoWirerInvalidConstructorShapeError(AutoWirerInvalidRegistrationError):
    """Signal that a class cannot be built from its constructor alone.

    Raised when a type registered without a factory is not an instantiable
    class, or when its ``__init__`` has parameters that cannot be mapped to
    dependency types (variadic or unannotated parameters, unresolvable
    annotations, annotations that are not classes).

    Typical fixes include annotating every required parameter with a class,
    giving non-injectable parameters a default, or registering an explicit
    factory.
    """

    def __init__(self, dependency_type: Any, reason: str) -> None:
        self.dependency_type = dependency_type
        self.reason = reason
        super().__init__(f"Cannot auto-wire {_type_name(dependency_type)}: {reason}.")


class AutoWirerAmbiguousConstructorError(AutoWirerError):
    """Signal that more than one registered constructor satisfies a type.

    Registered keys are matched by assignability, so registering both a base
    class and one of its subclasses makes a request for the base class
    ambiguous. Candidates are never chosen by priority.
    """

    def __init__(self, dependency_type: Any, candidates: Sequence[Any]) -> None:
        self.dependency_type = dependency_type
        self.candidates = tuple(candidates)
        names = ", ".join(_type_name(candidate) for candidate in self.candidates)
        super().__init__(
            f"Multiple possible constructors of type {_type_name(dependency_type)} ({names}).",
        )


class AutoWirerAmbiguousInstanceError(AutoWirerError):
    """Signal that more than one existing singleton is an instance of a type."""

    def __init__(self, dependency_type: Any, candidates: Sequence[object]) -> None:
        self.dependency_type = dependency_type
        self.candidates = tuple(candidates)
        names = ", ".join(_type_name(type(candidate)) for candidate in self.candidates)
        super().__init__(
            f"Found multiple possible instances of type {_type_name(dependency_type)} ({names}).",
        )


class AutoWirerUnknownDependencyError(AutoWirerError):
    """Signal that no registered constructor can produce a requested type.

    Typical fixes include registering the type (or one of its subclasses)
    with ``add_singleton`` or supplying an instance with
    ``add_existing_singleton``.
    """

    def __init__(self, dependency_type: Any, parent: Any | None = None) -> None:
        self.dependency_type = dependency_type
        self.parent = parent
        msg = f"Unknown dependency {_type_name(dependency_type)}"
        if parent is not None:
            msg += f" required by {_type_name(parent)}"
        super().__init__(msg + ".")


class AutoWirerCircularDependencyError(AutoWirerError):
    """Signal that a type was requested again while it is being constructed."""

    def __init__(self, dependency_type: Any, parent: Any | None = None) -> None:
        self.dependency_type = dependency_type
        self.parent = parent
        msg = f"Circular dependency detected: {_type_name(dependency_type)}"
        if parent is not None:
            msg += f" of parent {_type_name(parent)}"
        super().__init__(msg + ".")


class AutoWirerCleanupError(AutoWirerError):
    """Aggregate every failure raised while tearing singletons down.

    ``primary`` is the first failure (also set as ``__cause__``), and
    ``suppressed`` holds the remaining ones in the order they occurred.
    """

    def __init__(self, primary: Exception, suppressed: Sequence[Exception] = ()) -> None:
        self.primary = primary
        self.suppressed = tuple(suppressed)
        msg = f"Cleanup failed: {primary!r}"
        if self.suppressed:
            msg += f" (+{len(self.suppressed)} suppressed: "
            msg += ", ".join(repr(error) for error in self.suppressed) + ")"
        super().__init__(msg)

    @property
    def errors(self) -> tuple[Exception, ...]:
        """Return every collected failure, primary first."""
        return (self.primary, *self.suppressed)
