from __future__ import annotations

import types
import typing
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` class."""
    if not is_runtime_class(candidate):
        return False
    if hasattr(typing, "is_protocol"):
        return typing.is_protocol(candidate)
    return bool(getattr(candidate, "_is_protocol", False)) and candidate is not typing.Protocol


def is_instance_checkable(candidate: object) -> bool:
    """Return true when candidate works with ``isinstance``/``issubclass``.

    Protocols qualify only when decorated with ``@runtime_checkable``.
    """
    if not is_runtime_class(candidate):
        return False
    return not is_protocol(candidate) or bool(getattr(candidate, "_is_runtime_protocol", False))


def is_assignable(dependency_type: Any, candidate: Any) -> bool:
    """Return true when values of ``candidate`` can stand in for ``dependency_type``."""
    if candidate is dependency_type:
        return True
    return is_runtime_class(candidate) and issubclass(candidate, dependency_type)


def type_name(value: object) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


__all__ = ["is_assignable", "is_instance_checkable", "is_protocol", "is_runtime_class", "type_name"]
